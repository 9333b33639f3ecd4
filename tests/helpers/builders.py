from __future__ import annotations

from typing import Iterable, List, Optional

from vetogov.core.params.models import MintSettings, TokenSettings, VotingSettings

ALICE = "0x" + "11" * 20
BOB = "0x" + "22" * 20
CAROL = "0x" + "33" * 20
AUTHORITY = "0x" + "da" * 20
NO_CODE = "0x" + "ee" * 20

# Address used by the golden fixture (external token, reused).
FIXTURE_TOKEN = "0x02e2a4c6d8f0b1c3e5a7d9f1b3c5e7a9c1d3e70b"


def voting(min_veto_ratio: int = 100_000, min_duration: int = 432_000, min_proposer_voting_power: int = 0) -> VotingSettings:
    return VotingSettings(
        min_veto_ratio=min_veto_ratio,
        min_duration=min_duration,
        min_proposer_voting_power=min_proposer_voting_power,
    )


def external_token(addr: str = FIXTURE_TOKEN, name: str = "Wrapped Token", symbol: str = "wTK") -> TokenSettings:
    return TokenSettings(addr=addr, name=name, symbol=symbol)


def new_token(name: str = "Veto Token", symbol: str = "VETO") -> TokenSettings:
    return TokenSettings(name=name, symbol=symbol)


def mint(receivers: Optional[Iterable[str]] = None, amounts: Optional[Iterable[int]] = None) -> MintSettings:
    return MintSettings(receivers=list(receivers or []), amounts=list(amounts or []))


def word(hex_value: str) -> str:
    """Left-padded 32-byte word, as hex."""
    return hex_value.rjust(64, "0")


def text_word(hex_value: str) -> str:
    """Right-padded 32-byte word, as hex (string payloads)."""
    return hex_value.ljust(64, "0")


def words(data: bytes) -> List[str]:
    h = data.hex()
    return [h[i : i + 64] for i in range(0, len(h), 64)]
