from __future__ import annotations

from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vetogov.core.addresses import ZERO_ADDRESS, is_zero_address, normalize_address

# minVetoRatio is expressed in parts per million.
RATIO_BASE = 1_000_000

UINT32_MAX = (1 << 32) - 1
UINT64_MAX = (1 << 64) - 1
UINT256_MAX = (1 << 256) - 1


def _check_width(v: int, max_value: int, name: str) -> int:
    if v < 0 or v > max_value:
        raise ValueError(f"{name} out of range: {v}")
    return v


class VotingSettings(BaseModel):
    """
    Veto settings handed to the module initializer. Only word-width bounds are
    checked here; the module owns any semantic range checks.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    min_veto_ratio: int
    min_duration: int
    min_proposer_voting_power: int = 0

    @field_validator("min_veto_ratio")
    @classmethod
    def _uint32(cls, v: int) -> int:
        return _check_width(v, UINT32_MAX, "uint32")

    @field_validator("min_duration")
    @classmethod
    def _uint64(cls, v: int) -> int:
        return _check_width(v, UINT64_MAX, "uint64")

    @field_validator("min_proposer_voting_power")
    @classmethod
    def _uint256(cls, v: int) -> int:
        return _check_width(v, UINT256_MAX, "uint256")

    def veto_ratio_pct(self) -> float:
        return self.min_veto_ratio * 100.0 / RATIO_BASE


class TokenSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    addr: str = ZERO_ADDRESS  # zero address means "mint a new token"
    name: str = ""
    symbol: str = ""

    @field_validator("addr", mode="before")
    @classmethod
    def _norm_addr(cls, v: Any) -> str:
        if v is None or v == "":
            return ZERO_ADDRESS
        return normalize_address(v)

    @property
    def is_external(self) -> bool:
        return not is_zero_address(self.addr)


class MintSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    receivers: List[str] = Field(default_factory=list)
    amounts: List[int] = Field(default_factory=list)

    @field_validator("receivers", mode="before")
    @classmethod
    def _norm_receivers(cls, v: Any) -> List[str]:
        if v is None:
            return []
        return [normalize_address(x) for x in v]

    @field_validator("amounts")
    @classmethod
    def _uint256_amounts(cls, v: List[int]) -> List[int]:
        return [_check_width(a, UINT256_MAX, "uint256") for a in v]

    @model_validator(mode="after")
    def _same_length(self) -> "MintSettings":
        if len(self.receivers) != len(self.amounts):
            raise ValueError(f"receivers ({len(self.receivers)}) and amounts ({len(self.amounts)}) must have the same length")
        return self

    def pairs(self) -> List[Tuple[str, int]]:
        return list(zip(self.receivers, self.amounts))


class InstallationParameters(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    voting: VotingSettings
    token: TokenSettings
    mint: MintSettings = Field(default_factory=MintSettings)

    def as_tuple(self) -> Tuple[VotingSettings, TokenSettings, MintSettings]:
        return (self.voting, self.token, self.mint)
