from __future__ import annotations

"""
Installation parameter codec.

The buffer is `abi.encode(votingSettings, tokenSettings, mintSettings)` with
    votingSettings = (uint32 minVetoRatio, uint64 minDuration, uint256 minProposerVotingPower)
    tokenSettings  = (address addr, string name, string symbol)
    mintSettings   = (address[] receivers, uint256[] amounts)
"""

import hashlib

from pydantic import ValidationError

from vetogov.core.errors import MalformedParameters
from vetogov.core.params import abi
from vetogov.core.params.models import InstallationParameters, MintSettings, TokenSettings, VotingSettings

VOTING_SETTINGS_TYPE = abi.TupleType([abi.UINT32, abi.UINT64, abi.UINT256], name="VotingSettings")
TOKEN_SETTINGS_TYPE = abi.TupleType([abi.ADDRESS, abi.STRING, abi.STRING], name="TokenSettings")
MINT_SETTINGS_TYPE = abi.TupleType([abi.ArrayType(abi.ADDRESS), abi.ArrayType(abi.UINT256)], name="MintSettings")

INSTALLATION_PARAMS_TYPES = [VOTING_SETTINGS_TYPE, TOKEN_SETTINGS_TYPE, MINT_SETTINGS_TYPE]


def encode_installation_params(voting: VotingSettings, token: TokenSettings, mint: MintSettings) -> bytes:
    return abi.encode(
        INSTALLATION_PARAMS_TYPES,
        [
            (voting.min_veto_ratio, voting.min_duration, voting.min_proposer_voting_power),
            (token.addr, token.name, token.symbol),
            (list(mint.receivers), list(mint.amounts)),
        ],
    )


def decode_installation_params(data: bytes) -> InstallationParameters:
    """
    Decode a raw installation buffer. Raises MalformedParameters on any
    structural problem; never returns a partial result.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise MalformedParameters("Installation parameters must be bytes.", type=type(data).__name__)
    (ratio, duration, power), (addr, name, symbol), (receivers, amounts) = abi.decode(INSTALLATION_PARAMS_TYPES, bytes(data))
    try:
        return InstallationParameters(
            voting=VotingSettings(min_veto_ratio=ratio, min_duration=duration, min_proposer_voting_power=power),
            token=TokenSettings(addr=addr, name=name, symbol=symbol),
            mint=MintSettings(receivers=receivers, amounts=amounts),
        )
    except ValidationError as e:
        raise MalformedParameters("Decoded parameters are inconsistent.", errors=e.error_count()) from e


def parameters_fingerprint(data: bytes) -> str:
    return hashlib.sha256(bytes(data)).hexdigest()
