from __future__ import annotations

"""
Typed wrappers over ChainHost.static_call for the token capability contract:
balanceOf, name, symbol, supportsInterface.
"""

from typing import Optional

from vetogov.core.chain.interface import ChainHost
from vetogov.core.errors import MalformedParameters
from vetogov.core.params import abi

IVOTES_INTERFACE = "IVotes"


def _decode_single(typ: abi.AbiType, data: Optional[bytes]):
    if data is None:
        return None
    try:
        return abi.decode([typ], data)[0]
    except MalformedParameters:
        return None


def balance_of(host: ChainHost, token: str, account: str) -> Optional[int]:
    return _decode_single(abi.UINT256, host.static_call(token, "balanceOf", account))


def token_name(host: ChainHost, token: str) -> Optional[str]:
    return _decode_single(abi.STRING, host.static_call(token, "name"))


def token_symbol(host: ChainHost, token: str) -> Optional[str]:
    return _decode_single(abi.STRING, host.static_call(token, "symbol"))


def supports_interface(host: ChainHost, address: str, interface: str) -> bool:
    return bool(_decode_single(abi.BOOL, host.static_call(address, "supportsInterface", interface)))


def answers_erc20_balance(host: ChainHost, token: str, probe: str) -> bool:
    """
    The ERC20 shape check: balanceOf(probe) must succeed and return exactly one word.
    """
    data = host.static_call(token, "balanceOf", probe)
    return data is not None and len(data) == abi.WORD
