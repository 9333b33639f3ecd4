from __future__ import annotations

"""
In-memory stand-ins for the contracts the setup touches. They implement only the
capability contract the setup consumes, plus what tests need to inspect state.
"""

from typing import Any, Dict, Optional, Set, Tuple

from vetogov.core.params import abi
from vetogov.core.params.models import MintSettings, VotingSettings


class Contract:
    kind = "contract"
    # external name -> (python method, return type)
    METHODS: Dict[str, Tuple[str, abi.AbiType]] = {}
    INTERFACES: Set[str] = set()

    def supports_interface(self, interface: str) -> bool:
        return str(interface) in self.INTERFACES

    def call(self, method: str, args: Tuple[Any, ...]) -> Optional[bytes]:
        entry = self.METHODS.get(method)
        if entry is None:
            return None
        attr, ret = entry
        # return data is the single-element tuple encoding, so strings carry an offset head
        return abi.encode([ret], [getattr(self, attr)(*args)])


class PlainERC20Token(Contract):
    """ERC20 without vote tracking."""

    kind = "erc20"
    METHODS = {
        "balanceOf": ("balance_of", abi.UINT256),
        "totalSupply": ("total_supply", abi.UINT256),
        "name": ("get_name", abi.STRING),
        "symbol": ("get_symbol", abi.STRING),
        "supportsInterface": ("supports_interface", abi.BOOL),
    }
    INTERFACES = {"IERC20"}

    def __init__(self, name: str = "", symbol: str = "", balances: Optional[Dict[str, int]] = None):
        self.name = str(name)
        self.symbol = str(symbol)
        self.balances: Dict[str, int] = dict(balances or {})

    def get_name(self) -> str:
        return self.name

    def get_symbol(self) -> str:
        return self.symbol

    def balance_of(self, account: str) -> int:
        return int(self.balances.get(str(account).lower(), 0))

    def total_supply(self) -> int:
        return sum(self.balances.values())

    def _mint(self, account: str, amount: int) -> None:
        key = str(account).lower()
        self.balances[key] = self.balances.get(key, 0) + int(amount)


class MintableVotingToken(PlainERC20Token):
    kind = "mintable_voting_token"
    METHODS = {
        **PlainERC20Token.METHODS,
        "getVotes": ("get_votes", abi.UINT256),
    }
    INTERFACES = {"IERC20", "IVotes"}

    def __init__(self, *, authority: str, name: str, symbol: str, mint: MintSettings):
        super().__init__(name=name, symbol=symbol)
        self.authority = authority
        for receiver, amount in mint.pairs():
            self._mint(receiver, amount)

    def get_votes(self, account: str) -> int:
        return self.balance_of(account)


class WrappedVotingToken(Contract):
    """Vote-tracking wrapper around an ERC20. Balances appear only once deposited."""

    kind = "wrapped_voting_token"
    METHODS = {
        "balanceOf": ("balance_of", abi.UINT256),
        "getVotes": ("balance_of", abi.UINT256),
        "name": ("get_name", abi.STRING),
        "symbol": ("get_symbol", abi.STRING),
        "underlying": ("get_underlying", abi.ADDRESS),
        "supportsInterface": ("supports_interface", abi.BOOL),
    }
    INTERFACES = {"IERC20", "IVotes"}

    def __init__(self, *, underlying: str, name: str, symbol: str):
        self.underlying = underlying
        self.name = str(name)
        self.symbol = str(symbol)
        self.balances: Dict[str, int] = {}

    def get_name(self) -> str:
        return self.name

    def get_symbol(self) -> str:
        return self.symbol

    def get_underlying(self) -> str:
        return self.underlying

    def balance_of(self, account: str) -> int:
        return int(self.balances.get(str(account).lower(), 0))


class VetoModule(Contract):
    """
    The installed plugin. The implementation instance is never initialized; clones are.
    """

    kind = "veto_module"
    METHODS = {
        "implementation": ("get_implementation", abi.ADDRESS),
        "votingToken": ("get_token", abi.ADDRESS),
        "supportsInterface": ("supports_interface", abi.BOOL),
    }
    INTERFACES = {"IPlugin", "IOptimisticProposal"}

    def __init__(self, *, implementation: Optional[str] = None):
        self.implementation = implementation
        self.authority: Optional[str] = None
        self.token: Optional[str] = None
        self.settings: Optional[VotingSettings] = None

    def initialize(self, *, authority: str, token: str, settings: VotingSettings) -> None:
        if self.authority is not None:
            raise RuntimeError("module already initialized")
        self.authority = authority
        self.token = token
        self.settings = settings

    def get_implementation(self) -> Optional[str]:
        return self.implementation

    def get_token(self) -> Optional[str]:
        return self.token
