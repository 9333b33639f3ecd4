from __future__ import annotations

"""
InMemoryChain: a reference ChainHost for dry runs and tests.

Addresses are derived from a seed and a creation nonce, so two hosts with the
same seed produce the same addresses for the same sequence of creations.
`atomic()` snapshots accounts + nonce and restores them if the block raises.
"""

import contextlib
import copy
import hashlib
import threading
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from vetogov.core.addresses import normalize_address
from vetogov.core.chain.contracts import Contract, MintableVotingToken, VetoModule, WrappedVotingToken
from vetogov.core.chain.interface import AuthorityContext, ChainHost
from vetogov.core.params.models import MintSettings, VotingSettings
from vetogov.core.permissions.models import PermissionGrant, PermissionOperation


class InMemoryChain(ChainHost):
    def __init__(self, *, seed: str = "vetogov", logger=None):
        self.seed = str(seed)
        self.logger = logger
        self._accounts: Dict[str, Contract] = {}
        self._nonce = 0
        self._lock = threading.RLock()

    # ---- helpers ----
    def _next_address(self) -> str:
        self._nonce += 1
        digest = hashlib.sha256(f"{self.seed}:{self._nonce}".encode("utf-8")).digest()
        return "0x" + digest[-20:].hex()

    def deploy(self, contract: Contract) -> str:
        with self._lock:
            addr = self._next_address()
            self._accounts[addr] = contract
            if self.logger is not None:
                self.logger.info(f"chain: deployed {contract.kind} at {addr}")
            return addr

    def contract_at(self, address: str) -> Optional[Contract]:
        return self._accounts.get(normalize_address(address))

    def contract_count(self, kind: Optional[str] = None) -> int:
        with self._lock:
            return sum(1 for c in self._accounts.values() if kind is None or c.kind == kind)

    # ---- reads ----
    def has_code(self, address: str) -> bool:
        return self.contract_at(address) is not None

    def static_call(self, address: str, method: str, *args: Any) -> Optional[bytes]:
        contract = self.contract_at(address)
        if contract is None:
            # Calls to accounts without code succeed with empty return data.
            return b""
        try:
            return contract.call(method, args)
        except (TypeError, ValueError, RuntimeError):
            return None

    # ---- factory ----
    def deploy_implementation(self) -> str:
        return self.deploy(VetoModule())

    def deploy_module(self, *, implementation: str, authority: str, token: str, settings: VotingSettings) -> str:
        with self._lock:
            base = self.contract_at(implementation)
            if not isinstance(base, VetoModule):
                raise RuntimeError(f"no module implementation at {implementation}")
            module = VetoModule(implementation=normalize_address(implementation))
            module.initialize(authority=normalize_address(authority), token=normalize_address(token), settings=settings)
            return self.deploy(module)

    def create_mintable_token(self, *, authority: str, name: str, symbol: str, mint: MintSettings) -> str:
        return self.deploy(MintableVotingToken(authority=normalize_address(authority), name=name, symbol=symbol, mint=mint))

    def wrap_token(self, *, underlying: str, name: str, symbol: str) -> str:
        return self.deploy(WrappedVotingToken(underlying=normalize_address(underlying), name=name, symbol=symbol))

    @contextlib.contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            snapshot: Tuple[Dict[str, Contract], int] = (copy.deepcopy(self._accounts), self._nonce)
            try:
                yield
            except BaseException:
                self._accounts, self._nonce = snapshot
                if self.logger is not None:
                    self.logger.warning("chain: call reverted, state rolled back")
                raise


class InMemoryAuthority(AuthorityContext):
    """
    Permission store keyed by (where, who, permission_id). Conditions are kept
    alongside but never evaluated.
    """

    def __init__(self, address: str):
        self._address = normalize_address(address)
        self._granted: Dict[Tuple[str, str, str], Optional[str]] = {}
        self.history: List[PermissionGrant] = []

    @property
    def address(self) -> str:
        return self._address

    def apply(self, permissions: List[PermissionGrant]) -> None:
        for p in permissions:
            key = (p.where, p.who, p.permission_id)
            if p.operation == PermissionOperation.Grant:
                self._granted[key] = p.condition
            else:
                self._granted.pop(key, None)
            self.history.append(p)

    def is_granted(self, where: str, who: str, permission_id: str) -> bool:
        return (normalize_address(where), normalize_address(who), str(permission_id)) in self._granted

    def granted(self) -> Set[Tuple[str, str, str]]:
        return set(self._granted)
