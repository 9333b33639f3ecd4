from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ContextManager, List, Optional

from vetogov.core.params.models import MintSettings, VotingSettings
from vetogov.core.permissions.models import PermissionGrant


class ChainHost(ABC):
    """
    Capabilities the setup needs from its execution environment.

    Reads are `has_code` and `static_call`; every other method creates state and
    must only be used inside `atomic()` so a failed call leaves nothing behind.
    """

    @abstractmethod
    def has_code(self, address: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def static_call(self, address: str, method: str, *args: Any) -> Optional[bytes]:
        """Return ABI-encoded return data, or None when the call reverts."""
        raise NotImplementedError

    @abstractmethod
    def deploy_implementation(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def deploy_module(self, *, implementation: str, authority: str, token: str, settings: VotingSettings) -> str:
        """Clone `implementation` and initialize it. Returns a fresh address every call."""
        raise NotImplementedError

    @abstractmethod
    def create_mintable_token(self, *, authority: str, name: str, symbol: str, mint: MintSettings) -> str:
        raise NotImplementedError

    @abstractmethod
    def wrap_token(self, *, underlying: str, name: str, symbol: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        """All-or-nothing scope: state created inside is discarded if the block raises."""
        raise NotImplementedError


class AuthorityContext(ABC):
    """
    The authority that owns and enforces permissions over installed plugins.
    """

    @property
    @abstractmethod
    def address(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def apply(self, permissions: List[PermissionGrant]) -> None:
        raise NotImplementedError

    @abstractmethod
    def is_granted(self, where: str, who: str, permission_id: str) -> bool:
        raise NotImplementedError
