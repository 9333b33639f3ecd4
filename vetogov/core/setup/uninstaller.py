from __future__ import annotations

from typing import Any, List

from vetogov.core.addresses import normalize_address
from vetogov.core.errors import WrongHelperCount
from vetogov.core.permissions.builder import build_uninstall_revokes
from vetogov.core.permissions.models import PermissionGrant, UninstallPayload


class UninstallationCoordinator:
    """
    Computes the revoke list for an installed plugin. Read-only: neither the
    plugin nor its token is touched.
    """

    def __init__(self, *, logger: Any = None):
        self.logger = logger

    def uninstall(self, authority: str, payload: UninstallPayload, *, trace_id: str = "setup") -> List[PermissionGrant]:
        n = len(payload.current_helpers)
        if n != 1:
            raise WrongHelperCount(n, plugin=payload.plugin)
        revokes = build_uninstall_revokes(payload.plugin, normalize_address(authority))
        if self.logger is not None:
            self.logger.info(f"[{trace_id}] uninstall: plugin {payload.plugin} -> {len(revokes)} revokes")
        return revokes
