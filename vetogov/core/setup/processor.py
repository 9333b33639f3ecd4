from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from vetogov.core.addresses import normalize_address
from vetogov.core.chain.interface import AuthorityContext
from vetogov.core.errors import PluginNotInstalled
from vetogov.core.permissions.models import PermissionGrant, PreparedInstallation, UninstallPayload
from vetogov.core.setup.plugin_setup import VetoPluginSetup
from vetogov.core.trace import resolve_trace_id


class SetupProcessor:
    """
    Applies prepared permission deltas to an authority and remembers which
    helpers each installed plugin was given, so uninstallation can hand them back.
    """

    def __init__(self, *, setup: VetoPluginSetup, logger: Any = None):
        self.setup = setup
        self.logger = logger if logger is not None else setup.logger
        self._installed: Dict[Tuple[str, str], List[str]] = {}

    def prepare_installation(self, authority: AuthorityContext, data: bytes, *, trace_id: Optional[str] = None) -> PreparedInstallation:
        return self.setup.prepare_installation(authority.address, data, trace_id=trace_id)

    def apply_installation(self, authority: AuthorityContext, prepared: PreparedInstallation, *, trace_id: Optional[str] = None) -> None:
        trace_id = resolve_trace_id(trace_id)
        authority.apply(list(prepared.permissions))
        self._installed[(authority.address, prepared.plugin)] = list(prepared.helpers)
        self.logger.info(f"[{trace_id}] applied installation of {prepared.plugin} ({len(prepared.permissions)} grants)")
        if self.setup.audit is not None:
            self.setup.audit.log(
                trace_id=trace_id,
                event="setup.installation_applied",
                outcome="ok",
                details={"authority": authority.address, "plugin": prepared.plugin, "permission_count": len(prepared.permissions)},
            )

    def install(self, authority: AuthorityContext, data: bytes, *, trace_id: Optional[str] = None) -> PreparedInstallation:
        trace_id = resolve_trace_id(trace_id)
        prepared = self.prepare_installation(authority, data, trace_id=trace_id)
        self.apply_installation(authority, prepared, trace_id=trace_id)
        return prepared

    def helpers_of(self, authority: AuthorityContext, plugin: str) -> List[str]:
        key = (authority.address, normalize_address(plugin))
        if key not in self._installed:
            raise PluginNotInstalled(key[1], authority=authority.address)
        return list(self._installed[key])

    def prepare_uninstallation(self, authority: AuthorityContext, plugin: str, *, data: bytes = b"", trace_id: Optional[str] = None) -> List[PermissionGrant]:
        payload = UninstallPayload(plugin=plugin, current_helpers=self.helpers_of(authority, plugin), data=data)
        return self.setup.prepare_uninstallation(authority.address, payload, trace_id=trace_id)

    def apply_uninstallation(self, authority: AuthorityContext, plugin: str, permissions: List[PermissionGrant], *, trace_id: Optional[str] = None) -> None:
        trace_id = resolve_trace_id(trace_id)
        plugin = normalize_address(plugin)
        self.helpers_of(authority, plugin)
        authority.apply(list(permissions))
        del self._installed[(authority.address, plugin)]
        self.logger.info(f"[{trace_id}] applied uninstallation of {plugin} ({len(permissions)} revokes)")
        if self.setup.audit is not None:
            self.setup.audit.log(
                trace_id=trace_id,
                event="setup.uninstallation_applied",
                outcome="ok",
                details={"authority": authority.address, "plugin": plugin, "permission_count": len(permissions)},
            )

    def uninstall(self, authority: AuthorityContext, plugin: str, *, trace_id: Optional[str] = None) -> List[PermissionGrant]:
        trace_id = resolve_trace_id(trace_id)
        revokes = self.prepare_uninstallation(authority, plugin, trace_id=trace_id)
        self.apply_uninstallation(authority, plugin, revokes, trace_id=trace_id)
        return revokes

    def installed_plugins(self, authority: AuthorityContext) -> Dict[str, List[str]]:
        return {plugin: list(h) for (auth, plugin), h in self._installed.items() if auth == authority.address}
