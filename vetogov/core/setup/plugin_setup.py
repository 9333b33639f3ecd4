from __future__ import annotations

"""
VetoPluginSetup: the surface the hosting authority talks to.

WHY THIS FILE EXISTS:
Coordinators do the work; this class owns the module implementation address,
wires config into the resolver, and records every prepare call (success or
failure) in the log and the audit trail.
"""

import logging
from typing import Any, Dict, List, Optional

from vetogov.core.chain.interface import ChainHost
from vetogov.core.config.models import SetupConfig
from vetogov.core.errors import VetoGovError
from vetogov.core.events import SetupAuditLogger
from vetogov.core.logger import setup_logging
from vetogov.core.params.codec import decode_installation_params, encode_installation_params, parameters_fingerprint
from vetogov.core.permissions.models import PermissionGrant, PreparedInstallation, UninstallPayload
from vetogov.core.provisioning.resolver import TokenProvisioningResolver
from vetogov.core.setup.installer import InstallationCoordinator
from vetogov.core.setup.redaction import redact_setup_payload
from vetogov.core.setup.uninstaller import UninstallationCoordinator
from vetogov.core.trace import resolve_trace_id, trace_context


class VetoPluginSetup:
    encode_installation_params = staticmethod(encode_installation_params)
    decode_installation_params = staticmethod(decode_installation_params)

    def __init__(self, *, host: ChainHost, cfg: Optional[SetupConfig] = None, audit: Optional[SetupAuditLogger] = None, logger: Any = None):
        self.cfg = cfg or SetupConfig()
        self.host = host
        self.audit = audit
        self.logger = logger if logger is not None else logging.getLogger("vetogov")
        with host.atomic():
            self._implementation = host.deploy_implementation()
        self.resolver = TokenProvisioningResolver(host=host, wrap_non_votes_tokens=self.cfg.wrap_non_votes_tokens, logger=self.logger)
        self.installer = InstallationCoordinator(host=host, implementation=self._implementation, resolver=self.resolver, logger=self.logger)
        self.uninstaller = UninstallationCoordinator(logger=self.logger)

    @classmethod
    def from_config(cls, *, host: ChainHost, cfg: SetupConfig, logger: Any = None) -> "VetoPluginSetup":
        if logger is None:
            logger = setup_logging(cfg.log_dir)
        audit = SetupAuditLogger(path=cfg.audit.path, keep_last=cfg.audit.keep_last, enabled=cfg.audit.enabled)
        return cls(host=host, cfg=cfg, audit=audit, logger=logger)

    def implementation(self) -> str:
        return self._implementation

    # ---- helpers ----
    def _record(self, trace_id: str, event: str, outcome: str, details: Dict[str, Any]) -> None:
        if self.audit is None:
            return
        self.audit.log(trace_id=trace_id, event=event, outcome=outcome, details=redact_setup_payload(details))

    def _failed(self, trace_id: str, event: str, err: VetoGovError, details: Dict[str, Any]) -> None:
        self.logger.warning(f"[{trace_id}] {event}: {err.code} {err.user_message}")
        self._record(trace_id, event, "failed", {**details, "error_code": err.code, "error_context": err.to_dict()["context"]})

    # ---- lifecycle ----
    def prepare_installation(self, authority: str, data: bytes, *, trace_id: Optional[str] = None) -> PreparedInstallation:
        trace_id = resolve_trace_id(trace_id)
        base: Dict[str, Any] = {"authority": authority}
        if isinstance(data, (bytes, bytearray)):
            base.update(params_fingerprint=parameters_fingerprint(data), params_size=len(data))
        with trace_context(trace_id):
            try:
                prepared, resolution = self.installer.prepare(authority, data, trace_id=trace_id)
            except VetoGovError as e:
                self._failed(trace_id, "setup.install_failed", e, base)
                raise
        self._record(
            trace_id,
            "setup.install_prepared",
            "ok",
            {
                **base,
                "plugin": prepared.plugin,
                "helpers": list(prepared.helpers),
                "token": resolution.address,
                "token_kind": resolution.kind.value,
                "permission_count": len(prepared.permissions),
                "permission_ids": [p.permission_id for p in prepared.permissions],
            },
        )
        return prepared

    def prepare_uninstallation(self, authority: str, payload: UninstallPayload, *, trace_id: Optional[str] = None) -> List[PermissionGrant]:
        trace_id = resolve_trace_id(trace_id)
        base = {"authority": authority, "plugin": payload.plugin, "helpers": list(payload.current_helpers)}
        with trace_context(trace_id):
            try:
                revokes = self.uninstaller.uninstall(authority, payload, trace_id=trace_id)
            except VetoGovError as e:
                self._failed(trace_id, "setup.uninstall_failed", e, base)
                raise
        self._record(
            trace_id,
            "setup.uninstall_prepared",
            "ok",
            {**base, "permission_count": len(revokes), "permission_ids": [p.permission_id for p in revokes]},
        )
        return revokes
