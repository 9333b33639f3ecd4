from __future__ import annotations

from typing import Any, Tuple

from vetogov.core.addresses import normalize_address
from vetogov.core.chain.interface import ChainHost
from vetogov.core.params.codec import decode_installation_params
from vetogov.core.permissions.builder import build_install_grants
from vetogov.core.permissions.models import PreparedInstallation
from vetogov.core.provisioning.resolver import TokenProvisioningResolver, TokenResolution


class InstallationCoordinator:
    """
    decode -> resolve token -> clone + initialize module -> grants.

    Runs inside `host.atomic()`: if any step raises, tokens or modules created
    earlier in the same call are discarded.
    """

    def __init__(self, *, host: ChainHost, implementation: str, resolver: TokenProvisioningResolver, logger: Any = None):
        self.host = host
        self.implementation = normalize_address(implementation)
        self.resolver = resolver
        self.logger = logger

    def install(self, authority: str, raw: bytes, *, trace_id: str = "setup") -> PreparedInstallation:
        prepared, _ = self.prepare(authority, raw, trace_id=trace_id)
        return prepared

    def prepare(self, authority: str, raw: bytes, *, trace_id: str = "setup") -> Tuple[PreparedInstallation, TokenResolution]:
        authority = normalize_address(authority)
        with self.host.atomic():
            params = decode_installation_params(raw)
            resolution = self.resolver.resolve(params.token, params.mint, authority, trace_id=trace_id)
            plugin = self.host.deploy_module(
                implementation=self.implementation,
                authority=authority,
                token=resolution.address,
                settings=params.voting,
            )
            prepared = PreparedInstallation(
                plugin=plugin,
                helpers=[resolution.address],
                permissions=build_install_grants(plugin, authority),
            )
        if self.logger is not None:
            self.logger.info(f"[{trace_id}] install: plugin {prepared.plugin} token {resolution.address} ({resolution.kind.value})")
        return prepared, resolution
