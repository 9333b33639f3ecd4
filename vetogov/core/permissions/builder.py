from __future__ import annotations

from typing import List, Tuple

from vetogov.core.addresses import normalize_address
from vetogov.core.permissions.models import PermissionGrant, PermissionOperation

UPDATE_OPTIMISTIC_GOVERNANCE_SETTINGS_PERMISSION_ID = "UPDATE_OPTIMISTIC_GOVERNANCE_SETTINGS_PERMISSION"
UPGRADE_PLUGIN_PERMISSION_ID = "UPGRADE_PLUGIN_PERMISSION"
EXECUTE_PERMISSION_ID = "EXECUTE_PERMISSION"


def _canonical_entries(plugin: str, authority: str) -> List[Tuple[str, str, str]]:
    """
    (where, who, permission_id) in the order callers diff against. Do not reorder.
    """
    return [
        (plugin, authority, UPDATE_OPTIMISTIC_GOVERNANCE_SETTINGS_PERMISSION_ID),
        (plugin, authority, UPGRADE_PLUGIN_PERMISSION_ID),
        (authority, plugin, EXECUTE_PERMISSION_ID),
    ]


def build_install_grants(plugin: str, authority: str) -> List[PermissionGrant]:
    plugin = normalize_address(plugin)
    authority = normalize_address(authority)
    return [
        PermissionGrant(operation=PermissionOperation.Grant, where=where, who=who, condition=None, permission_id=pid)
        for (where, who, pid) in _canonical_entries(plugin, authority)
    ]


def build_uninstall_revokes(plugin: str, authority: str) -> List[PermissionGrant]:
    return [p.flipped(PermissionOperation.Revoke) for p in build_install_grants(plugin, authority)]
