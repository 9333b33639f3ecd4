from vetogov.core.permissions.builder import (
    EXECUTE_PERMISSION_ID,
    UPDATE_OPTIMISTIC_GOVERNANCE_SETTINGS_PERMISSION_ID,
    UPGRADE_PLUGIN_PERMISSION_ID,
    build_install_grants,
    build_uninstall_revokes,
)
from vetogov.core.permissions.models import PermissionGrant, PermissionOperation, PreparedInstallation, UninstallPayload

__all__ = [
    "EXECUTE_PERMISSION_ID",
    "UPDATE_OPTIMISTIC_GOVERNANCE_SETTINGS_PERMISSION_ID",
    "UPGRADE_PLUGIN_PERMISSION_ID",
    "PermissionGrant",
    "PermissionOperation",
    "PreparedInstallation",
    "UninstallPayload",
    "build_install_grants",
    "build_uninstall_revokes",
]
