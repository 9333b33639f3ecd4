"""
Plugin setup lifecycle.

WHY THIS PACKAGE EXISTS:
Installing the veto plugin means provisioning its voting token, cloning the
module, and handing the authority an exact, ordered permission delta.
Uninstalling hands back the mirrored revokes. Nothing here applies permissions
on its own; SetupProcessor does that against an AuthorityContext.
"""

from vetogov.core.setup.installer import InstallationCoordinator
from vetogov.core.setup.plugin_setup import VetoPluginSetup
from vetogov.core.setup.processor import SetupProcessor
from vetogov.core.setup.uninstaller import UninstallationCoordinator

__all__ = ["InstallationCoordinator", "SetupProcessor", "UninstallationCoordinator", "VetoPluginSetup"]
