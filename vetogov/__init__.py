"""
vetogov: install/uninstall lifecycle for the optimistic veto governance plugin.
"""

__version__ = "0.1.0"
