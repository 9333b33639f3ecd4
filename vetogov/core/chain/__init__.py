"""
Host capability contract and the in-memory reference host.
"""

from vetogov.core.chain.interface import AuthorityContext, ChainHost
from vetogov.core.chain.memory import InMemoryAuthority, InMemoryChain

__all__ = ["AuthorityContext", "ChainHost", "InMemoryAuthority", "InMemoryChain"]
