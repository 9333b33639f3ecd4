from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from vetogov.core.chain import probes
from vetogov.core.chain.interface import ChainHost
from vetogov.core.errors import NotAContract, NotERC20Compatible
from vetogov.core.params.models import MintSettings, TokenSettings


class TokenResolutionKind(str, Enum):
    reused = "reused"
    wrapped = "wrapped"
    minted = "minted"


class TokenResolution(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str
    kind: TokenResolutionKind


class TokenProvisioningResolver:
    """
    Decides where the plugin's voting token comes from. Exactly one token per call:
    1. external address -> must have code and answer balanceOf with one word; reused
       as-is (or wrapped when `wrap_non_votes_tokens` is on and it lacks IVotes)
    2. zero address -> a new mintable voting token, pre-minted per MintSettings
    """

    def __init__(self, *, host: ChainHost, wrap_non_votes_tokens: bool = False, logger: Any = None):
        self.host = host
        self.wrap_non_votes_tokens = bool(wrap_non_votes_tokens)
        self.logger = logger

    def _log(self, trace_id: str, msg: str) -> None:
        if self.logger is not None:
            self.logger.info(f"[{trace_id}] {msg}")

    def resolve(self, token: TokenSettings, mint: MintSettings, authority: str, *, trace_id: str = "setup") -> TokenResolution:
        if token.is_external:
            return self._resolve_external(token, authority, trace_id=trace_id)
        addr = self.host.create_mintable_token(authority=authority, name=token.name, symbol=token.symbol, mint=mint)
        self._log(trace_id, f"token: minted {token.symbol or '?'} at {addr} for {len(mint.receivers)} receivers")
        return TokenResolution(address=addr, kind=TokenResolutionKind.minted)

    def _resolve_external(self, token: TokenSettings, authority: str, *, trace_id: str) -> TokenResolution:
        addr = token.addr
        if not self.host.has_code(addr):
            raise NotAContract(addr)
        # Probe with the authority as holder; any address works, only the shape matters.
        if not probes.answers_erc20_balance(self.host, addr, authority):
            raise NotERC20Compatible(addr)

        if self.wrap_non_votes_tokens and not probes.supports_interface(self.host, addr, probes.IVOTES_INTERFACE):
            wrapped = self.host.wrap_token(underlying=addr, name=token.name, symbol=token.symbol)
            self._log(trace_id, f"token: wrapped {addr} as {wrapped}")
            return TokenResolution(address=wrapped, kind=TokenResolutionKind.wrapped)

        self._log(trace_id, f"token: reusing {addr}")
        return TokenResolution(address=addr, kind=TokenResolutionKind.reused)
