from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vetogov.core.addresses import normalize_address


class PermissionOperation(str, Enum):
    Grant = "Grant"
    Revoke = "Revoke"


class PermissionGrant(BaseModel):
    """
    One entry of the permission delta an authority applies. `condition=None`
    means unconditional.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    operation: PermissionOperation
    where: str
    who: str
    condition: Optional[str] = None
    permission_id: str = Field(min_length=1)

    @field_validator("where", "who")
    @classmethod
    def _norm_addr(cls, v: Any) -> str:
        return normalize_address(v)

    @field_validator("condition")
    @classmethod
    def _norm_condition(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return normalize_address(v)

    def flipped(self, operation: PermissionOperation) -> "PermissionGrant":
        return self.model_copy(update={"operation": operation})


class PreparedInstallation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    plugin: str
    helpers: List[str] = Field(default_factory=list)
    permissions: List[PermissionGrant] = Field(default_factory=list)

    @field_validator("plugin")
    @classmethod
    def _norm_plugin(cls, v: Any) -> str:
        return normalize_address(v)

    @field_validator("helpers", mode="before")
    @classmethod
    def _norm_helpers(cls, v: Any) -> List[str]:
        return [normalize_address(x) for x in (v or [])]


class UninstallPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    plugin: str
    current_helpers: List[str] = Field(default_factory=list)
    data: bytes = b""

    @field_validator("plugin")
    @classmethod
    def _norm_plugin(cls, v: Any) -> str:
        return normalize_address(v)

    @field_validator("current_helpers", mode="before")
    @classmethod
    def _norm_helpers(cls, v: Any) -> List[str]:
        return [normalize_address(x) for x in (v or [])]
