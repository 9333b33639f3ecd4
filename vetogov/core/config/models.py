from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

SETUP_CONFIG_SCHEMA_VERSION = 1


class AuditConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    path: str = Field(default=os.path.join("logs", "setup_audit.jsonl"), min_length=1)
    keep_last: int = Field(default=200, ge=10, le=10_000)


class SetupConfig(BaseModel):
    """
    config/setup.json schema.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: int = SETUP_CONFIG_SCHEMA_VERSION
    # Off by default: an external token is reused exactly as given, even when it
    # does not track votes. When on, such tokens get a vote-tracking wrapper.
    wrap_non_votes_tokens: bool = False
    log_dir: str = Field(default="logs", min_length=1)
    audit: AuditConfig = Field(default_factory=AuditConfig)
