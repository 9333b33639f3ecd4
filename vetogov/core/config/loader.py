from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError

from vetogov.core.config.io import read_json_file
from vetogov.core.config.models import SETUP_CONFIG_SCHEMA_VERSION, SetupConfig
from vetogov.core.errors import ConfigError


def default_config_dict() -> Dict[str, Any]:
    return SetupConfig().model_dump()


def validate_and_normalize(raw: Dict[str, Any]) -> SetupConfig:
    if not isinstance(raw, dict):
        raise ConfigError("setup.json must be an object.")
    if "schema_version" not in raw:
        raise ConfigError("setup.json missing schema_version.")
    try:
        schema_version = int(raw.get("schema_version"))
    except (TypeError, ValueError) as e:
        raise ConfigError("setup.json schema_version must be an integer.") from e
    if schema_version != SETUP_CONFIG_SCHEMA_VERSION:
        raise ConfigError(
            f"setup.json schema_version mismatch (expected {SETUP_CONFIG_SCHEMA_VERSION}).",
            schema_version=schema_version,
        )
    try:
        return SetupConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def load_config(path: str) -> SetupConfig:
    """
    Missing file -> defaults. Unreadable or invalid file -> ConfigError.
    """
    rr = read_json_file(path)
    if not rr.ok:
        if rr.error == "missing":
            return SetupConfig()
        raise ConfigError(f"setup.json unreadable: {rr.error}", path=path)
    return validate_and_normalize(rr.data)
