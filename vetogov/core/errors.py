from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from vetogov.core.events import redact


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class VetoGovError(Exception):
    code: str
    user_message: str
    severity: Severity = Severity.ERROR
    recoverable: bool = False
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.code)

    def __str__(self) -> str:
        return f"{self.code}: {self.user_message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "recoverable": bool(self.recoverable),
            "context": redact(self.context or {}),
        }


# ---- Setup lifecycle ----
class MalformedParameters(VetoGovError):
    def __init__(self, reason: str = "Installation parameters cannot be decoded.", **ctx: Any):
        super().__init__("malformed_parameters", reason, severity=Severity.ERROR, context=ctx)


class NotAContract(VetoGovError):
    def __init__(self, address: str, **ctx: Any):
        super().__init__(
            "not_a_contract",
            f"Token address {address} is not a contract.",
            severity=Severity.ERROR,
            context={"address": address, **ctx},
        )

    @property
    def address(self) -> str:
        return str(self.context.get("address") or "")


class NotERC20Compatible(VetoGovError):
    def __init__(self, address: str, **ctx: Any):
        super().__init__(
            "not_erc20_compatible",
            f"Token address {address} does not answer balanceOf like an ERC20.",
            severity=Severity.ERROR,
            context={"address": address, **ctx},
        )

    @property
    def address(self) -> str:
        return str(self.context.get("address") or "")


class WrongHelperCount(VetoGovError):
    def __init__(self, length: int, **ctx: Any):
        super().__init__(
            "wrong_helper_count",
            f"Expected exactly 1 helper, got {int(length)}.",
            severity=Severity.ERROR,
            context={"length": int(length), **ctx},
        )

    @property
    def length(self) -> int:
        return int(self.context.get("length") or 0)


class PluginNotInstalled(VetoGovError):
    def __init__(self, plugin: str, **ctx: Any):
        super().__init__(
            "plugin_not_installed",
            f"Plugin {plugin} is not installed on this authority.",
            severity=Severity.WARN,
            context={"plugin": plugin, **ctx},
        )


# ---- Ambient ----
class ConfigError(VetoGovError):
    def __init__(self, user_message: str = "Configuration error.", **ctx: Any):
        super().__init__("config_error", user_message, severity=Severity.CRITICAL, context=ctx)
