from __future__ import annotations

import re
from typing import Any

ZERO_ADDRESS = "0x" + "00" * 20

_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")


def normalize_address(v: Any) -> str:
    """
    Canonical form is lowercase 0x + 40 hex chars. Raises ValueError otherwise.
    """
    s = str(v or "").strip()
    if not _ADDRESS_RE.fullmatch(s):
        raise ValueError(f"invalid address: {s!r}")
    return s.lower()


def is_zero_address(v: str) -> bool:
    return normalize_address(v) == ZERO_ADDRESS


def address_to_bytes(v: str) -> bytes:
    return bytes.fromhex(normalize_address(v)[2:])


def address_from_bytes(b: bytes) -> str:
    if len(b) != 20:
        raise ValueError("address must be 20 bytes")
    return "0x" + b.hex()
