from __future__ import annotations

"""
Allowlisted shaping for setup audit payloads. Raw parameter buffers and token
names never reach the audit log; the fingerprint identifies the buffer instead.
"""

from typing import Any, Dict


def redact_setup_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    p = payload or {}
    allow = {
        "authority",
        "plugin",
        "helpers",
        "token",
        "token_kind",
        "permission_count",
        "permission_ids",
        "params_fingerprint",
        "params_size",
        "error_code",
        "error_context",
        "action",
    }
    return {k: p.get(k) for k in allow if k in p}
