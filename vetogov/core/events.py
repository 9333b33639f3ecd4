from __future__ import annotations

import json
import os
import threading
import time
from collections import deque
from typing import Any, Deque, Dict, List, Optional


REDACT_KEYS = {
    "passphrase",
    "password",
    "secret",
    "private_key",
    "mnemonic",
    "api_key",
    "authorization",
}


def _redact(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if str(k).lower() in REDACT_KEYS:
                out[k] = "***REDACTED***"
            else:
                out[k] = _redact(v)
        return out
    if isinstance(obj, list):
        return [_redact(x) for x in obj]
    return obj


# Exported helper for errors and audit payloads.
def redact(obj: Any) -> Any:
    return _redact(obj)


class SetupAuditLogger:
    """
    Writes setup lifecycle decisions to a JSONL file and retains a small in-memory tail.
    """

    def __init__(self, *, path: str = os.path.join("logs", "setup_audit.jsonl"), keep_last: int = 200, enabled: bool = True):
        self.path = str(path)
        self.enabled = bool(enabled)
        self._lock = threading.Lock()
        self._recent: Deque[Dict[str, Any]] = deque(maxlen=max(10, int(keep_last)))

    def log(self, *, trace_id: str, event: str, outcome: str, details: Optional[Dict[str, Any]] = None) -> None:
        payload = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "trace_id": trace_id,
            "event": event,
            "outcome": outcome,
            "details": redact(details or {}),
        }
        with self._lock:
            self._recent.appendleft(payload)
            if not self.enabled:
                return
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=False) + "\n")

    def recent(self, n: int = 50) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._recent)[: max(1, int(n))]
