import json
import os
import re
import sys
import time
from typing import Any, Dict, Iterable, Optional, TextIO

LEVELS = {"debug": 10, "info": 20, "warn": 30, "warning": 30, "error": 40}
_REDACT_KEYS = {"api_key", "authorization", "password", "secret", "token", "api_token", "access_token"}
_BEARER_RE = re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+")


def _safe_default(o: Any) -> Any:
    """Fallback serializer for values json cannot encode."""
    if isinstance(o, (bytes, bytearray)):
        return o.decode("utf-8", errors="replace")
    if isinstance(o, (set, frozenset, tuple)):
        return list(o)
    if isinstance(o, BaseException):
        return {"type": o.__class__.__name__, "message": str(o)}
    if hasattr(o, "isoformat"):
        return o.isoformat()
    return str(o)


def _scrub(obj: Any, redact_keys: Iterable[str]) -> Any:
    """Recursively scrub sensitive fields by key name (case-insensitive) and bearer tokens in strings."""
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if isinstance(k, str) and k.lower() in redact_keys:
                out[k] = "[REDACTED]"
            else:
                out[k] = _scrub(v, redact_keys)
        return out
    if isinstance(obj, (list, tuple)):
        return [_scrub(v, redact_keys) for v in obj]
    if isinstance(obj, str) and "Bearer" in obj:
        return _BEARER_RE.sub(r"\1[REDACTED]", obj)
    return obj


class JsonLogger:
    """One JSON object per line: ts, event, level, pid, service plus keyword fields."""

    def __init__(self, level: str = "info", service: str = "polysum", stream: Optional[TextIO] = None) -> None:
        self.level = LEVELS.get(level.lower(), 20)
        self.service = service
        self._stream = stream
        self._pid = os.getpid()

    def set_level(self, level: str) -> None:
        self.level = LEVELS.get(level.lower(), self.level)

    def _emit(self, level_name: str, event: str, **fields: Any) -> None:
        if LEVELS.get(level_name, 20) < self.level:
            return
        rec: Dict[str, Any] = {
            "ts": int(time.time() * 1000),
            "event": event,
            "level": level_name.upper(),
            "pid": self._pid,
            "service": self.service,
        }
        rec.update(fields)
        rec = _scrub(rec, _REDACT_KEYS)

        stream = self._stream or sys.stdout
        try:
            stream.write(json.dumps(rec, default=_safe_default, ensure_ascii=False) + "\n")
            stream.flush()
        except Exception as e:
            # never let a log line take the request down with it
            fallback = {
                "ts": rec.get("ts"),
                "event": "logger.error",
                "level": "ERROR",
                "orig_event": event,
                "error": str(e),
            }
            sys.stderr.write(json.dumps(fallback, default=_safe_default) + "\n")

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("info", event, **fields)

    def warn(self, event: str, **fields: Any) -> None:
        self._emit("warn", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("error", event, **fields)


logger = JsonLogger(os.environ.get("LOG_LEVEL", "info"))
__all__ = ["logger", "JsonLogger", "_safe_default"]
