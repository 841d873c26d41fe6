from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from contextvars import ContextVar
from typing import Any, Dict, Optional


_TRACE_ID_CTX: ContextVar[str] = ContextVar("trace_id", default="unknown")
_LOGGER = logging.getLogger("weather_dain")
_INITIALIZED = False


def init_logging(*, log_path: Optional[str] = None) -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    handlers = []
    if log_path:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
        )
    else:
        handlers.append(logging.StreamHandler())
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        handlers=handlers,
    )
    _LOGGER.setLevel(logging.INFO)
    _INITIALIZED = True


def set_trace_id(trace_id: str):
    return _TRACE_ID_CTX.set(trace_id)


def reset_trace_id(token) -> None:
    _TRACE_ID_CTX.reset(token)


def get_trace_id() -> str:
    value = _TRACE_ID_CTX.get()
    return value or "unknown"


def _build_payload(event: str, fields: Dict[str, Any]) -> str:
    payload = {"event": event, "trace_id": get_trace_id(), **fields}
    return json.dumps(payload, ensure_ascii=False, default=str)


def log_event(event: str, **fields: Any) -> None:
    _LOGGER.info(_build_payload(event, fields))


def log_warning(event: str, **fields: Any) -> None:
    """Same JSON line as `log_event`, at WARNING so failures survive INFO filters."""
    _LOGGER.warning(_build_payload(event, fields))


def log_provider_failure(tool: str, agent_id: str, exc: Exception) -> None:
    """Record an upstream weather failure before it propagates to the caller.

    The event name is the error's `kind` (`provider_unavailable`,
    `malformed_provider_response`); the HTTP status is attached when known.
    """
    fields: Dict[str, Any] = {"tool": tool, "agent_id": agent_id, "error": str(exc)}
    status_code = getattr(exc, "status_code", None)
    if status_code is not None:
        fields["status_code"] = status_code
    log_warning(getattr(exc, "kind", type(exc).__name__), **fields)
