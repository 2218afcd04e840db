"""Correlation id propagation.

A correlation id ties together every log event emitted while handling one
API request or one scheduler run, including events from services awaited
on the same task. It lives in a ContextVar so it follows the async call
chain without being threaded through signatures.

Usage:
    set_correlation_id(request.headers.get("X-Correlation-ID") or generate_correlation_id())
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string means "not set".
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Return a fresh correlation id (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Return the current correlation id, or "" when none is set."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the current correlation id, if any."""
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
