"""Observability – get_logger helper and log-safe body preview."""
from __future__ import annotations

from typing import Any

import structlog

_PREVIEW_LIMIT = 120


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def preview(body: str | bytes | None, limit: int = _PREVIEW_LIMIT) -> str:
    """Truncate a response body for inclusion in a log event."""
    if body is None:
        return ""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body if len(body) <= limit else body[:limit] + "..."


__all__ = ["get_logger", "preview"]
