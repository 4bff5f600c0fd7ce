"""Kernel security – default sensitive fields and credential masking."""
from __future__ import annotations

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "api_key", "apikey",
    "authorization", "public_key", "private_key", "credentials",
})

MASK = "***"


def mask_secret(value: str | None, visible: int = 0) -> str:
    """Return *value* masked, optionally keeping the last *visible* characters."""
    if not value:
        return MASK
    if visible <= 0 or visible >= len(value):
        return MASK
    return MASK + value[-visible:]


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "MASK", "mask_secret"]
