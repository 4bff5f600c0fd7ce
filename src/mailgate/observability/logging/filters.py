"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from typing import Any

from mailgate.kernel.security import DEFAULT_SENSITIVE_FIELDS


class SensitiveFieldsFilter:
    """structlog processor masking credential-bearing keys in log events.

    Keys are matched case-insensitively at any depth, so request params
    or headers bound as nested dicts are covered as well.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))

    def redact(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: self.REDACTED if str(k).lower() in self._fields else self.redact(v)
                for k, v in value.items()
            }
        if isinstance(value, list):
            return [self.redact(item) for item in value]
        return value

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact(event_dict)


__all__ = ["SensitiveFieldsFilter"]
