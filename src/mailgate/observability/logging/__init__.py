"""Observability – structured logging helpers."""
from mailgate.observability.logging.filters import SensitiveFieldsFilter
from mailgate.observability.logging.factory import JsonLoggerFactory
from mailgate.observability.logging.processors import get_logger, preview

__all__ = [
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
    "preview",
]
