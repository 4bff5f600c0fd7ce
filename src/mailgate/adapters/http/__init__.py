"""HTTP adapter – wire types, httpx transport and response normalisation."""
from mailgate.adapters.http.client import HttpxTransport
from mailgate.adapters.http.normalizer import ResponseNormalizer, Shape
from mailgate.adapters.http.params import DEFAULT_FORMATS, merge_params, validate_format
from mailgate.adapters.http.wire import Transport, WireRequest, WireResponse

__all__ = [
    "DEFAULT_FORMATS",
    "HttpxTransport",
    "ResponseNormalizer",
    "Shape",
    "Transport",
    "WireRequest",
    "WireResponse",
    "merge_params",
    "validate_format",
]
