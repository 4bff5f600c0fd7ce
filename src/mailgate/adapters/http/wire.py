"""HTTP adapter – wire request/response values and the Transport port."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable

__all__ = ["Transport", "WireRequest", "WireResponse"]


@dataclass(frozen=True)
class WireRequest:
    """A fully-built provider request; nothing left to resolve at send time.

    ``params`` become the query string.  ``body`` is either raw bytes (sent
    as-is) or a JSON-serialisable object (sent as ``application/json``);
    ``form`` is sent url-encoded and excludes ``body``.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    body: bytes | dict[str, Any] | list[Any] | None = None
    form: Mapping[str, str] | None = None
    operation: str = ""

    @property
    def is_json(self) -> bool:
        return isinstance(self.body, (dict, list))

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


@dataclass(frozen=True)
class WireResponse:
    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Port: perform one blocking HTTP round-trip.

    Implementations raise :class:`~mailgate.kernel.errors.TransportError`
    on network failure and return every HTTP response, whatever its status.
    """

    def execute(self, request: WireRequest) -> WireResponse:
        ...
