"""HTTP adapter – HttpxTransport."""
from __future__ import annotations

from typing import Any

import httpx

from mailgate.adapters.http.wire import WireRequest, WireResponse
from mailgate.kernel.errors import TransportError, TransportTimeoutError
from mailgate.observability.logging import get_logger

_log = get_logger(__name__)


class HttpxTransport:
    """Blocking httpx wrapper with structured error mapping.

    Non-2xx responses are returned, not raised: providers signal most
    failures in the body, so classification belongs to the normaliser.
    """

    def __init__(self, timeout: float = 10.0, client: httpx.Client | None = None, **kwargs: Any) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, **kwargs)

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def execute(self, request: WireRequest) -> WireResponse:
        kwargs: dict[str, Any] = {"headers": dict(request.headers)}
        if request.params:
            kwargs["params"] = dict(request.params)
        if request.form is not None:
            kwargs["data"] = dict(request.form)
        elif request.is_json:
            kwargs["json"] = request.body
        elif request.body is not None:
            kwargs["content"] = request.body

        _log.debug("http.request", method=request.method, url=request.url, operation=request.operation)
        try:
            response = self._client.request(request.method, request.url, **kwargs)
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError(
                f"HTTP request timed out: {request.method} {request.url}",
                method=request.method,
                url=request.url,
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"HTTP request failed: {request.method} {request.url}: {exc}",
                method=request.method,
                url=request.url,
                cause=exc,
            ) from exc

        _log.debug(
            "http.response",
            method=request.method,
            url=request.url,
            status_code=response.status_code,
        )
        return WireResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )


__all__ = ["HttpxTransport"]
