"""Infrastructure errors – transport failures and unexpected provider replies."""

from __future__ import annotations

from typing import Any

from mailgate.kernel.errors.base import BaseError

_BODY_PREVIEW = 200


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a validation problem."""

    default_code = "infrastructure_error"


class TransportError(InfrastructureError):
    """The HTTP round-trip itself failed (DNS, connect, TLS, reset, ...)."""

    default_code = "transport_error"

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.method = method
        self.url = url


class TransportTimeoutError(TransportError):
    """The HTTP round-trip exceeded the transport's deadline."""

    default_code = "transport_timeout"


class ProviderError(InfrastructureError):
    """The provider answered, but not with a usable result."""

    default_code = "provider_error"

    def __init__(
        self,
        provider: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        body: str | None = None,
        **kwargs: Any,
    ) -> None:
        detail = kwargs.pop("detail", None) or {}
        detail.setdefault("provider", provider)
        if status_code is not None:
            detail.setdefault("status_code", status_code)
        if body is not None:
            detail.setdefault("body", body[:_BODY_PREVIEW])
        super().__init__(
            message or f"An error occurred on {provider}", detail=detail, **kwargs
        )
        self.provider = provider
        self.status_code = status_code
        self.body = body


class MalformedResponseError(ProviderError):
    """The response body does not have the shape the operation expects.

    ``body`` always holds the raw, untruncated body for diagnostics.
    """

    default_code = "malformed_response"

    def __init__(self, provider: str, body: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            provider,
            message or f"An error occurred on {provider}: {body}",
            body=body,
            **kwargs,
        )


__all__ = [
    "InfrastructureError",
    "MalformedResponseError",
    "ProviderError",
    "TransportError",
    "TransportTimeoutError",
]
