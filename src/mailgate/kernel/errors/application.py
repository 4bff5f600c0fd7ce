"""Application-layer errors – caller requests a provider cannot honour."""

from __future__ import annotations

from typing import Any, Iterable

from mailgate.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnsupportedFormatError(ApplicationError):
    """A response format outside the provider's allow-list was requested."""

    default_code = "unsupported_format"

    def __init__(
        self,
        requested: str,
        allowed: Iterable[str],
        *,
        provider: str | None = None,
        **kwargs: Any,
    ) -> None:
        allowed = tuple(allowed)
        label = f"{provider} API" if provider else "the provider API"
        quoted = " or ".join(f'"{f}"' for f in allowed)
        super().__init__(
            f'Formats supported by {label} are {quoted}, "{requested}" given',
            detail={"format": requested, "allowed": list(allowed)},
            **kwargs,
        )
        self.requested = requested
        self.allowed = allowed
        self.provider = provider


class UnsupportedOperationError(ApplicationError):
    """The selected provider has no equivalent for the requested operation."""

    default_code = "unsupported_operation"

    def __init__(self, provider: str, operation: str, **kwargs: Any) -> None:
        super().__init__(
            f"{provider} does not support '{operation}'",
            detail={"provider": provider, "operation": operation},
            **kwargs,
        )
        self.provider = provider
        self.operation = operation


class InvalidCredentialsError(ApplicationError):
    """The provider rejected the configured credentials."""

    default_code = "invalid_credentials"

    def __init__(self, provider: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"Authentication error: missing or incorrect {provider} API key",
            detail={"provider": provider},
            **kwargs,
        )
        self.provider = provider


__all__ = [
    "ApplicationError",
    "InvalidCredentialsError",
    "UnsupportedFormatError",
    "UnsupportedOperationError",
]
