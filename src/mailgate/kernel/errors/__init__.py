"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                  (domain.py)
    │   └── ValidationError
    ├── ApplicationError             (application.py)
    │   ├── UnsupportedFormatError
    │   ├── UnsupportedOperationError
    │   └── InvalidCredentialsError
    └── InfrastructureError          (infrastructure.py)
        ├── TransportError
        │   └── TransportTimeoutError
        └── ProviderError
            └── MalformedResponseError

Configuration errors (``mailgate.config.validation``) hang off
``ApplicationError`` as well.
"""

from mailgate.kernel.errors.application import (
    ApplicationError,
    InvalidCredentialsError,
    UnsupportedFormatError,
    UnsupportedOperationError,
)
from mailgate.kernel.errors.base import BaseError
from mailgate.kernel.errors.domain import DomainError, ValidationError
from mailgate.kernel.errors.infrastructure import (
    InfrastructureError,
    MalformedResponseError,
    ProviderError,
    TransportError,
    TransportTimeoutError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "InvalidCredentialsError",
    "MalformedResponseError",
    "ProviderError",
    "TransportError",
    "TransportTimeoutError",
    "UnsupportedFormatError",
    "UnsupportedOperationError",
    "ValidationError",
]
