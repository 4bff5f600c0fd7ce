"""Application email – provider credentials and normalised result values."""
from __future__ import annotations

from dataclasses import dataclass

from mailgate.kernel.security import mask_secret

__all__ = ["AccountDetails", "ProviderCredentials", "StatusResult"]


@dataclass(frozen=True)
class ProviderCredentials:
    """Opaque key pair owned by an adapter for its whole lifetime.

    For Elastic Email ``public_key`` is the account username and
    ``private_key`` the API key; for Mailjet they are the public and private
    API keys.  ``repr`` never reveals either value.
    """

    public_key: str
    private_key: str

    def __repr__(self) -> str:
        return (
            f"ProviderCredentials(public_key={mask_secret(self.public_key)!r}, "
            f"private_key={mask_secret(self.private_key)!r})"
        )

    __str__ = __repr__


@dataclass(frozen=True)
class StatusResult:
    """Delivery status of one transaction as reported by the provider."""

    id: str
    status: str
    recipients: int = 0
    failed: int = 0
    delivered: int = 0
    pending: int = 0

    def __post_init__(self) -> None:
        for name in ("recipients", "failed", "delivered", "pending"):
            object.__setattr__(self, name, max(0, int(getattr(self, name))))

    @property
    def is_consistent(self) -> bool:
        """Whether the per-state counts add up to ``recipients`` (a hint only)."""
        return self.recipients == self.failed + self.delivered + self.pending


@dataclass(frozen=True)
class AccountDetails:
    account_id: str
    credit_balance: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "credit_balance", max(0.0, float(self.credit_balance)))
