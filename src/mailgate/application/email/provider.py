"""Application email – ProviderAdapter Protocol (port)."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from mailgate.application.email.message import Attachment, Message
from mailgate.application.email.results import AccountDetails, StatusResult

__all__ = ["ProviderAdapter"]


@runtime_checkable
class ProviderAdapter(Protocol):
    """Port: the uniform operation set every ESP adapter implements.

    Each call is one synchronous request/response.  Failures surface as
    :mod:`mailgate.kernel.errors` types; adapters never retry.
    """

    name: str

    def send(self, message: Message) -> str:
        """Send *message*; template messages go through :meth:`send_template`.

        Returns the provider transaction id.
        """
        ...

    def send_template(self, message: Message) -> str:
        """Send a stored-template message; requires ``message.template_id``."""
        ...

    def get_status(self, transaction_id: str, *, format: str | None = None) -> StatusResult:  # noqa: A002
        ...

    def get_account_details(self, *, format: str | None = None) -> AccountDetails:  # noqa: A002
        ...

    def upload_attachment(self, attachment: Attachment) -> str:
        """Upload *attachment* for later reuse; returns the provider attachment id."""
        ...
