"""Application email – MailGateway facade."""
from __future__ import annotations

from typing import TYPE_CHECKING

from mailgate.application.email.message import Attachment, Message
from mailgate.application.email.provider import ProviderAdapter
from mailgate.application.email.results import AccountDetails, StatusResult
from mailgate.kernel.errors import ValidationError
from mailgate.observability.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from mailgate.adapters.http.wire import Transport
    from mailgate.config.gateway import GatewaySettings

__all__ = ["MailGateway"]

_log = get_logger(__name__)


class MailGateway:
    """Single entry point for callers; holds one configured adapter.

    Every operation validates its input locally, then delegates to the
    adapter and returns (or raises) exactly what the adapter produced.
    """

    def __init__(self, adapter: ProviderAdapter) -> None:
        self._adapter = adapter

    @classmethod
    def from_settings(cls, settings: "GatewaySettings", transport: "Transport | None" = None) -> "MailGateway":
        """Build a gateway for ``settings.provider``.

        Without an explicit *transport* an :class:`HttpxTransport` honouring
        ``settings.timeout`` is created.
        """
        from mailgate.adapters.http.client import HttpxTransport  # noqa: PLC0415
        from mailgate.adapters.registry import build_adapter  # noqa: PLC0415

        transport = transport or HttpxTransport(timeout=settings.timeout)
        adapter = build_adapter(
            settings.provider,
            settings.credentials(),
            transport,
            base_url=settings.base_url,
        )
        return cls(adapter)

    @property
    def adapter(self) -> ProviderAdapter:
        return self._adapter

    @property
    def provider(self) -> str:
        return self._adapter.name

    def send(self, message: Message) -> str:
        """Send *message*, routing template messages to the template path."""
        message.validate()
        _log.debug("gateway.send", provider=self.provider, template=message.is_template, recipients=len(message.to))
        return self._adapter.send(message)

    def send_template(self, message: Message) -> str:
        message.validate()
        return self._adapter.send_template(message)

    def get_email_status(self, transaction_id: str) -> StatusResult:
        _require_id(transaction_id)
        return self._adapter.get_status(transaction_id)

    def get_account_details(self) -> AccountDetails:
        return self._adapter.get_account_details()

    def upload_attachment(self, attachment: Attachment) -> str:
        attachment.validate()
        return self._adapter.upload_attachment(attachment)


def _require_id(transaction_id: str) -> None:
    if not transaction_id or not str(transaction_id).strip():
        raise ValidationError.for_field("id", "A transaction id is required")
