"""Mailjet – ProviderAdapter over the Mailjet v3 API."""
from __future__ import annotations

from typing import Any

from mailgate.adapters.http.normalizer import ResponseNormalizer, Shape, as_float
from mailgate.adapters.http.wire import Transport, WireRequest
from mailgate.adapters.mailjet.builder import API_ENDPOINT, PROVIDER, MailjetRequestBuilder
from mailgate.application.email.message import Attachment, Message, require_template
from mailgate.application.email.results import AccountDetails, ProviderCredentials, StatusResult
from mailgate.kernel.errors import BaseError, MalformedResponseError, UnsupportedOperationError
from mailgate.observability.logging import get_logger, preview

__all__ = ["MailjetAdapter"]

_DELIVERED = frozenset({"sent", "opened", "clicked"})
_FAILED = frozenset({"bounce", "hardbounced", "softbounced", "spam", "blocked", "unsub"})


class MailjetAdapter:
    """Mailjet implementation of :class:`~mailgate.application.email.ProviderAdapter`.

    Mailjet tracks one message per recipient, so a status lookup always
    reports a single recipient in exactly one of the delivered, failed or
    pending buckets.  Mailjet has no account credit and no reusable
    attachment storage.
    """

    name = "mailjet"

    def __init__(
        self,
        credentials: ProviderCredentials,
        transport: Transport,
        base_url: str = API_ENDPOINT,
    ) -> None:
        self._builder = MailjetRequestBuilder(credentials, base_url)
        self._transport = transport
        self._normalizer = ResponseNormalizer(PROVIDER, auth_status_codes=(401,))
        self._log = get_logger(__name__, provider=self.name)

    @property
    def builder(self) -> MailjetRequestBuilder:
        return self._builder

    def send(self, message: Message) -> str:
        if message.template_id:
            return self.send_template(message)
        return self._message_id(self._call(self._builder.build_send(message)))

    def send_template(self, message: Message) -> str:
        require_template(message)
        return self._message_id(self._call(self._builder.build_send_template(message)))

    def get_status(self, transaction_id: str, *, format: str | None = None) -> StatusResult:  # noqa: A002
        body = self._call(self._builder.build_status(transaction_id, {"format": format}))
        record = self._first_record(body)
        status = str(record.get("Status", ""))
        state = status.lower()
        return StatusResult(
            id=str(record.get("ID", transaction_id)),
            status=status,
            recipients=1,
            delivered=int(state in _DELIVERED),
            failed=int(state in _FAILED),
            pending=int(state not in _DELIVERED and state not in _FAILED),
        )

    def get_account_details(self, *, format: str | None = None) -> AccountDetails:  # noqa: A002
        body = self._call(self._builder.build_account_details({"format": format}))
        record = self._first_record(body)
        return AccountDetails(
            account_id=str(record.get("ID", "")),
            credit_balance=as_float(record.get("Credit")),
        )

    def upload_attachment(self, attachment: Attachment) -> str:
        raise UnsupportedOperationError(self.name, "upload_attachment")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _call(self, request: WireRequest) -> Any:
        log = self._log.bind(operation=request.operation)
        log.debug("provider.request", method=request.method, url=request.url)
        response = self._transport.execute(request)
        try:
            result = self._normalizer.parse(response, Shape.JSON)
        except BaseError as exc:
            log.warning(
                "provider.failure",
                code=exc.code,
                status_code=response.status_code,
                body=preview(response.body),
            )
            raise
        log.info("provider.success", status_code=response.status_code)
        return result

    def _message_id(self, body: Any) -> str:
        sent = _first(body, "Sent")
        if sent is None or "MessageID" not in sent:
            raise MalformedResponseError(PROVIDER, repr(body), "Mailjet send response has no MessageID")
        return str(sent["MessageID"])

    def _first_record(self, body: Any) -> dict[str, Any]:
        record = _first(body, "Data")
        if record is None:
            raise MalformedResponseError(PROVIDER, repr(body), "Mailjet response has no Data record")
        return record


def _first(body: Any, key: str) -> dict[str, Any] | None:
    """First object of the ``body[key]`` list, or ``None`` when the shape differs."""
    items = body.get(key) if isinstance(body, dict) else None
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    return items[0]
