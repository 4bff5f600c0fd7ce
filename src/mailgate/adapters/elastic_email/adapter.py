"""Elastic Email – ProviderAdapter over the Elastic Email HTTP API."""
from __future__ import annotations

from typing import Any, Sequence

from mailgate.adapters.elastic_email.builder import API_ENDPOINT, PROVIDER, ElasticEmailRequestBuilder
from mailgate.adapters.http.normalizer import ResponseNormalizer, Shape
from mailgate.adapters.http.wire import Transport, WireRequest
from mailgate.application.email.message import Attachment, Message, require_template
from mailgate.application.email.results import AccountDetails, ProviderCredentials, StatusResult
from mailgate.kernel.errors import BaseError
from mailgate.observability.logging import get_logger, preview

__all__ = ["UNAUTHORIZED_SENTINEL", "ElasticEmailAdapter"]

# Elastic Email answers HTTP 200 with exactly this body on bad credentials.
UNAUTHORIZED_SENTINEL = "Unauthorized: "


class ElasticEmailAdapter:
    """Elastic Email implementation of :class:`~mailgate.application.email.ProviderAdapter`.

    Status and account calls answer XML on success and a bare text message
    otherwise; sends and uploads answer the bare transaction/attachment id.

    Elastic Email references attachments by upload id.  A message's
    attachments are uploaded first, one request each, and the send carries
    the returned ids.  Ids of files uploaded earlier with
    :meth:`upload_attachment` can be passed as ``attachment_ids``.
    """

    name = "elastic_email"

    def __init__(
        self,
        credentials: ProviderCredentials,
        transport: Transport,
        base_url: str = API_ENDPOINT,
    ) -> None:
        self._builder = ElasticEmailRequestBuilder(credentials, base_url)
        self._transport = transport
        self._normalizer = ResponseNormalizer(PROVIDER, sentinel=UNAUTHORIZED_SENTINEL)
        self._log = get_logger(__name__, provider=self.name)

    @property
    def builder(self) -> ElasticEmailRequestBuilder:
        return self._builder

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def send(self, message: Message, *, attachment_ids: Sequence[str] = ()) -> str:
        if message.template_id:
            return self.send_template(message, attachment_ids=attachment_ids)
        ids = self._attachment_ids(message, attachment_ids)
        return self._call(self._builder.build_send(message, ids), Shape.TEXT)

    def send_template(self, message: Message, *, attachment_ids: Sequence[str] = ()) -> str:
        require_template(message)
        ids = self._attachment_ids(message, attachment_ids)
        return self._call(self._builder.build_send_template(message, ids), Shape.TEXT)

    def get_status(self, transaction_id: str, *, format: str | None = None) -> StatusResult:  # noqa: A002
        request = self._builder.build_status(transaction_id, {"format": format})
        return self._call(request, Shape.STATUS)

    # ------------------------------------------------------------------
    # Accounts and attachments
    # ------------------------------------------------------------------

    def get_account_details(self, *, format: str | None = None) -> AccountDetails:  # noqa: A002
        request = self._builder.build_account_details({"format": format})
        return self._call(request, Shape.ACCOUNT)

    def upload_attachment(self, attachment: Attachment) -> str:
        return self._call(self._builder.build_upload(attachment), Shape.TEXT)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _call(self, request: WireRequest, expected: Shape) -> Any:
        log = self._log.bind(operation=request.operation)
        log.debug("provider.request", method=request.method, url=request.url)
        response = self._transport.execute(request)
        try:
            result = self._normalizer.parse(response, expected)
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

    def _attachment_ids(self, message: Message, already_uploaded: Sequence[str]) -> list[str]:
        """Upload the message's attachments; their ids follow *already_uploaded*."""
        return [*already_uploaded, *(self.upload_attachment(a) for a in message.attachments)]
