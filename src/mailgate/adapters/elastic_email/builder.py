"""Elastic Email – request builder.

Pure translation of operations into :class:`WireRequest` objects for the
Elastic Email HTTP API.  Credentials travel as the ``username`` and
``api_key`` query parameters on every call.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from mailgate.adapters.http.params import (
    DEFAULT_FORMATS,
    join_url,
    merge_params,
    path_segment,
    validate_format,
)
from mailgate.adapters.http.wire import WireRequest
from mailgate.application.email.message import Attachment, Message, require_template
from mailgate.application.email.results import ProviderCredentials

__all__ = ["ElasticEmailRequestBuilder"]

API_ENDPOINT = "https://api.elasticemail.com"
PROVIDER = "Elastic Email"

# Elastic Email infers an attachment's type from its file extension and only
# accepts uploads sent with this content type.
UPLOAD_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ElasticEmailRequestBuilder:
    def __init__(self, credentials: ProviderCredentials, base_url: str = API_ENDPOINT) -> None:
        self._credentials = credentials
        self._base_url = base_url

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def build_send(self, message: Message, attachment_ids: Sequence[str] = ()) -> WireRequest:
        form = self._message_fields(message)
        form["body_text"] = message.text_body
        form["body_html"] = message.html_body
        if attachment_ids:
            form["attachments"] = ";".join(attachment_ids)
        return self._post("/mailer/send", form, operation="send")

    def build_send_template(self, message: Message, attachment_ids: Sequence[str] = ()) -> WireRequest:
        """Template send: ``template`` plus one ``merge_<name>`` field per variable.

        A form cannot carry Elastic's list of variable sets, so the single set
        a message holds is flattened.
        """
        template_id = require_template(message)
        form = self._message_fields(message)
        form["template"] = template_id
        for name, value in message.template_vars.items():
            form[f"merge_{name}"] = value
        if attachment_ids:
            form["attachments"] = ";".join(attachment_ids)
        return self._post("/mailer/send", form, operation="send_template")

    def build_status(self, transaction_id: str, params: Mapping[str, Any] | None = None) -> WireRequest:
        path = f"/mailer/status/{path_segment(transaction_id)}"
        return self.build_get(path, params, operation="get_status")

    # ------------------------------------------------------------------
    # Accounts and attachments
    # ------------------------------------------------------------------

    def build_account_details(self, params: Mapping[str, Any] | None = None) -> WireRequest:
        return self.build_get("/mailer/account-details", params, operation="get_account_details")

    def build_upload(self, attachment: Attachment) -> WireRequest:
        """PUT the raw bytes; the declared content type is not sent."""
        return WireRequest(
            method="PUT",
            url=join_url(self._base_url, "/attachments/upload"),
            headers={
                "Content-Type": UPLOAD_CONTENT_TYPE,
                "Content-Length": str(attachment.size),
            },
            params=merge_params(self._auth_params(), {"file": attachment.filename}),
            body=attachment.content,
            operation="upload_attachment",
        )

    def build_get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        operation: str = "get",
    ) -> WireRequest:
        """Generic GET; raises :class:`UnsupportedFormatError` before building anything."""
        validate_format(params, DEFAULT_FORMATS, provider=PROVIDER)
        return WireRequest(
            method="GET",
            url=join_url(self._base_url, path),
            params=merge_params(self._auth_params(), params),
            operation=operation,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _auth_params(self) -> dict[str, str]:
        return {
            "username": self._credentials.public_key,
            "api_key": self._credentials.private_key,
        }

    def _message_fields(self, message: Message) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "from": message.sender.email,
            "from_name": message.sender.display_name,
            "to": ";".join(addr.email for addr in message.to),
            "subject": message.subject,
            "channel": message.channel,
        }
        if message.reply_to is not None:
            fields["reply_to"] = message.reply_to.email
            fields["reply_to_name"] = message.reply_to.display_name
        return fields

    def _post(self, path: str, form: Mapping[str, Any], *, operation: str) -> WireRequest:
        return WireRequest(
            method="POST",
            url=join_url(self._base_url, path),
            params=self._auth_params(),
            form=merge_params(form),
            operation=operation,
        )
