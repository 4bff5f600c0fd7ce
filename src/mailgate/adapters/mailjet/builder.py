"""Mailjet – request builder.

Sends are JSON ``POST /v3/send`` calls; lookups are JSON REST resources.
Credentials travel as an HTTP Basic ``Authorization`` header.
"""
from __future__ import annotations

import base64
from typing import Any, Mapping

from mailgate.adapters.http.params import join_url, merge_params, path_segment, validate_format
from mailgate.adapters.http.wire import WireRequest
from mailgate.application.email.message import Message, require_template, template_var_sets
from mailgate.application.email.results import ProviderCredentials

__all__ = ["API_ENDPOINT", "MailjetRequestBuilder"]

API_ENDPOINT = "https://api.mailjet.com"
PROVIDER = "Mailjet"
FORMATS: tuple[str, ...] = ("json",)


class MailjetRequestBuilder:
    def __init__(self, credentials: ProviderCredentials, base_url: str = API_ENDPOINT) -> None:
        token = base64.b64encode(
            f"{credentials.public_key}:{credentials.private_key}".encode()
        ).decode()
        self._auth_header = f"Basic {token}"
        self._base_url = base_url

    def build_send(self, message: Message) -> WireRequest:
        payload = self._envelope(message)
        if message.text_body is not None:
            payload["Text-part"] = message.text_body
        if message.html_body is not None:
            payload["Html-part"] = message.html_body
        if message.attachments:
            payload["Attachments"] = [
                {
                    "Content-type": attachment.content_type,
                    "Filename": attachment.filename,
                    "content": base64.b64encode(attachment.content).decode("ascii"),
                }
                for attachment in message.attachments
            ]
        return self._post("/v3/send", payload, operation="send")

    def build_send_template(self, message: Message) -> WireRequest:
        payload = self._envelope(message)
        payload["MJ-TemplateID"] = require_template(message)
        payload["MJ-TemplateLanguage"] = True
        payload["Vars"] = template_var_sets(message)
        return self._post("/v3/send", payload, operation="send_template")

    def build_status(self, transaction_id: str, params: Mapping[str, Any] | None = None) -> WireRequest:
        path = f"/v3/REST/message/{path_segment(transaction_id)}"
        return self.build_get(path, params, operation="get_status")

    def build_account_details(self, params: Mapping[str, Any] | None = None) -> WireRequest:
        return self.build_get("/v3/REST/myprofile", params, operation="get_account_details")

    def build_get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        operation: str = "get",
    ) -> WireRequest:
        validate_format(params, FORMATS, provider=PROVIDER)
        # the REST API only speaks JSON; the format is validated, never sent
        query = merge_params(params or {}, {"format": None})
        return WireRequest(
            method="GET",
            url=join_url(self._base_url, path),
            headers=self._headers(),
            params=query,
            operation=operation,
        )

    def _headers(self) -> dict[str, str]:
        return {"Authorization": self._auth_header, "Accept": "application/json"}

    def _envelope(self, message: Message) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "FromEmail": message.sender.email,
            "Subject": message.subject,
            "Recipients": [
                {"Email": addr.email, "Name": addr.display_name}
                if addr.display_name
                else {"Email": addr.email}
                for addr in message.to
            ],
        }
        if message.sender.display_name:
            payload["FromName"] = message.sender.display_name
        if message.reply_to is not None:
            payload["Headers"] = {"Reply-To": str(message.reply_to)}
        if message.channel:
            payload["Mj-campaign"] = message.channel
        return payload

    def _post(self, path: str, payload: dict[str, Any], *, operation: str) -> WireRequest:
        return WireRequest(
            method="POST",
            url=join_url(self._base_url, path),
            headers=self._headers(),
            body=payload,
            operation=operation,
        )
