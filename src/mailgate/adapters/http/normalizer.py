"""HTTP adapter – ResponseNormalizer.

Providers covered here answer HTTP 200 for nearly everything, so outcome
detection happens on the body, in a fixed order:

1. **Sentinel**: an exact, verbatim body (Elastic Email answers
   ``"Unauthorized: "``) means the credentials were rejected.  Checked before
   any structural parsing.
2. **HTTP status**: a non-2xx status is a :class:`ProviderError`
   (``auth_status_codes`` map to :class:`InvalidCredentialsError` instead).
3. **Shape**: an operation expecting XML gets
   :class:`MalformedResponseError` when the body does not start with ``<``;
   such bodies are plain-text error messages.

Everything else is returned as an opaque payload (transaction id,
attachment id).
"""
from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, Iterable

from mailgate.adapters.http.wire import WireResponse
from mailgate.application.email.results import AccountDetails, StatusResult
from mailgate.kernel.errors import InvalidCredentialsError, MalformedResponseError, ProviderError

__all__ = ["ResponseNormalizer", "Shape", "as_float", "as_int"]

_XML_START = "<"


class Shape(str, Enum):
    """What an operation expects back from the provider."""

    TEXT = "text"
    XML = "xml"
    JSON = "json"
    STATUS = "status"
    ACCOUNT = "account"


def as_int(value: Any) -> int:
    """Lenient integer coercion; missing or non-numeric values become ``0``."""
    if value is None:
        return 0
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return 0


def as_float(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        return float(str(value).strip())
    except ValueError:
        return 0.0


class ResponseNormalizer:
    """Turn raw provider responses into results or typed failures."""

    def __init__(
        self,
        provider: str,
        *,
        sentinel: str | None = None,
        auth_status_codes: Iterable[int] = (),
    ) -> None:
        self.provider = provider
        self.sentinel = sentinel
        self.auth_status_codes = frozenset(auth_status_codes)

    def parse(self, response: WireResponse, expected: Shape = Shape.TEXT) -> Any:
        """Check *response* and return it in the *expected* shape."""
        body = self.check(response)
        if expected is Shape.STATUS:
            return self.parse_status(body)
        if expected is Shape.ACCOUNT:
            return self.parse_account(body)
        if expected is Shape.XML:
            return self.expect_xml(body)
        if expected is Shape.JSON:
            return self.parse_json(body)
        return body

    def check(self, response: WireResponse) -> str:
        """Return the body text, or raise the failure it signals."""
        body = response.text
        if self.sentinel is not None and body == self.sentinel:
            raise InvalidCredentialsError(self.provider)
        if response.status_code in self.auth_status_codes:
            raise InvalidCredentialsError(self.provider)
        if not response.ok:
            raise ProviderError(
                self.provider,
                f"{self.provider} answered HTTP {response.status_code}",
                status_code=response.status_code,
                body=body,
            )
        return body

    def expect_xml(self, body: str) -> ET.Element:
        if not body.startswith(_XML_START):
            raise MalformedResponseError(self.provider, body)
        try:
            return ET.fromstring(body)
        except ET.ParseError as exc:
            raise MalformedResponseError(
                self.provider, body, f"Unparsable XML from {self.provider}: {exc}", cause=exc
            ) from exc

    def parse_status(self, body: str) -> StatusResult:
        root = self.expect_xml(body)
        return StatusResult(
            id=root.get("id", ""),
            status=_text(root, "status"),
            recipients=as_int(_text(root, "recipients")),
            failed=as_int(_text(root, "failed")),
            delivered=as_int(_text(root, "delivered")),
            pending=as_int(_text(root, "pending")),
        )

    def parse_account(self, body: str) -> AccountDetails:
        root = self.expect_xml(body)
        return AccountDetails(
            account_id=root.get("id", ""),
            credit_balance=as_float(_text(root, "credit")),
        )

    def parse_json(self, body: str) -> Any:
        try:
            return json.loads(body)
        except ValueError as exc:
            raise MalformedResponseError(
                self.provider, body, f"Invalid JSON from {self.provider}", cause=exc
            ) from exc


def _text(root: ET.Element, tag: str) -> str:
    return (root.findtext(tag) or "").strip()
