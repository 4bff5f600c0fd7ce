"""Unit tests – Elastic Email request builder and adapter."""
from __future__ import annotations

import pytest

from mailgate.adapters.elastic_email import (
    API_ENDPOINT,
    UNAUTHORIZED_SENTINEL,
    ElasticEmailAdapter,
    ElasticEmailRequestBuilder,
)
from mailgate.application.email import Attachment, Message, Part, ProviderCredentials, StatusResult
from mailgate.kernel.errors import (
    InvalidCredentialsError,
    MalformedResponseError,
    TransportError,
    UnsupportedFormatError,
    ValidationError,
)
from mailgate.testing.fakes import FakeTransport

CREDS = ProviderCredentials(public_key="shop-user", private_key="ee-api-key")


def _message(**overrides) -> Message:
    defaults = {
        "sender": "Shop <shop@example.com>",
        "to": ["alice@example.com", "Bob <bob@example.com>"],
        "subject": "Receipt",
        "parts": [Part.text("plain"), Part.html("<b>html</b>")],
    }
    defaults.update(overrides)
    return Message(**defaults)


@pytest.fixture
def builder() -> ElasticEmailRequestBuilder:
    return ElasticEmailRequestBuilder(CREDS)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def adapter(transport: FakeTransport) -> ElasticEmailAdapter:
    return ElasticEmailAdapter(CREDS, transport)


# ---------------------------------------------------------------------------
# Request builder
# ---------------------------------------------------------------------------

class TestBuildSend:
    def test_endpoint_and_auth_params(self, builder: ElasticEmailRequestBuilder) -> None:
        request = builder.build_send(_message())
        assert request.method == "POST"
        assert request.url == f"{API_ENDPOINT}/mailer/send"
        assert request.params == {"username": "shop-user", "api_key": "ee-api-key"}

    def test_message_fields(self, builder: ElasticEmailRequestBuilder) -> None:
        form = builder.build_send(_message()).form
        assert form["from"] == "shop@example.com"
        assert form["from_name"] == "Shop"
        assert form["to"] == "alice@example.com;bob@example.com"
        assert form["subject"] == "Receipt"
        assert form["body_text"] == "plain"
        assert form["body_html"] == "<b>html</b>"

    def test_display_names_cannot_break_recipient_list(self, builder: ElasticEmailRequestBuilder) -> None:
        msg = _message(to=['"Smith; Jones <x>" <sj@example.com>', "c@example.com"])
        assert builder.build_send(msg).form["to"] == "sj@example.com;c@example.com"

    def test_unset_fields_are_omitted(self, builder: ElasticEmailRequestBuilder) -> None:
        form = builder.build_send(_message(sender="shop@example.com", parts=[Part.text("t")])).form
        assert "from_name" not in form
        assert "body_html" not in form
        assert "reply_to" not in form
        assert "channel" not in form

    def test_reply_to_and_channel(self, builder: ElasticEmailRequestBuilder) -> None:
        form = builder.build_send(_message(reply_to="Support <help@example.com>", channel="receipts")).form
        assert form["reply_to"] == "help@example.com"
        assert form["reply_to_name"] == "Support"
        assert form["channel"] == "receipts"

    def test_attachment_ids_joined(self, builder: ElasticEmailRequestBuilder) -> None:
        form = builder.build_send(_message(), attachment_ids=["11", "12"]).form
        assert form["attachments"] == "11;12"

    def test_custom_base_url(self) -> None:
        request = ElasticEmailRequestBuilder(CREDS, "https://ee.test/").build_send(_message())
        assert request.url == "https://ee.test/mailer/send"


class TestBuildSendTemplate:
    def test_template_and_merge_fields(self, builder: ElasticEmailRequestBuilder) -> None:
        msg = _message(template_id="welcome", template_vars={"firstname": "Alice", "plan": "pro"})
        request = builder.build_send_template(msg)
        assert request.operation == "send_template"
        assert request.form["template"] == "welcome"
        assert request.form["merge_firstname"] == "Alice"
        assert request.form["merge_plan"] == "pro"
        assert "body_html" not in request.form

    def test_missing_template(self, builder: ElasticEmailRequestBuilder) -> None:
        with pytest.raises(ValidationError, match="missing template"):
            builder.build_send_template(_message())


class TestBuildGet:
    def test_status_request(self, builder: ElasticEmailRequestBuilder) -> None:
        request = builder.build_status("tx-1", {"format": "xml"})
        assert request.method == "GET"
        assert request.url == f"{API_ENDPOINT}/mailer/status/tx-1"
        assert request.params == {"username": "shop-user", "api_key": "ee-api-key", "format": "xml"}

    def test_status_id_is_a_single_escaped_segment(self, builder: ElasticEmailRequestBuilder) -> None:
        request = builder.build_status("../account-details")
        assert request.url == f"{API_ENDPOINT}/mailer/status/%2E%2E%2Faccount-details"

    def test_explicit_params_override_defaults(self, builder: ElasticEmailRequestBuilder) -> None:
        request = builder.build_get("/mailer/account-details", {"username": "other", "format": None})
        assert request.params == {"username": "other", "api_key": "ee-api-key"}

    @pytest.mark.parametrize("fmt", ["xml", "csv"])
    def test_allowed_formats(self, builder: ElasticEmailRequestBuilder, fmt: str) -> None:
        assert builder.build_account_details({"format": fmt}).params["format"] == fmt

    def test_unsupported_format(self, builder: ElasticEmailRequestBuilder) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            builder.build_status("tx-1", {"format": "json"})
        assert exc_info.value.allowed == ("xml", "csv")


class TestBuildUpload:
    def test_put_with_fixed_headers(self, builder: ElasticEmailRequestBuilder) -> None:
        data = b"%PDF-1.4 fake document"
        request = builder.build_upload(Attachment("invoice.pdf", data))
        assert request.method == "PUT"
        assert request.url == f"{API_ENDPOINT}/attachments/upload"
        assert request.body is data
        assert request.header("Content-Type") == "application/x-www-form-urlencoded"
        assert request.header("Content-Length") == str(len(data))
        assert request.params["file"] == "invoice.pdf"
        assert request.params["api_key"] == "ee-api-key"

    @pytest.mark.parametrize("override", [None, "image/png", "application/pdf"])
    def test_declared_type_ignored(self, builder: ElasticEmailRequestBuilder, override: str | None) -> None:
        request = builder.build_upload(Attachment("logo.png", b"\x89PNG", content_type_override=override))
        assert request.header("content-type") == "application/x-www-form-urlencoded"
        assert request.header("content-length") == "4"


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------

class TestElasticEmailAdapterSend:
    def test_send_returns_transaction_id(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply("d2b1c5e6-tx")
        assert adapter.send(_message()) == "d2b1c5e6-tx"
        assert transport.last.operation == "send"

    def test_send_routes_template_messages(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply("tx-tpl")
        msg = _message(template_id="welcome", template_vars={"name": "Alice"})
        assert adapter.send(msg) == "tx-tpl"
        assert transport.last.operation == "send_template"
        assert transport.last.form["template"] == "welcome"

    def test_send_template_without_template(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        with pytest.raises(ValidationError):
            adapter.send_template(_message())
        assert transport.count == 0

    def test_message_attachments_uploaded_before_send(
        self, adapter: ElasticEmailAdapter, transport: FakeTransport
    ) -> None:
        transport.reply("11").reply("12").reply("tx")
        msg = _message(attachments=[Attachment("a.txt", b"x"), Attachment("b.pdf", b"yz")])
        assert adapter.send(msg, attachment_ids=["7"]) == "tx"
        uploads, send = transport.requests[:2], transport.requests[2]
        assert [r.operation for r in uploads] == ["upload_attachment", "upload_attachment"]
        assert [r.params["file"] for r in uploads] == ["a.txt", "b.pdf"]
        assert send.operation == "send"
        assert send.form["attachments"] == "7;11;12"

    def test_template_attachments_uploaded_before_send(
        self, adapter: ElasticEmailAdapter, transport: FakeTransport
    ) -> None:
        transport.reply("21").reply("tx-tpl")
        msg = _message(template_id="welcome", attachments=[Attachment("a.txt", b"x")])
        assert adapter.send(msg) == "tx-tpl"
        assert transport.last.operation == "send_template"
        assert transport.last.form["attachments"] == "21"

    def test_failed_upload_stops_the_send(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply(UNAUTHORIZED_SENTINEL)
        with pytest.raises(InvalidCredentialsError):
            adapter.send(_message(attachments=[Attachment("a.txt", b"x")]))
        assert transport.count == 1

    def test_send_with_uploaded_attachment_ids(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply("tx")
        adapter.send(_message(), attachment_ids=["99"])
        assert transport.last.form["attachments"] == "99"

    def test_invalid_credentials(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply(UNAUTHORIZED_SENTINEL)
        with pytest.raises(InvalidCredentialsError):
            adapter.send(_message())

    def test_transport_error_propagates(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.fail(TransportError("connection reset"))
        with pytest.raises(TransportError):
            adapter.send(_message())


class TestElasticEmailAdapterQueries:
    def test_get_status(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply(
            '<delivery id="tx-1"><status>Sent</status><recipients>10</recipients>'
            "<failed>1</failed><delivered>8</delivered><pending>1</pending></delivery>"
        )
        result = adapter.get_status("tx-1")
        assert result == StatusResult("tx-1", "Sent", 10, 1, 8, 1)
        assert transport.last.url.endswith("/mailer/status/tx-1")
        assert "format" not in transport.last.params

    def test_get_status_error_message(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply("No such transaction")
        with pytest.raises(MalformedResponseError) as exc_info:
            adapter.get_status("tx-404")
        assert exc_info.value.body == "No such transaction"

    def test_get_status_unsupported_format_sends_nothing(
        self, adapter: ElasticEmailAdapter, transport: FakeTransport
    ) -> None:
        with pytest.raises(UnsupportedFormatError):
            adapter.get_status("tx-1", format="json")
        assert transport.count == 0

    def test_get_account_details(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply('<account id="acc-7"><credit>19.99</credit></account>')
        details = adapter.get_account_details(format="xml")
        assert (details.account_id, details.credit_balance) == ("acc-7", 19.99)
        assert transport.last.params["format"] == "xml"

    def test_get_account_details_invalid_credentials(
        self, adapter: ElasticEmailAdapter, transport: FakeTransport
    ) -> None:
        transport.reply(UNAUTHORIZED_SENTINEL)
        with pytest.raises(InvalidCredentialsError):
            adapter.get_account_details()

    def test_upload_attachment(self, adapter: ElasticEmailAdapter, transport: FakeTransport) -> None:
        transport.reply("4821")
        assert adapter.upload_attachment(Attachment("report.csv", b"a,b\n1,2\n")) == "4821"
        assert transport.last.method == "PUT"
        assert transport.last.header("Content-Length") == "8"
