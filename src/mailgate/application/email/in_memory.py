"""Application email – InMemoryProviderAdapter for unit tests."""
from __future__ import annotations

import uuid

from mailgate.application.email.message import Attachment, Message, require_template
from mailgate.application.email.results import AccountDetails, StatusResult

__all__ = ["InMemoryProviderAdapter"]


class InMemoryProviderAdapter:
    """Fake ProviderAdapter that captures traffic in memory.

    Every sent message is reported ``Sent`` and fully delivered by
    :meth:`get_status`.
    """

    name = "in_memory"

    def __init__(self, account_id: str = "in-memory", credit_balance: float = 0.0) -> None:
        self.sent: list[Message] = []
        self.templates_sent: list[Message] = []
        self.uploads: list[Attachment] = []
        self._ids: dict[str, Message] = {}
        self._account = AccountDetails(account_id=account_id, credit_balance=credit_balance)

    def send(self, message: Message) -> str:
        if message.template_id:
            return self.send_template(message)
        self.sent.append(message)
        return self._record(message)

    def send_template(self, message: Message) -> str:
        require_template(message)
        self.templates_sent.append(message)
        return self._record(message)

    def get_status(self, transaction_id: str, *, format: str | None = None) -> StatusResult:  # noqa: A002
        message = self._ids.get(transaction_id)
        if message is None:
            return StatusResult(id=transaction_id, status="Unknown")
        count = len(message.to)
        return StatusResult(id=transaction_id, status="Sent", recipients=count, delivered=count)

    def get_account_details(self, *, format: str | None = None) -> AccountDetails:  # noqa: A002
        return self._account

    def upload_attachment(self, attachment: Attachment) -> str:
        self.uploads.append(attachment)
        return f"mem-att-{len(self.uploads)}"

    def reset(self) -> None:
        """Clear the outbox."""
        self.sent.clear()
        self.templates_sent.clear()
        self.uploads.clear()
        self._ids.clear()

    # convenience helpers
    @property
    def count(self) -> int:
        return len(self.sent) + len(self.templates_sent)

    def last(self) -> Message | None:
        return next(reversed(self._ids.values()), None)

    def _record(self, message: Message) -> str:
        msg_id = str(uuid.uuid4())
        self._ids[msg_id] = message
        return msg_id
