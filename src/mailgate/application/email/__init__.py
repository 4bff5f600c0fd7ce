"""Application email – message model, provider port, facade and in-memory fake."""
from mailgate.application.email.message import Attachment, Message, Part, PartType
from mailgate.application.email.results import AccountDetails, ProviderCredentials, StatusResult
from mailgate.application.email.provider import ProviderAdapter
from mailgate.application.email.in_memory import InMemoryProviderAdapter
from mailgate.application.email.gateway import MailGateway

__all__ = [
    "AccountDetails",
    "Attachment",
    "InMemoryProviderAdapter",
    "MailGateway",
    "Message",
    "Part",
    "PartType",
    "ProviderAdapter",
    "ProviderCredentials",
    "StatusResult",
]
