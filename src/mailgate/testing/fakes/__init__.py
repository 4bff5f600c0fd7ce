"""Testing fakes – in-memory doubles for mailgate ports."""
from mailgate.application.email.in_memory import InMemoryProviderAdapter
from mailgate.testing.fakes.transport import FakeTransport

__all__ = ["FakeTransport", "InMemoryProviderAdapter"]
