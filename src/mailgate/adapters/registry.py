"""Adapters – provider name → adapter class registry."""
from __future__ import annotations

from typing import Callable

from mailgate.adapters.elastic_email import ElasticEmailAdapter
from mailgate.adapters.http.wire import Transport
from mailgate.adapters.mailjet import MailjetAdapter
from mailgate.application.email.provider import ProviderAdapter
from mailgate.application.email.results import ProviderCredentials
from mailgate.kernel.errors import UnsupportedOperationError

AdapterFactory = Callable[..., ProviderAdapter]

ADAPTERS: dict[str, AdapterFactory] = {
    ElasticEmailAdapter.name: ElasticEmailAdapter,
    MailjetAdapter.name: MailjetAdapter,
}


def build_adapter(
    provider: str,
    credentials: ProviderCredentials,
    transport: Transport,
    base_url: str | None = None,
) -> ProviderAdapter:
    """Instantiate the adapter registered under *provider*."""
    try:
        factory = ADAPTERS[provider]
    except KeyError:
        raise UnsupportedOperationError(provider, "mail delivery (unknown provider)") from None
    if base_url:
        return factory(credentials, transport, base_url=base_url)
    return factory(credentials, transport)


__all__ = ["ADAPTERS", "build_adapter"]
