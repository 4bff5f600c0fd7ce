"""
mailgate – uniform gateway over transactional email providers.

Import path convention::

    from mailgate.kernel.errors import InvalidCredentialsError
    from mailgate.application.email import Message, MailGateway
    from mailgate.adapters.elastic_email import ElasticEmailAdapter
    from mailgate.adapters.http import HttpxTransport
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
