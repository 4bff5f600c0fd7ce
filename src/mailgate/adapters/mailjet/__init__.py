"""Mailjet adapter – Basic-auth JSON API with server-side templates."""
from mailgate.adapters.mailjet.adapter import MailjetAdapter
from mailgate.adapters.mailjet.builder import API_ENDPOINT, MailjetRequestBuilder

__all__ = ["API_ENDPOINT", "MailjetAdapter", "MailjetRequestBuilder"]
