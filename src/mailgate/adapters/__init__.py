"""Adapters – HTTP transport and one ProviderAdapter per email service provider."""
