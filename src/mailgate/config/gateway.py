"""Config – GatewaySettings for selecting and authenticating a provider."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from mailgate.application.email.results import ProviderCredentials
from mailgate.config.settings.base import Settings
from mailgate.config.settings.factory import SettingsFactory
from mailgate.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader
from mailgate.config.validation import InvalidSettingValueError

SUPPORTED_PROVIDERS: frozenset[str] = frozenset({"elastic_email", "mailjet"})


@dataclasses.dataclass(repr=False)
class GatewaySettings(Settings):
    """Environment-driven gateway configuration (``MAILGATE_*`` variables).

    ``public_key``/``private_key`` are the Elastic Email username/API key or
    the Mailjet public/private key pair.
    """

    _prefix: ClassVar[str] = "MAILGATE"

    public_key: str
    private_key: str
    provider: str = "elastic_email"
    base_url: str | None = None
    timeout: float = 10.0
    log_level: str = "INFO"

    def _validate(self) -> None:
        if self.provider not in SUPPORTED_PROVIDERS:
            raise InvalidSettingValueError(
                "provider", self.provider, f"expected one of {sorted(SUPPORTED_PROVIDERS)}"
            )
        for name in ("public_key", "private_key"):
            if not getattr(self, name):
                raise InvalidSettingValueError(name, getattr(self, name), "must not be empty", secret=True)
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")

    def __repr__(self) -> str:
        return (
            f"GatewaySettings(provider={self.provider!r}, base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, log_level={self.log_level!r}, credentials=***)"
        )

    def credentials(self) -> ProviderCredentials:
        return ProviderCredentials(public_key=self.public_key, private_key=self.private_key)

    @classmethod
    def load(cls, env_file: str | None = None, **overrides: object) -> "GatewaySettings":
        """Load from the environment, optionally layered over a ``.env`` file."""
        loaders = [DotenvSettingsLoader(env_file)] if env_file else [EnvSettingsLoader()]
        return SettingsFactory.create(cls, loaders, overrides or None)


__all__ = ["SUPPORTED_PROVIDERS", "GatewaySettings"]
