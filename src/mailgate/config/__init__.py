"""Config – 12-factor settings, loaders and gateway configuration."""

from mailgate.config.gateway import SUPPORTED_PROVIDERS, GatewaySettings
from mailgate.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from mailgate.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "SUPPORTED_PROVIDERS",
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "GatewaySettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
