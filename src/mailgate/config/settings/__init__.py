"""Config settings – 12-factor env-based configuration."""
from mailgate.config.settings.base import Settings
from mailgate.config.settings.factory import SettingsFactory
from mailgate.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
