"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, Mapping, TypeVar

from dotenv import dotenv_values

from mailgate.config.settings.base import Settings
from mailgate.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)

_TRUTHY = ("1", "true", "yes", "on")


def required_fields(settings_class: type[Settings]) -> list[str]:
    """Names of the fields that have neither a default nor a default factory."""
    return [
        f.name
        for f in dataclasses.fields(settings_class)  # type: ignore[arg-type]
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING  # type: ignore[misc]
    ]


def construct(settings_class: type[T], values: Mapping[str, Any]) -> T:
    """Instantiate *settings_class*; non-config failures become :class:`ConfigError`."""
    try:
        return settings_class(**values)
    except ConfigError:
        raise
    except Exception as exc:
        raise ConfigError(f"Failed to construct {settings_class.__name__}: {exc}", cause=exc) from exc


class SettingsLoader(abc.ABC):
    """Port: read settings values from an external source."""

    @abc.abstractmethod
    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        """Coerced values this source holds; absent fields are left out.

        Raises :class:`InvalidSettingValueError` for a value that is present
        but cannot be coerced.
        """

    def load(self, settings_class: type[T]) -> T:
        """Build a complete settings object from this source alone."""
        found = self.values(settings_class)
        for name in required_fields(settings_class):
            if name not in found:
                raise MissingRequiredSettingError(self.source_key(settings_class, name))
        return construct(settings_class, found)

    def source_key(self, settings_class: type[Settings], field_name: str) -> str:
        return field_name


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables named ``<PREFIX>_<FIELD>``."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        environ = os.environ if self._environ is None else self._environ
        hints = typing.get_type_hints(settings_class)
        found: dict[str, Any] = {}
        for f in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            key = self.source_key(settings_class, f.name)
            raw = environ.get(key)
            if raw is not None:
                found[f.name] = _coerce(key, raw, hints.get(f.name, str))
        return found

    def source_key(self, settings_class: type[Settings], field_name: str) -> str:
        prefix = getattr(settings_class, "_prefix", "")
        return f"{prefix}_{field_name}".upper().lstrip("_")


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file layered under the process environment.

    With ``override=True`` the file wins over existing environment variables.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override
        self._env = EnvSettingsLoader()

    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        from_file = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        layers = (os.environ, from_file) if self._override else (from_file, os.environ)
        environ = {**layers[0], **layers[1]}
        return EnvSettingsLoader(environ).values(settings_class)

    def source_key(self, settings_class: type[Settings], field_name: str) -> str:
        return self._env.source_key(settings_class, field_name)


def _coerce(key: str, value: str, type_hint: Any) -> Any:
    if typing.get_origin(type_hint) is not list:
        # Optional[X] / X | None
        members = [a for a in typing.get_args(type_hint) if a is not type(None)]
        if members:
            type_hint = members[0]
    if typing.get_origin(type_hint) is list:
        return [item.strip() for item in value.split(",") if item.strip()]
    if type_hint is bool:
        return value.strip().lower() in _TRUTHY
    if type_hint in (int, float):
        try:
            return type_hint(value)
        except ValueError as exc:
            raise InvalidSettingValueError(key, value, f"expected {type_hint.__name__}") from exc
    return value


__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "SettingsLoader",
    "construct",
    "required_fields",
]
