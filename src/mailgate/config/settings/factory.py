"""Config settings – SettingsFactory."""
from __future__ import annotations

from typing import Any, Mapping, Sequence, TypeVar

from mailgate.config.settings.base import Settings
from mailgate.config.settings.loaders import SettingsLoader, construct, required_fields
from mailgate.config.validation.errors import MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Layer several sources into one settings object.

    Each loader contributes the fields it knows about; later loaders win,
    and *overrides* win over every loader.  A field counts as missing only
    when no source provides it.  A value that is present but invalid raises
    :class:`InvalidSettingValueError` straight away, whichever source it
    came from.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> T:
        merged: dict[str, Any] = {}
        for loader in loaders or ():
            merged.update(loader.values(settings_cls))
        merged.update(overrides or {})

        missing = [name for name in required_fields(settings_cls) if name not in merged]
        if missing:
            raise MissingRequiredSettingError(missing[0])
        return construct(settings_cls, merged)


__all__ = ["SettingsFactory"]
