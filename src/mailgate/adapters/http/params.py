"""HTTP adapter – query-parameter helpers shared by request builders."""
from __future__ import annotations

from typing import Any, Iterable, Mapping
from urllib.parse import quote

from mailgate.kernel.errors import UnsupportedFormatError

DEFAULT_FORMATS: tuple[str, ...] = ("xml", "csv")


def validate_format(
    params: Mapping[str, Any] | None,
    allowed: Iterable[str] = DEFAULT_FORMATS,
    *,
    provider: str | None = None,
) -> None:
    """Raise :class:`UnsupportedFormatError` if ``params['format']`` is not allowed."""
    if not params or params.get("format") is None:
        return
    allowed = tuple(allowed)
    requested = str(params["format"])
    if requested not in allowed:
        raise UnsupportedFormatError(requested, allowed, provider=provider)


def merge_params(defaults: Mapping[str, Any], *overrides: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge query parameters left to right; later values win, ``None`` drops a key."""
    merged: dict[str, Any] = dict(defaults)
    for override in overrides:
        if override:
            merged.update(override)
    return {k: v for k, v in merged.items() if v is not None}


def join_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def path_segment(value: str) -> str:
    """Percent-encode *value* as a single path segment (no `/`, no dot segments)."""
    return quote(str(value), safe="").replace(".", "%2E")


__all__ = ["DEFAULT_FORMATS", "join_url", "merge_params", "path_segment", "validate_format"]
