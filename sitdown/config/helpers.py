"""Utility helpers shared by the sitdown configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError

ENV_PREFIX = "SITDOWN_"
_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


def _require_str(key: str, value: object) -> str:
    """Return ``value`` when it is a non-empty string, else raise."""
    if not isinstance(value, str) or not value.strip():
        msg = f"'{key}' must be a non-empty string, got {value!r}"
        raise SiteConfigError(msg)
    return value.strip()


def _require_path(key: str, value: object) -> Path:
    return Path(_require_str(key, value))


def _require_bool(key: str, value: object) -> bool:
    """Coerce booleans and their common string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    msg = f"'{key}' must be a boolean, got {value!r}"
    raise SiteConfigError(msg)


def _require_str_tuple(key: str, value: object) -> tuple[str, ...]:
    """Normalize a list (or comma-separated string) into a tuple of names."""
    if isinstance(value, str):
        items: list[object] = [segment for segment in value.split(",")]
    elif isinstance(value, list):
        items = list(value)
    else:
        msg = f"'{key}' must be a list of strings, got {value!r}"
        raise SiteConfigError(msg)
    normalized: list[str] = []
    for item in items:
        text = _require_str(key, item)
        normalized.append(text)
    return tuple(normalized)


def _env_overrides(environ: typ.Mapping[str, str]) -> dict[str, str]:
    """Return lower-cased top-level keys taken from ``SITDOWN_*`` variables."""
    overrides: dict[str, str] = {}
    for name, value in environ.items():
        if name.startswith(ENV_PREFIX) and len(name) > len(ENV_PREFIX):
            overrides[name[len(ENV_PREFIX) :].lower()] = value
    return overrides


__all__ = [
    "ENV_PREFIX",
    "_env_overrides",
    "_require_bool",
    "_require_path",
    "_require_str",
    "_require_str_tuple",
]
