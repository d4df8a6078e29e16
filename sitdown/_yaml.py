"""Shared YAML loading and dumping for front matter and staged records."""

from __future__ import annotations

import io
import typing as typ

from ruamel.yaml import YAML


def _build_safe_yaml() -> YAML:
    """Return a YAML 1.2 safe loader/dumper with deterministic output."""
    yaml = YAML(typ="safe", pure=True)
    yaml.version = (1, 2)
    yaml.default_flow_style = False
    yaml.allow_unicode = True
    yaml.width = 4096
    return yaml


def load_yaml(text: str) -> typ.Any:
    """Parse ``text`` as a single YAML document.

    Raises
    ------
    ruamel.yaml.error.YAMLError
        If the document is not valid YAML.
    """
    return _build_safe_yaml().load(text)


def dump_yaml(data: typ.Any) -> str:
    """Serialize ``data`` to YAML text; mapping keys are emitted sorted."""
    stream = io.StringIO()
    yaml = _build_safe_yaml()
    yaml.version = None
    yaml.dump(data, stream)
    return stream.getvalue()


__all__ = ["dump_yaml", "load_yaml"]
