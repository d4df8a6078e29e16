"""Load ``sitdown.toml`` into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

from .helpers import (
    _env_overrides,
    _require_bool,
    _require_path,
    _require_str,
    _require_str_tuple,
)
from .models import MarkdownOptions, SiteConfig, SiteConfigError

_PATH_KEYS = ("content_dir", "template_dir", "asset_dir", "output_dir", "working_dir")
_KNOWN_KEYS = frozenset((*_PATH_KEYS, "page_template", "strict_templates", "markdown"))


def load_site_config(
    path: Path, *, environ: typ.Mapping[str, str] | None = None
) -> SiteConfig:
    """Load the site configuration, layering environment overrides on top.

    Parameters
    ----------
    path : Path
        Filesystem path to ``sitdown.toml``. A missing file is not an error;
        the built-in defaults are used instead.
    environ : Mapping[str, str], optional
        Environment to read ``SITDOWN_*`` overrides from; defaults to
        ``os.environ``.

    Returns
    -------
    SiteConfig
        Resolved configuration. Relative directories stay relative to the
        current working directory.

    Raises
    ------
    SiteConfigError
        If the TOML cannot be parsed, a value has the wrong type, or an
        unknown key is present.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sitdown.config import load_site_config
    >>> config = load_site_config(Path("missing.toml"), environ={})
    >>> config.page_template
    'default'
    """
    raw: dict[str, typ.Any] = {}
    if path.exists():
        try:
            document = tomlkit.parse(path.read_text(encoding="utf-8"))
        except ParseError as exc:
            msg = f"Unable to parse config TOML at {path}: {exc}"
            raise SiteConfigError(msg) from exc
        raw = dict(document.unwrap())

    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration key(s) in {path}: {', '.join(unknown)}"
        raise SiteConfigError(msg)

    env = os.environ if environ is None else environ
    for key, value in _env_overrides(env).items():
        if key in _KNOWN_KEYS and key != "markdown":
            raw[key] = value

    base = SiteConfig()
    values: dict[str, typ.Any] = {}
    for key in _PATH_KEYS:
        if key in raw:
            values[key] = _require_path(key, raw[key])
    if "page_template" in raw:
        values["page_template"] = _require_str("page_template", raw["page_template"])
    if "strict_templates" in raw:
        values["strict_templates"] = _require_bool(
            "strict_templates", raw["strict_templates"]
        )
    values["markdown"] = _build_markdown_options(raw.get("markdown"), base.markdown)
    return dc.replace(base, **values)


def _build_markdown_options(
    payload: object, base: MarkdownOptions
) -> MarkdownOptions:
    """Build MarkdownOptions from the optional ``[markdown]`` table."""
    if payload is None:
        return base
    if not isinstance(payload, dict):
        msg = "'markdown' must be a table"
        raise SiteConfigError(msg)
    extensions = base.extensions
    if "extensions" in payload:
        extensions = _require_str_tuple("markdown.extensions", payload["extensions"])
    metadata_blocks = base.metadata_blocks
    if "metadata_blocks" in payload:
        metadata_blocks = _require_bool(
            "markdown.metadata_blocks", payload["metadata_blocks"]
        )
    pygments_style = base.pygments_style
    if "pygments_style" in payload:
        pygments_style = _require_str(
            "markdown.pygments_style", payload["pygments_style"]
        )
    rewrite_links = base.rewrite_links
    if "rewrite_links" in payload:
        rewrite_links = _require_bool("markdown.rewrite_links", payload["rewrite_links"])
    return MarkdownOptions(
        extensions=extensions,
        metadata_blocks=metadata_blocks,
        pygments_style=pygments_style,
        rewrite_links=rewrite_links,
    )


__all__ = ["load_site_config"]
