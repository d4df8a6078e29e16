"""Build the Jinja environment used to render pages.

Templates live as plain files directly inside the template directory and are
registered under their stem, so ``templates/page.jinja`` is addressed as
``page`` both from front matter (``template: page``) and from other templates
(``{% extends "layout" %}``). Subdirectories are ignored.
"""

from __future__ import annotations

import logging
import typing as typ

from jinja2 import DictLoader, Environment, StrictUndefined, Undefined

from .errors import ContentIOError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def read_templates(template_dir: Path) -> dict[str, str]:
    """Return template sources keyed by file stem.

    Raises
    ------
    ContentIOError
        If the directory or one of its files cannot be read, or two files
        share a stem.
    """
    try:
        entries = sorted(template_dir.iterdir())
    except OSError as exc:
        raise ContentIOError(template_dir, exc.strerror or str(exc)) from exc

    sources: dict[str, str] = {}
    for entry in entries:
        if entry.name.startswith(".") or not entry.is_file():
            logger.debug("Skipping %s while loading templates", entry)
            continue
        name = entry.stem
        if name in sources:
            raise ContentIOError(entry, f"duplicate template name '{name}'")
        try:
            sources[name] = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentIOError(entry, str(exc)) from exc
    logger.info("Loaded %d template(s) from %s", len(sources), template_dir)
    return sources


def build_environment(
    sources: typ.Mapping[str, str],
    *,
    strict: bool = False,
    globals_: typ.Mapping[str, typ.Any] | None = None,
) -> Environment:
    """Return a Jinja environment serving ``sources`` by name.

    Parameters
    ----------
    sources : Mapping[str, str]
        Template source text keyed by template name.
    strict : bool, optional
        Use ``StrictUndefined`` so a missing variable fails the page render.
    globals_ : Mapping[str, Any], optional
        Extra globals made available to every template.
    """
    env = Environment(
        loader=DictLoader(dict(sources)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined if strict else Undefined,
        keep_trailing_newline=True,
    )
    if globals_:
        env.globals.update(globals_)
    return env


def load_templates(
    template_dir: Path,
    *,
    strict: bool = False,
    globals_: typ.Mapping[str, typ.Any] | None = None,
) -> Environment:
    """Read ``template_dir`` and return the environment serving its templates."""
    return build_environment(
        read_templates(template_dir), strict=strict, globals_=globals_
    )


__all__ = ["build_environment", "load_templates", "read_templates"]
