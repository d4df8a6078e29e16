"""Turn a raw tree of source paths into an annotated tree.

Pages are read through the front-matter extractor, classified, and have their
``title`` and ``template`` resolved with a fixed precedence: explicit front
matter first, then the configured default template, then the title derived
from the filename. Directories are only classified.

Annotation is all-or-nothing: every failing node is collected and reported in
one :class:`~sitdown.errors.AnnotationError`. Two pages resolving to the same
output location are reported as an :class:`~sitdown.errors.OutputConflictError`
naming both sources.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path, PurePosixPath

from .._constants import LOCATION_KEYS, OUTPUT_SUFFIX, TEMPLATE_KEYS, TITLE_KEYS
from ..content import MarkdownRenderer, read_document
from ..errors import (
    AnnotationError,
    FrontMatterError,
    OutputConflictError,
    SitdownError,
)
from ..paths import classify_dir, classify_page
from .models import DirInfo, PageInfo

if typ.TYPE_CHECKING:
    from ..config.models import MarkdownOptions, PageDefaults
    from ..tree import Dir

logger = logging.getLogger(__name__)


def annotate(
    tree: Dir[Path, Path],
    defaults: PageDefaults,
    options: MarkdownOptions,
    *,
    renderer: MarkdownRenderer | None = None,
) -> Dir[DirInfo, PageInfo]:
    """Map every raw node to its annotated payload.

    Parameters
    ----------
    tree : Dir[Path, Path]
        Raw tree produced by :func:`sitdown.tree.load`; its root payload is
        the content root.
    defaults : PageDefaults
        Fallback values, such as the default template name.
    options : MarkdownOptions
        Markdown parse options handed to the extractor.
    renderer : MarkdownRenderer, optional
        Renderer to reuse for every page; built from ``options`` if omitted.

    Returns
    -------
    Dir[DirInfo, PageInfo]
        Tree of the same shape with annotated payloads.

    Raises
    ------
    AnnotationError
        If any node failed; ``failures`` lists every per-node error.
    """
    root = tree.data
    active = renderer or MarkdownRenderer(options)
    failures: list[SitdownError] = []
    claimed: dict[Path, Path] = {}

    def _dir(path: Path) -> DirInfo | None:
        try:
            return annotate_dir(path, root)
        except SitdownError as exc:
            failures.append(exc)
            return None

    def _page(path: Path) -> PageInfo | None:
        try:
            info = annotate_page(path, root, defaults, options, renderer=active)
        except SitdownError as exc:
            failures.append(exc)
            return None
        owner = claimed.setdefault(info.location, path)
        if owner != path:
            failures.append(OutputConflictError(path, owner, info.location))
            return None
        return info

    annotated = tree.map(_dir, _page)
    if failures:
        raise AnnotationError(failures)
    logger.info("Annotated %d page(s)", sum(1 for _ in annotated.iter_pages()))
    return typ.cast("Dir[DirInfo, PageInfo]", annotated)


def annotate_dir(path: Path, root: Path | None = None) -> DirInfo:
    """Return the annotated payload for one directory."""
    info = classify_dir(path, root)
    return DirInfo(title=info.title, location=info.location)


def annotate_page(
    path: Path,
    root: Path | None,
    defaults: PageDefaults,
    options: MarkdownOptions,
    *,
    renderer: MarkdownRenderer | None = None,
) -> PageInfo:
    """Return the annotated payload for one page.

    Raises
    ------
    ContentIOError
        If the page cannot be read.
    FrontMatterError
        If the front matter is malformed or sets an unusable value.
    PageError
        If the filename cannot be decoded.
    """
    document = read_document(path, options, renderer=renderer)
    info = classify_page(path, root)
    meta = dict(document.meta)
    title = _pop_text(meta, TITLE_KEYS, path) or info.title
    template = _pop_text(meta, TEMPLATE_KEYS, path) or defaults.template
    explicit = _pop_text(meta, LOCATION_KEYS, path)
    location = _explicit_location(explicit, path) if explicit else info.location
    logger.debug("Annotated %s -> %s (template %s)", path, location, template)
    return PageInfo(
        template=template,
        location=location,
        title=title,
        meta=meta,
        content=document.content,
    )


def _pop_text(
    meta: dict[str, typ.Any], keys: tuple[str, ...], path: Path
) -> str | None:
    """Remove every alias in ``keys`` from ``meta``; return the first as text.

    Scalars are converted to strings, booleans in their YAML spelling; a null
    value counts as absent.
    """
    found: object = None
    for key in keys:
        value = meta.pop(key, None)
        if found is None:
            found = value
    if found is None:
        return None
    if isinstance(found, (dict, list)):
        msg = f"'{keys[0]}' must be a scalar value"
        raise FrontMatterError(path, msg)
    if isinstance(found, bool):
        return "true" if found else "false"
    text = str(found).strip()
    return text or None


def _explicit_location(value: str, path: Path) -> Path:
    """Validate a front-matter output location and force the output suffix."""
    candidate = PurePosixPath(value)
    if candidate.is_absolute() or ".." in candidate.parts or not candidate.name:
        msg = f"location '{value}' must be a relative path inside the site"
        raise FrontMatterError(path, msg)
    return Path(candidate).with_suffix(OUTPUT_SUFFIX)


__all__ = ["annotate", "annotate_dir", "annotate_page"]
