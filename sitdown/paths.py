r"""Derive titles and output locations from content paths.

The classifier is the first thing the annotator asks about every node. It
turns a source path such as ``content/blog/my_first_post.md`` into the title
``"my first post"`` and the output location ``blog/my_first_post.html``
(relative to the output root). Directories keep their relative path with no
suffix.

Example
-------
>>> from pathlib import Path
>>> from sitdown.paths import classify_page
>>> info = classify_page(Path("content/blog/my_first_post.md"))
>>> info.title, info.location.as_posix()
('my first post', 'blog/my_first_post.html')
"""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path, PurePath

from ._constants import HOME_STEM, INDEX_STEM, OUTPUT_SUFFIX
from .errors import DirError, PageError


@dc.dataclass(frozen=True, slots=True)
class PathInfo:
    """Title and output location derived from a source path.

    Attributes
    ----------
    title : str
        Human-readable name with underscores replaced by spaces.
    location : Path
        Location relative to the output root.
    """

    title: str
    location: Path


def _is_text(name: str) -> bool:
    """Return True when ``name`` round-trips as UTF-8 text.

    Undecodable bytes in POSIX filenames surface as lone surrogates, which
    cannot be encoded strictly.
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _relative_parts(path: PurePath, root: PurePath | None) -> tuple[str, ...]:
    """Return ``path`` components with the content root removed."""
    if root is not None:
        return path.relative_to(root).parts
    return path.parts[1:]


def _titleize(name: str) -> str:
    return name.replace("_", " ")


def classify_page(path: PurePath, root: PurePath | None = None) -> PathInfo:
    """Return the derived title and ``.html`` output location for a page.

    Parameters
    ----------
    path : PurePath
        Source path of the page, starting with the content root.
    root : PurePath, optional
        Content root to strip. When omitted the first path component is
        treated as the root.

    Returns
    -------
    PathInfo
        Title from the file stem and the output location. A top-level page
        named ``home`` is written to ``index.html``.

    Raises
    ------
    PageError
        If the filename is empty or cannot be decoded as text.
    """
    name = path.name
    if not name or not _is_text(name):
        raise PageError(Path(path))
    parts = _relative_parts(path, root)
    if not parts:
        raise PageError(Path(path))
    stem = PurePath(name).stem
    location = Path(*parts).with_suffix(OUTPUT_SUFFIX)
    if len(parts) == 1 and stem == HOME_STEM:
        location = Path(INDEX_STEM + OUTPUT_SUFFIX)
    return PathInfo(title=_titleize(stem), location=location)


def classify_dir(path: PurePath, root: PurePath | None = None) -> PathInfo:
    """Return the derived title and output directory for a content directory.

    The content root itself maps to ``Path(".")``.

    Raises
    ------
    DirError
        If the directory name is empty or cannot be decoded as text.
    """
    name = path.name
    if not name or not _is_text(name):
        raise DirError(Path(path))
    parts = _relative_parts(path, root)
    location = Path(*parts) if parts else Path()
    return PathInfo(title=_titleize(name), location=location)


__all__ = ["PathInfo", "classify_dir", "classify_page"]
