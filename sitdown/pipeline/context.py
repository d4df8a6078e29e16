"""Lazy template context exposing the staged tree around a page.

Templates see three kinds of names while a page renders:

* ``root`` - a :class:`StagedDirView` over the top of the staged tree.
* ``parent`` - a :class:`StagedDirView` over the page's containing directory.
* anything else - the page's own merged metadata (``title``, ``content``,
  ``url`` and every custom front-matter key).

``root.pages``, ``root.dirs``, ``parent.pages`` and ``parent.dirs`` are read
from the working directory each time a template asks for them; nothing is
cached between lookups. A sibling whose staged file is missing or malformed is
skipped with a warning rather than failing every page that lists it.

Example
-------
.. code-block:: jinja

    <nav>
    {% for dir in root.dirs %}<a href="{{ dir.url }}">{{ dir.title }}</a>{% endfor %}
    </nav>
    <h1>{{ title }}</h1>
    {{ content }}
    {% for page in parent.pages %}<a href="{{ page.url }}">{{ page.title }}</a>{% endfor %}
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import os
import typing as typ
from pathlib import Path

from markupsafe import Markup

from .._constants import CONTENT_KEY, DIR_MARKER, RESERVED_CONTEXT_KEYS, STAGED_SUFFIX
from ..errors import SitdownError
from .stage import read_dir_record, read_page_record

if typ.TYPE_CHECKING:
    from .models import PageInfo

logger = logging.getLogger(__name__)


def _page_values(info: PageInfo) -> dict[str, typ.Any]:
    """Return a page's merged metadata with its body marked as safe HTML."""
    values = info.merged_metadata()
    values[CONTENT_KEY] = Markup(values[CONTENT_KEY])
    return values


class StagedDirView:
    """Read-on-access view over one directory of the staged tree."""

    _KEYS = frozenset({"pages", "dirs", "title", "location", "url"})

    def __init__(self, path: Path) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"StagedDirView({str(self.path)!r})"

    def __getitem__(self, key: str) -> typ.Any:
        """Support ``dir["pages"]`` lookups from templates."""
        if key not in self._KEYS:
            raise KeyError(key)
        return getattr(self, key)

    @property
    def pages(self) -> list[dict[str, typ.Any]]:
        """Metadata of every page staged directly in this directory."""
        entries: list[dict[str, typ.Any]] = []
        for entry in self._scan():
            if entry.name.startswith(".") or not entry.name.endswith(STAGED_SUFFIX):
                continue
            if not entry.is_file():
                continue
            try:
                entries.append(_page_values(read_page_record(Path(entry.path))))
            except SitdownError as exc:
                logger.warning("Skipping page in listing: %s", exc)
        return entries

    @property
    def dirs(self) -> list[StagedDirView]:
        """Views over every staged subdirectory of this directory.

        Each entry is itself lazy, so templates can walk ``dir.pages`` and
        ``dir.dirs`` of a listed section. Directories whose marker cannot be
        read are skipped with a warning.
        """
        entries: list[StagedDirView] = []
        for entry in self._scan():
            if not entry.is_dir():
                continue
            child = Path(entry.path)
            if not (child / DIR_MARKER).is_file():
                continue
            try:
                read_dir_record(child)
            except SitdownError as exc:
                logger.warning("Skipping directory in listing: %s", exc)
                continue
            entries.append(StagedDirView(child))
        return entries

    @property
    def title(self) -> str | None:
        return self._marker_value("title")

    @property
    def location(self) -> str | None:
        return self._marker_value("location")

    @property
    def url(self) -> str | None:
        return self._marker_value("url")

    def _marker_value(self, key: str) -> str | None:
        try:
            return read_dir_record(self.path).to_context()[key]
        except SitdownError as exc:
            logger.warning("Directory metadata unavailable: %s", exc)
            return None

    def _scan(self) -> list[os.DirEntry[str]]:
        """List this directory sorted by name; a missing directory is empty."""
        try:
            with os.scandir(self.path) as entries:
                return sorted(entries, key=lambda entry: entry.name)
        except OSError as exc:
            logger.warning("Cannot list staged directory %s: %s", self.path, exc)
            return []


class PageContext(cabc.Mapping[str, typ.Any]):
    """Mapping handed to the template engine when rendering one page.

    ``root`` and ``parent`` always resolve to directory views and shadow any
    front-matter keys with the same names.
    """

    def __init__(
        self, page: PageInfo, *, root: StagedDirView, parent: StagedDirView
    ) -> None:
        self.page = page
        self.root = root
        self.parent = parent
        self._values = {
            key: value
            for key, value in _page_values(page).items()
            if key not in RESERVED_CONTEXT_KEYS
        }

    def __getitem__(self, key: str) -> typ.Any:
        if key == "root":
            return self.root
        if key == "parent":
            return self.parent
        return self._values[key]

    def __iter__(self) -> cabc.Iterator[str]:
        yield "root"
        yield "parent"
        yield from self._values

    def __len__(self) -> int:
        return len(self._values) + 2


__all__ = ["PageContext", "StagedDirView"]
