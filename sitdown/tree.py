"""Generic directory/page tree shared by every pipeline stage.

The same two node shapes are reused from the filesystem scan through to the
render pass; only the payloads change. ``Dir[D, P]`` carries a directory
payload of type ``D`` and ``Page[P]`` carries a page payload of type ``P``.
Stage transitions never mutate payloads; :meth:`Dir.map` builds a new tree of
identical shape.

Example
-------
>>> from pathlib import Path
>>> from sitdown.tree import Dir, Page
>>> tree = Dir(Path("content"), [Page(Path("content/a.md"))], [])
>>> lengths = tree.map(lambda d: len(d.parts), lambda p: len(p.parts))
>>> lengths.data, lengths.pages[0].data
(1, 2)
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import os
import typing as typ
from pathlib import Path

from .errors import ContentIOError

D = typ.TypeVar("D")
P = typ.TypeVar("P")
D2 = typ.TypeVar("D2")
P2 = typ.TypeVar("P2")

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class Page(typ.Generic[P]):
    """A leaf node carrying one page payload."""

    data: P


@dc.dataclass(slots=True)
class Dir(typ.Generic[D, P]):
    """A directory node with ordered child pages and child directories.

    Attributes
    ----------
    data : D
        Stage-specific directory payload.
    pages : list[Page[P]]
        Pages directly inside this directory.
    dirs : list[Dir[D, P]]
        Subdirectories, each a full subtree.
    """

    data: D
    pages: list[Page[P]] = dc.field(default_factory=list)
    dirs: list[Dir[D, P]] = dc.field(default_factory=list)

    def map(
        self,
        dir_fn: cabc.Callable[[D], D2],
        page_fn: cabc.Callable[[P], P2],
    ) -> Dir[D2, P2]:
        """Return a tree of the same shape with every payload transformed.

        Directory payloads are mapped before their children; pages before
        subdirectories.
        """
        data = dir_fn(self.data)
        pages = [Page(page_fn(page.data)) for page in self.pages]
        dirs = [child.map(dir_fn, page_fn) for child in self.dirs]
        return Dir(data, pages, dirs)

    def walk(self) -> cabc.Iterator[Dir[D, P]]:
        """Yield this directory and every descendant directory, depth-first."""
        yield self
        for child in self.dirs:
            yield from child.walk()

    def iter_pages(self) -> cabc.Iterator[Page[P]]:
        """Yield every page in the subtree, depth-first."""
        for node in self.walk():
            yield from node.pages

    def shape(self) -> tuple[int, tuple[typ.Any, ...]]:
        """Return a payload-free description of the tree topology."""
        return (len(self.pages), tuple(child.shape() for child in self.dirs))


def load(root: Path) -> Dir[Path, Path]:
    """Scan ``root`` recursively into a raw tree of source paths.

    Entries are sorted by name so the tree does not depend on the platform's
    directory order. Hidden entries (names starting with ``.``) are skipped.

    Parameters
    ----------
    root : Path
        Content directory to scan.

    Returns
    -------
    Dir[Path, Path]
        Tree whose payloads are the source paths of each node.

    Raises
    ------
    ContentIOError
        If any directory in the tree cannot be listed. No partial tree is
        returned.
    """
    try:
        with os.scandir(root) as entries:
            listing = sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        raise ContentIOError(root, exc.strerror or str(exc)) from exc

    node: Dir[Path, Path] = Dir(root)
    for entry in listing:
        if entry.name.startswith("."):
            logger.debug("Skipping hidden entry %s", entry.path)
            continue
        path = root / entry.name
        try:
            is_dir = entry.is_dir()
        except OSError as exc:
            raise ContentIOError(path, exc.strerror or str(exc)) from exc
        if is_dir:
            node.dirs.append(load(path))
        else:
            node.pages.append(Page(path))
    return node


__all__ = ["Dir", "Page", "load"]
