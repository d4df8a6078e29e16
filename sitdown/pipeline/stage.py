"""Persist annotated metadata into the working directory.

Staging is the boundary between annotation and rendering. Every directory gets
a mirrored directory under the working root holding a marker file with its
title and location; every page gets one YAML record beside it. The returned
tree only holds paths to those files, so the render pass must read them back.

Layout for ``content/{home.md, blog/post1.md}``::

    .sitdown/
        .sitdown-dir.yaml
        index.yaml
        blog/
            .sitdown-dir.yaml
            post1.yaml

Staging is idempotent but not transactional: a failure part way through
leaves earlier files in place, and a retry rewrites everything.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from ruamel.yaml.error import YAMLError

from .._constants import DIR_MARKER, STAGED_SUFFIX
from .._yaml import dump_yaml, load_yaml
from ..errors import ContentIOError, MetadataError, StagingError
from .models import DirInfo, DirRef, PageInfo, PageRef

if typ.TYPE_CHECKING:
    from ..tree import Dir

logger = logging.getLogger(__name__)


def stage(tree: Dir[DirInfo, PageInfo], working_root: Path) -> Dir[DirRef, PageRef]:
    """Write every node's metadata under ``working_root``.

    Parameters
    ----------
    tree : Dir[DirInfo, PageInfo]
        Annotated tree.
    working_root : Path
        Directory receiving the staged files; created if missing.

    Returns
    -------
    Dir[DirRef, PageRef]
        Tree of the same shape whose payloads reference the staged files.

    Raises
    ------
    StagingError
        If a directory or file cannot be written.
    """
    staged = tree.map(
        lambda info: stage_dir(info, working_root),
        lambda info: stage_page(info, working_root),
    )
    logger.info("Staged metadata into %s", working_root)
    return staged


def staged_page_path(location: Path, working_root: Path) -> Path:
    """Return where the record for a page at ``location`` is staged."""
    return (working_root / location).with_suffix(STAGED_SUFFIX)


def stage_dir(info: DirInfo, working_root: Path) -> DirRef:
    """Create the mirrored directory and write its marker file."""
    dir_path = working_root / info.location
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StagingError(dir_path, exc.strerror or str(exc)) from exc
    _write_record(dir_path / DIR_MARKER, info.to_record())
    return DirRef(path=dir_path, location=info.location)


def stage_page(info: PageInfo, working_root: Path) -> PageRef:
    """Write the page record and return a reference to it."""
    page_path = staged_page_path(info.location, working_root)
    try:
        page_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StagingError(page_path.parent, exc.strerror or str(exc)) from exc
    _write_record(page_path, info.to_record())
    logger.debug("Staged %s", page_path)
    return PageRef(path=page_path, location=info.location, template=info.template)


def _write_record(path: Path, record: dict[str, typ.Any]) -> None:
    try:
        path.write_text(dump_yaml(record), encoding="utf-8")
    except OSError as exc:
        raise StagingError(path, exc.strerror or str(exc)) from exc


def _read_record(path: Path) -> object:
    """Load one staged YAML file.

    Raises
    ------
    ContentIOError
        If the file cannot be read.
    MetadataError
        If the file is not valid YAML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MetadataError(path, "not valid UTF-8 text") from exc
    except OSError as exc:
        raise ContentIOError(path, exc.strerror or str(exc)) from exc
    try:
        return load_yaml(text)
    except YAMLError as exc:
        raise MetadataError(path, str(exc)) from exc


def read_page_record(path: Path) -> PageInfo:
    """Deserialize a staged page record back into a :class:`PageInfo`."""
    return PageInfo.from_record(_read_record(path), source=path)


def read_dir_record(dir_path: Path) -> DirInfo:
    """Deserialize the marker file of a staged directory."""
    marker = dir_path / DIR_MARKER
    return DirInfo.from_record(_read_record(marker), source=marker)


__all__ = [
    "read_dir_record",
    "read_page_record",
    "stage",
    "stage_dir",
    "stage_page",
    "staged_page_path",
]
