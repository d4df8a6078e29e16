"""Stage payloads carried by the content tree.

| Stage     | Directory payload | Page payload |
|-----------|-------------------|--------------|
| raw       | ``Path``          | ``Path``     |
| annotated | ``DirInfo``       | ``PageInfo`` |
| staged    | ``DirRef``        | ``PageRef``  |

Annotated payloads convert to and from the plain mappings written into the
working directory; staged payloads only hold paths.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path, PurePosixPath

from .._constants import CONTENT_KEY
from ..errors import MetadataError


def _url_for(location: Path, *, is_dir: bool) -> str:
    """Return the site-absolute URL for an output location."""
    posix = location.as_posix()
    if posix in ("", "."):
        return "/"
    return f"/{posix}/" if is_dir else f"/{posix}"


def _location_from(record: cabc.Mapping[str, typ.Any], source: Path) -> Path:
    value = record.get("location")
    if not isinstance(value, str):
        raise MetadataError(source, "'location' must be a string")
    return Path(PurePosixPath(value))


def _string_from(record: cabc.Mapping[str, typ.Any], key: str, source: Path) -> str:
    value = record.get(key)
    if not isinstance(value, str):
        raise MetadataError(source, f"'{key}' must be a string")
    return value


@dc.dataclass(frozen=True, slots=True)
class DirInfo:
    """Annotated directory: its title and output directory."""

    title: str
    location: Path

    @property
    def url(self) -> str:
        return _url_for(self.location, is_dir=True)

    def to_record(self) -> dict[str, typ.Any]:
        """Return the mapping written to the directory marker file."""
        return {"title": self.title, "location": self.location.as_posix()}

    @classmethod
    def from_record(cls, record: object, *, source: Path) -> DirInfo:
        """Rebuild a DirInfo from a deserialized marker mapping.

        Raises
        ------
        MetadataError
            If ``record`` is not a mapping with string ``title``/``location``.
        """
        if not isinstance(record, cabc.Mapping):
            raise MetadataError(source, "expected a mapping")
        return cls(
            title=_string_from(record, "title", source),
            location=_location_from(record, source),
        )

    def to_context(self) -> dict[str, typ.Any]:
        """Return the values exposed to templates for this directory."""
        return {
            "title": self.title,
            "location": self.location.as_posix(),
            "url": self.url,
        }


@dc.dataclass(frozen=True, slots=True)
class PageInfo:
    """Annotated page: resolved template, location, title and metadata.

    Attributes
    ----------
    template : str
        Template name, from front matter or the configured default.
    location : Path
        Output file location relative to the output root.
    title : str
        Title, from front matter or derived from the filename.
    meta : dict[str, Any]
        Remaining front-matter keys, preserved verbatim.
    content : str
        Rendered HTML body.
    """

    template: str
    location: Path
    title: str
    meta: dict[str, typ.Any] = dc.field(default_factory=dict)
    content: str = ""

    @property
    def url(self) -> str:
        return _url_for(self.location, is_dir=False)

    def to_record(self) -> dict[str, typ.Any]:
        """Return the mapping written to the page's staged file."""
        return {
            "title": self.title,
            "template": self.template,
            "location": self.location.as_posix(),
            "meta": dict(self.meta),
            CONTENT_KEY: self.content,
        }

    @classmethod
    def from_record(cls, record: object, *, source: Path) -> PageInfo:
        """Rebuild a PageInfo from a deserialized staged page mapping.

        Raises
        ------
        MetadataError
            If required keys are missing or have the wrong type.
        """
        if not isinstance(record, cabc.Mapping):
            raise MetadataError(source, "expected a mapping")
        meta = record.get("meta", {})
        if meta is None:
            meta = {}
        if not isinstance(meta, cabc.Mapping):
            raise MetadataError(source, "'meta' must be a mapping")
        content = record.get(CONTENT_KEY, "")
        if not isinstance(content, str):
            raise MetadataError(source, f"'{CONTENT_KEY}' must be a string")
        return cls(
            template=_string_from(record, "template", source),
            location=_location_from(record, source),
            title=_string_from(record, "title", source),
            meta=dict(meta),
            content=content,
        )

    def merged_metadata(self) -> dict[str, typ.Any]:
        """Return custom metadata merged with the resolved fields.

        Resolved fields (``title``, ``template``, ``location``, ``url`` and
        ``content``) take precedence over custom keys of the same name.
        """
        merged = dict(self.meta)
        merged.update(
            {
                "title": self.title,
                "template": self.template,
                "location": self.location.as_posix(),
                "url": self.url,
                CONTENT_KEY: self.content,
            }
        )
        return merged


@dc.dataclass(frozen=True, slots=True)
class DirRef:
    """Staged directory: its working-directory path and original location."""

    path: Path
    location: Path


@dc.dataclass(frozen=True, slots=True)
class PageRef:
    """Staged page: path to its staged record, output location and template."""

    path: Path
    location: Path
    template: str


__all__ = ["DirInfo", "DirRef", "PageInfo", "PageRef"]
