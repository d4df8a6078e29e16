r"""Split leading YAML front matter from markdown documents.

A document may open with a metadata block fenced by ``---`` lines (the closing
fence may also be ``...``). The block is parsed as a YAML mapping and the rest
of the document is rendered to HTML. Fences never leak into the body, and an
empty block is simply "no metadata".

Example
-------
>>> from sitdown.config import MarkdownOptions
>>> from sitdown.content.front_matter import split_front_matter
>>> meta, body = split_front_matter("---\ntitle: Hi\n---\nBody\n", MarkdownOptions())
>>> meta, body
({'title': 'Hi'}, 'Body\n')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ruamel.yaml.error import YAMLError

from .._constants import CONTENT_KEY
from .._yaml import load_yaml
from ..errors import ContentIOError, FrontMatterError
from .renderer import MarkdownRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..config.models import MarkdownOptions

OPEN_FENCE = "---"
CLOSE_FENCES = ("---", "...")


@dc.dataclass(slots=True)
class Document:
    """Rendered body and parsed front matter of one source document.

    Attributes
    ----------
    content : str
        HTML rendered from the markdown body.
    meta : dict[str, Any]
        Front-matter mapping; empty when the document has none.
    """

    content: str
    meta: dict[str, typ.Any]


def split_front_matter(
    text: str, options: MarkdownOptions, *, path: Path | None = None
) -> tuple[dict[str, typ.Any], str]:
    """Return the parsed front matter and the remaining markdown body.

    Parameters
    ----------
    text : str
        Full document text.
    options : MarkdownOptions
        Parse options; front matter is only recognised when
        ``options.metadata_blocks`` is set.
    path : Path, optional
        Source path used in error messages.

    Returns
    -------
    tuple[dict[str, Any], str]
        Metadata mapping and body text. A document without a closed leading
        block is returned unchanged with empty metadata.

    Raises
    ------
    FrontMatterError
        If the block is not a YAML mapping with string keys, or uses the
        reserved ``content`` key.
    """
    text = text.removeprefix("\ufeff")
    if not options.metadata_blocks:
        return {}, text
    lines = text.splitlines(keepends=True)
    if len(lines) < 2 or lines[0].rstrip("\r\n") != OPEN_FENCE:
        return {}, text
    if not lines[1].strip():
        # A fence followed by a blank line is a thematic break.
        return {}, text
    for idx in range(1, len(lines)):
        if lines[idx].rstrip("\r\n") in CLOSE_FENCES:
            block = "".join(lines[1:idx])
            body = "".join(lines[idx + 1 :])
            return _parse_block(block, path), body
    return {}, text


def _parse_block(block: str, path: Path | None) -> dict[str, typ.Any]:
    """Parse the text between the fences into a string-keyed mapping."""
    if not block.strip():
        return {}
    try:
        loaded = load_yaml(block)
    except YAMLError as exc:
        raise FrontMatterError(path, str(exc)) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"expected a mapping, got {type(loaded).__name__}"
        raise FrontMatterError(path, msg)
    meta: dict[str, typ.Any] = {}
    for key, value in loaded.items():
        if not isinstance(key, str):
            msg = f"keys must be strings, got {key!r}"
            raise FrontMatterError(path, msg)
        meta[key] = value
    if CONTENT_KEY in meta:
        msg = f"'{CONTENT_KEY}' is reserved for the rendered body"
        raise FrontMatterError(path, msg)
    return meta


def read_document(
    path: Path,
    options: MarkdownOptions,
    *,
    renderer: MarkdownRenderer | None = None,
) -> Document:
    """Read ``path``, extract its front matter, and render the body to HTML.

    Raises
    ------
    ContentIOError
        If the file cannot be read or is not valid UTF-8.
    FrontMatterError
        If the leading metadata block is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ContentIOError(path, "not valid UTF-8 text") from exc
    except OSError as exc:
        raise ContentIOError(path, exc.strerror or str(exc)) from exc
    meta, body = split_front_matter(text, options, path=path)
    active = renderer or MarkdownRenderer(options)
    return Document(content=active.render(body), meta=meta)


__all__ = ["Document", "read_document", "split_front_matter"]
