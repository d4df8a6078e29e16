"""Helpers for rewriting links between markdown sources to their HTML outputs."""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit, urlunsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

MARKDOWN_SUFFIXES = (".md", ".markdown")


class SourceLinkExtension(Extension):
    """Rewrite links to sibling markdown files so they target rendered pages.

    Authors link between sources (``[next](next_post.md)``); the generated site
    only contains ``next_post.html``. Register this extension on a
    ``markdown.Markdown`` instance to swap the suffix on every local link while
    keeping query strings and fragments intact.
    """

    def __init__(self, output_suffix: str = ".html") -> None:
        super().__init__()
        self.output_suffix = output_suffix

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the source-link treeprocessor on the Markdown instance."""
        processor = SourceLinkTreeprocessor(md, self.output_suffix)
        md.treeprocessors.register(processor, "sitdown_source_links", 15)


class SourceLinkTreeprocessor(Treeprocessor):
    """Point anchors at ``.md`` files to their ``.html`` counterparts."""

    def __init__(self, md: Markdown, output_suffix: str) -> None:
        super().__init__(md)
        self.output_suffix = output_suffix

    def run(self, root: Element) -> Element:
        """Rewrite local markdown anchors in the parsed tree."""
        for element in root.iter("a"):
            rewritten = self._rewrite(element.get("href"))
            if rewritten:
                element.set("href", rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        """Return ``target`` with its markdown suffix swapped, or None to keep it."""
        if not target or target.startswith(("#", "//")):
            return None
        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc:
            return None
        stem, suffix = posixpath.splitext(parsed.path)
        if suffix.lower() not in MARKDOWN_SUFFIXES:
            return None
        return urlunsplit(
            ("", "", stem + self.output_suffix, parsed.query, parsed.fragment)
        )


__all__ = ["MARKDOWN_SUFFIXES", "SourceLinkExtension", "SourceLinkTreeprocessor"]
