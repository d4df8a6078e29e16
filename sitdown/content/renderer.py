"""Render markdown bodies into HTML with syntax-highlighted code blocks."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from ..config.models import MarkdownOptions
from .link_rewriter import SourceLinkExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class MarkdownRenderer:
    """Convert markdown text to HTML using the site's markdown options."""

    def __init__(
        self,
        options: MarkdownOptions | None = None,
        *,
        extra_extensions: typ.Sequence[Extension] = (),
    ) -> None:
        """Initialize a renderer for the given options.

        Parameters
        ----------
        options : MarkdownOptions, optional
            Extension list, Pygments style and link rewriting switch. Defaults
            to :class:`MarkdownOptions` with its built-in values.
        extra_extensions : Sequence[Extension], optional
            Additional extension instances appended after the configured ones.
        """
        self.options = options or MarkdownOptions()
        self._extra_extensions = list(extra_extensions)
        self._formatter = HtmlFormatter(
            style=self.options.pygments_style, cssclass="codehilite"
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str) -> str:
        """Render markdown into HTML; blank input yields an empty string."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = list(self.options.extensions)
        if self.options.rewrite_links:
            extensions.append(SourceLinkExtension())
        extensions.extend(self._extra_extensions)
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.options.pygments_style,
                }
            }
            if "codehilite" in self.options.extensions
            else {},
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["CODE_BLOCK_PATTERN", "MarkdownRenderer"]
