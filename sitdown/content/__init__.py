"""Markdown reading, front-matter extraction and HTML rendering."""

from .front_matter import Document, read_document, split_front_matter
from .link_rewriter import SourceLinkExtension
from .renderer import MarkdownRenderer

__all__ = [
    "Document",
    "MarkdownRenderer",
    "SourceLinkExtension",
    "read_document",
    "split_front_matter",
]
