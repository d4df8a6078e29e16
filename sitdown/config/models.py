"""Typed dataclasses describing sitdown site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from ..errors import SitdownError

DEFAULT_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")


class SiteConfigError(SitdownError, ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class MarkdownOptions:
    """Options controlling how source documents are parsed and rendered.

    Attributes
    ----------
    extensions : tuple[str, ...]
        Python-Markdown extension names applied to every body.
    metadata_blocks : bool
        Recognise a leading ``---`` YAML block as front matter.
    pygments_style : str
        Pygments style used by ``codehilite``.
    rewrite_links : bool
        Rewrite local ``.md`` links so they target the rendered ``.html``.
    """

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    metadata_blocks: bool = True
    pygments_style: str = "monokai"
    rewrite_links: bool = True


@dc.dataclass(frozen=True, slots=True)
class PageDefaults:
    """Fallback values applied to pages lacking explicit front matter."""

    template: str = "default"


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition sourced from ``sitdown.toml``."""

    content_dir: Path = Path("content")
    template_dir: Path = Path("templates")
    asset_dir: Path = Path("assets")
    output_dir: Path = Path("_site")
    working_dir: Path = Path(".sitdown")
    page_template: str = "default"
    strict_templates: bool = False
    markdown: MarkdownOptions = dc.field(default_factory=MarkdownOptions)

    @property
    def defaults(self) -> PageDefaults:
        """Return the per-page defaults passed into annotation."""
        return PageDefaults(template=self.page_template)

    def relative_to(self, base: Path) -> SiteConfig:
        """Return a copy whose relative directories are anchored at ``base``."""
        return dc.replace(
            self,
            content_dir=base / self.content_dir,
            template_dir=base / self.template_dir,
            asset_dir=base / self.asset_dir,
            output_dir=base / self.output_dir,
            working_dir=base / self.working_dir,
        )


__all__ = [
    "DEFAULT_EXTENSIONS",
    "MarkdownOptions",
    "PageDefaults",
    "SiteConfig",
    "SiteConfigError",
]
