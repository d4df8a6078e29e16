"""Full-site build orchestration.

:class:`SiteBuilder` runs the pipeline stages in order against one
:class:`~sitdown.config.SiteConfig`:

1. load the content directory into a raw tree,
2. annotate every node (front matter, titles, templates, locations),
3. clear and repopulate the working directory with staged metadata,
4. render every staged page through its Jinja template,
5. copy the asset directory verbatim into ``<output_dir>/assets``.

>>> from sitdown.config import SiteConfig
>>> written = SiteBuilder(SiteConfig()).run()  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import shutil
import typing as typ

from markupsafe import Markup

from .content import MarkdownRenderer
from .errors import ContentIOError, RenderError
from .pipeline import annotate, render, stage
from .templates import load_templates
from .tree import load

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig

logger = logging.getLogger(__name__)

ASSET_OUTPUT_DIR = "assets"


class SiteBuilder:
    """Build a whole site from its configuration."""

    def __init__(self, config: SiteConfig) -> None:
        self.config = config
        self.renderer = MarkdownRenderer(config.markdown)

    def run(self) -> list[Path]:
        """Build the site and return every file written to the output tree.

        Raises
        ------
        SitdownError
            Any pipeline failure. Load and annotate fail before anything is
            written; a render failure is raised only after every other page
            has been written and the assets copied, and its report lists
            those files.
        """
        config = self.config
        raw = load(config.content_dir)
        annotated = annotate(
            raw, config.defaults, config.markdown, renderer=self.renderer
        )
        clear_directory(config.working_dir)
        staged = stage(annotated, config.working_dir)
        templates = load_templates(
            config.template_dir,
            strict=config.strict_templates,
            globals_={"pygments_css": Markup(self.renderer.stylesheet)},
        )
        try:
            report = render(staged, config.output_dir, templates)
        except RenderError as exc:
            exc.report.written.extend(self.copy_assets())
            raise
        written = list(report.written)
        written.extend(self.copy_assets())
        return written

    def copy_assets(self) -> list[Path]:
        """Copy the asset directory into the output tree, if it exists."""
        source = self.config.asset_dir
        if not source.is_dir():
            logger.debug("No asset directory at %s", source)
            return []
        target = self.config.output_dir / ASSET_OUTPUT_DIR
        copied = copy_dir(source, target)
        logger.info("Copied %d asset(s) into %s", len(copied), target)
        return copied


def copy_dir(source: Path, target: Path) -> list[Path]:
    """Recursively copy ``source`` into ``target`` and return the copied files.

    Raises
    ------
    ContentIOError
        If a directory cannot be listed or created, or a file cannot be copied.
    """
    try:
        target.mkdir(parents=True, exist_ok=True)
        entries = sorted(source.iterdir())
    except OSError as exc:
        raise ContentIOError(source, exc.strerror or str(exc)) from exc

    copied: list[Path] = []
    for entry in entries:
        destination = target / entry.name
        if entry.is_dir():
            copied.extend(copy_dir(entry, destination))
            continue
        try:
            shutil.copy2(entry, destination)
        except OSError as exc:
            raise ContentIOError(entry, exc.strerror or str(exc)) from exc
        copied.append(destination)
    return copied


def clear_directory(path: Path) -> None:
    """Remove ``path`` and everything under it, if it exists.

    Raises
    ------
    ContentIOError
        If the directory exists but cannot be removed.
    """
    if not path.exists():
        return
    try:
        shutil.rmtree(path)
    except OSError as exc:
        raise ContentIOError(path, exc.strerror or str(exc)) from exc
    logger.debug("Cleared %s", path)


__all__ = ["ASSET_OUTPUT_DIR", "SiteBuilder", "clear_directory", "copy_dir"]
