"""Render every staged page through its template into the output tree.

The traverser walks the staged tree depth-first. Each directory first gets its
mirrored output directory, then its pages are rendered with that directory as
``parent``, then its subdirectories are visited, each becoming the ``parent``
of its own pages. ``root`` stays fixed at the top of the staged tree.

Failure policy
--------------
Rendering is best effort. A page whose staged record is unreadable, whose
template is missing, whose template fails, or whose output cannot be written
is logged and recorded, and the walk continues with its siblings. Once every
page has been tried, :class:`~sitdown.errors.RenderError` is raised if any page
failed, carrying the :class:`RenderReport` with both the written paths and the
failures.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from jinja2 import TemplateError, TemplateNotFound

from .context import PageContext, StagedDirView
from ..errors import (
    ContentIOError,
    RenderError,
    SitdownError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from .stage import read_page_record

if typ.TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Environment

    from ..tree import Dir, Page
    from .models import DirRef, PageRef

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class RenderReport:
    """Outcome of a render pass.

    Attributes
    ----------
    written : list[Path]
        Output files written, in traversal order.
    failures : list[SitdownError]
        One error per page that could not be rendered.
    """

    written: list[Path] = dc.field(default_factory=list)
    failures: list[SitdownError] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def render(
    tree: Dir[DirRef, PageRef], output_root: Path, templates: Environment
) -> RenderReport:
    """Render the staged tree into ``output_root``.

    Parameters
    ----------
    tree : Dir[DirRef, PageRef]
        Staged tree returned by :func:`sitdown.pipeline.stage.stage`.
    output_root : Path
        Directory receiving the rendered files.
    templates : Environment
        Jinja environment that resolves template names.

    Returns
    -------
    RenderReport
        The written files when every page rendered.

    Raises
    ------
    RenderError
        After the full walk, if at least one page failed.
    ContentIOError
        If an output directory cannot be created.
    """
    report = RenderReport()
    root = StagedDirView(tree.data.path)
    _render_dir(tree, output_root, templates, root, report)
    if report.failures:
        raise RenderError(report)
    logger.info("Rendered %d page(s) into %s", len(report.written), output_root)
    return report


def _render_dir(
    node: Dir[DirRef, PageRef],
    output_root: Path,
    templates: Environment,
    root: StagedDirView,
    report: RenderReport,
) -> None:
    target = output_root / node.data.location
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ContentIOError(target, exc.strerror or str(exc)) from exc

    parent = StagedDirView(node.data.path)
    for page in node.pages:
        try:
            report.written.append(
                render_page(page, output_root, templates, root=root, parent=parent)
            )
        except SitdownError as exc:
            logger.error("Failed to render %s: %s", page.data.location, exc)
            report.failures.append(exc)
    for child in node.dirs:
        _render_dir(child, output_root, templates, root, report)


def render_page(
    page: Page[PageRef],
    output_root: Path,
    templates: Environment,
    *,
    root: StagedDirView,
    parent: StagedDirView,
) -> Path:
    """Render one staged page and write it under ``output_root``.

    Raises
    ------
    MetadataError
        If the staged record cannot be deserialized.
    TemplateNotFoundError
        If the page's template (or one it extends) is not loaded.
    TemplateRenderError
        If the template engine fails, or an expression in the template raises.
    ContentIOError
        If the staged record cannot be read or the output cannot be written.
    """
    ref = page.data
    info = read_page_record(ref.path)
    context = PageContext(info, root=root, parent=parent)
    try:
        template = templates.get_template(ref.template)
        html = template.render(context)
    except TemplateNotFound as exc:
        raise TemplateNotFoundError(exc.name or ref.template, ref.location) from exc
    except TemplateError as exc:
        raise TemplateRenderError(ref.template, ref.location, str(exc)) from exc
    except Exception as exc:
        # Jinja lets errors raised by template expressions propagate unwrapped.
        reason = f"{type(exc).__name__}: {exc}"
        raise TemplateRenderError(ref.template, ref.location, reason) from exc
    if not html.endswith("\n"):
        html += "\n"

    output_path = output_root / ref.location
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
    except OSError as exc:
        raise ContentIOError(output_path, exc.strerror or str(exc)) from exc
    logger.debug("Rendered %s with template %s", output_path, ref.template)
    return output_path


__all__ = ["RenderReport", "render", "render_page"]
