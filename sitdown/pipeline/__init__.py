"""The four-stage content pipeline: load, annotate, stage, render.

Each stage consumes one :class:`~sitdown.tree.Dir` and returns a new tree of
the same shape with different payloads; only :func:`stage` and :func:`render`
touch the disk.
"""

from .models import DirInfo, DirRef, PageInfo, PageRef
from .annotate import annotate, annotate_dir, annotate_page
from .stage import read_dir_record, read_page_record, stage
from .context import PageContext, StagedDirView
from .render import RenderReport, render, render_page

__all__ = [
    "DirInfo",
    "DirRef",
    "PageContext",
    "PageInfo",
    "PageRef",
    "RenderReport",
    "StagedDirView",
    "annotate",
    "annotate_dir",
    "annotate_page",
    "read_dir_record",
    "read_page_record",
    "render",
    "render_page",
    "stage",
]
