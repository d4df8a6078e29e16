"""Exception types raised by the sitdown build pipeline.

Each failure kind the pipeline can hit has its own type so callers can decide
how severe it is: filesystem problems, undecodable filenames, malformed
structured data, missing templates and template engine failures. Every error
carries the path (or template name) that caused it so the CLI can report the
offending node.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .pipeline.render import RenderReport


class SitdownError(Exception):
    """Base class for every error raised by the pipeline."""


class ContentIOError(SitdownError):
    """Raised when a filesystem read, write, listing, or copy fails."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"I/O error at '{path}': {reason}")


class PageError(SitdownError):
    """Raised when a page path has a final component that is not valid text."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Unexpected path for a page: '{path}'")


class DirError(SitdownError):
    """Raised when a directory path has a final component that is not valid text."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Unexpected path for a directory: '{path}'")


class FrontMatterError(SitdownError):
    """Raised when a document's leading metadata block cannot be used."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f" in '{path}'" if path is not None else ""
        super().__init__(f"Invalid front matter{where}: {reason}")


class MetadataError(SitdownError):
    """Raised when a staged metadata file cannot be read or deserialized."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid staged metadata '{path}': {reason}")


class StagingError(SitdownError):
    """Raised when writing into the working directory fails."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to stage '{path}': {reason}")


class OutputConflictError(SitdownError):
    """Raised when two pages resolve to the same output location."""

    def __init__(self, path: Path, other: Path, location: Path) -> None:
        self.path = path
        self.other = other
        self.location = location
        super().__init__(
            f"'{path}' and '{other}' both write '{location.as_posix()}'"
        )


class TemplateNotFoundError(SitdownError):
    """Raised when a page names a template that was not loaded."""

    def __init__(self, template: str, location: Path) -> None:
        self.template = template
        self.location = location
        super().__init__(f"Template '{template}' not found for page '{location}'")


class TemplateRenderError(SitdownError):
    """Raised when the template engine fails while rendering a page."""

    def __init__(self, template: str, location: Path, reason: str) -> None:
        self.template = template
        self.location = location
        self.reason = reason
        super().__init__(
            f"Error rendering '{location}' with template '{template}': {reason}"
        )


class AnnotationError(SitdownError):
    """Aggregate of every per-node failure hit while annotating a tree."""

    def __init__(self, failures: list[SitdownError]) -> None:
        self.failures = failures
        lines = "\n".join(f"  - {failure}" for failure in failures)
        super().__init__(f"{len(failures)} node(s) failed to annotate:\n{lines}")


class RenderError(SitdownError):
    """Raised after a best-effort render when one or more pages failed."""

    def __init__(self, report: RenderReport) -> None:
        self.report = report
        lines = "\n".join(f"  - {failure}" for failure in report.failures)
        super().__init__(
            f"{len(report.failures)} page(s) failed to render:\n{lines}"
        )


__all__ = [
    "AnnotationError",
    "ContentIOError",
    "DirError",
    "FrontMatterError",
    "MetadataError",
    "OutputConflictError",
    "PageError",
    "RenderError",
    "SitdownError",
    "StagingError",
    "TemplateNotFoundError",
    "TemplateRenderError",
]
