"""Load and validate ``sitdown.toml`` for site builds.

This subpackage parses the project's ``sitdown.toml``, layers ``SITDOWN_*``
environment overrides over it, and produces typed dataclasses
(:class:`SiteConfig`, :class:`MarkdownOptions`, :class:`PageDefaults`) that
the pipeline stages receive explicitly. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from sitdown.config import load_site_config
>>> site = load_site_config(Path("sitdown.toml"))  # doctest: +SKIP
>>> site.content_dir  # doctest: +SKIP
PosixPath('content')
"""

from .loader import load_site_config
from .models import (
    DEFAULT_EXTENSIONS,
    MarkdownOptions,
    PageDefaults,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "MarkdownOptions",
    "PageDefaults",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
