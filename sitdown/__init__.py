"""Static site builder turning a markdown content tree into HTML.

The build runs in four stages over one generic directory/page tree: load the
content directory, annotate every node from its front matter and filename,
stage the annotated metadata into a working directory, and render each page
through its Jinja template with lazy ``root`` and ``parent`` context.
"""

from .cli import app, main
from .config import SiteConfig, load_site_config
from .errors import SitdownError
from .site import SiteBuilder
from .tree import Dir, Page, load

__all__ = [
    "Dir",
    "Page",
    "SiteBuilder",
    "SiteConfig",
    "SitdownError",
    "app",
    "load",
    "load_site_config",
    "main",
]
