"""Shared fixtures for building throwaway sites under ``tmp_path``."""

from __future__ import annotations

import collections.abc as cabc
from pathlib import Path

import pytest

from sitdown.config import SiteConfig

SiteWriter = cabc.Callable[[cabc.Mapping[str, str]], Path]

PAGE_TEMPLATE = """\
<html><head><title>{{ title }}</title></head>
<body data-template="page">
<h1>{{ title }}</h1>
<p class="root-title">{{ root.title }}</p>
<p class="parent-title">{{ parent.title }}</p>
<ul class="siblings">
{% for page in parent.pages %}<li><a href="{{ page.url }}">{{ page.title }}</a></li>
{% endfor %}
</ul>
<ul class="sections">
{% for dir in root.dirs %}<li><a href="{{ dir.url }}">{{ dir.title }}</a></li>
{% endfor %}
</ul>
<article>{{ content }}</article>
</body></html>
"""

SPECIAL_TEMPLATE = """\
<html><body data-template="special"><h1>{{ title }}</h1>{{ content }}</body></html>
"""


@pytest.fixture
def write_site(tmp_path: Path) -> SiteWriter:
    """Return a helper writing ``{relative_path: text}`` files under tmp_path."""

    def _write(files: cabc.Mapping[str, str]) -> Path:
        for relative, text in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    """Return default settings anchored at ``tmp_path`` with template ``page``."""
    config = SiteConfig(page_template="page")
    return config.relative_to(tmp_path)


@pytest.fixture
def page_template() -> str:
    """Return a template exposing title, root, parent and content."""
    return PAGE_TEMPLATE


@pytest.fixture
def blog_site(write_site: SiteWriter) -> Path:
    """Write a small site with a home page, a blog section and two templates."""
    return write_site(
        {
            "content/home.md": "---\ntitle: Welcome\n---\nHello **world**.\n",
            "content/blog/post1.md": "First post, see [the next one](post2.md).\n",
            "content/blog/post2.md": "---\nauthor: Ada\ntags: [a, b]\n---\nSecond.\n",
            "templates/page.jinja": PAGE_TEMPLATE,
            "templates/special.jinja": SPECIAL_TEMPLATE,
        }
    )
