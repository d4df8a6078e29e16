"""Create the skeleton of a new site.

``create_site(Path("blog"))`` lays out::

    blog/
        sitdown.toml
        content/
            home.md
            content/
                Something.md
        templates/
            layout.jinja
            default.jinja
            entries.jinja
        assets/
            css/
                default.css

The templates only use the context the render pass provides: page metadata,
``content``, ``root`` and ``parent``.
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import CONFIG_FILENAME
from .errors import ContentIOError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """\
content_dir = "content"
template_dir = "templates"
asset_dir = "assets"
output_dir = "_site"
page_template = "default"

[markdown]
pygments_style = "monokai"
"""

LAYOUT_TEMPLATE = """\
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>{% block title %}{{ root.title }}{% endblock %}</title>
  <link rel="stylesheet" type="text/css" href="/assets/css/default.css">
  <style>{{ pygments_css }}</style>
</head>
<body>
  <div class="header">
    <a href="/index.html"><h1>{{ root.title }}</h1></a>
  </div>
  <nav>
    <div class="navbar">
      {% for page in root.pages %}
      <a href="{{ page.url }}">{{ page.title }}</a>
      {% endfor %}
    </div>
  </nav>
  <div class="content">
    {% block body %}{% endblock %}
  </div>
  <div class="footer">
    Built with sitdown.
  </div>
</body>
</html>
"""

DEFAULT_TEMPLATE = """\
{% extends "layout" %}
{% block title %}{{ super() }} | {{ title }}{% endblock %}
{% block body %}
<h1>{{ title }}</h1>
{{ content }}
{% endblock %}
"""

ENTRIES_TEMPLATE = """\
{% extends "layout" %}
{% block title %}{{ super() }} | {{ title }}{% endblock %}
{% block body %}
<h1>{{ title }}</h1>
{{ content }}
<div class="collapse">
  {% for dir in parent.dirs %}
  <details open>
    <summary>{{ dir.title }}</summary>
    {% for page in dir.pages %}
    <div class="detail"><a href="{{ page.url }}">{{ page.title }}</a></div>
    {% endfor %}
  </details>
  {% endfor %}
  {% for page in parent.pages %}
  <div class="detail"><a href="{{ page.url }}">{{ page.title }}</a></div>
  {% endfor %}
</div>
{% endblock %}
"""

DEFAULT_CSS = """\
* {
  box-sizing: border-box;
}

body {
  padding: 10px;
  background: #f1f1f1;
}

.navbar {
  background-color: #333;
  overflow: hidden;
}

.navbar a {
  float: left;
  color: #f2f2f2;
  text-align: center;
  padding: 14px 16px;
  text-decoration: none;
  font-size: 17px;
}

.navbar a:hover {
  background-color: #ddd;
  color: black;
}

.header {
  padding: 30px;
  text-align: center;
  background: white;
}

.header a {
  color: black;
  text-decoration: inherit;
}

.content {
  background-color: white;
  padding: 20px;
  margin-top: 20px;
}

.footer {
  margin-top: 20px;
  padding: 20px;
  background: #ddd;
}

.collapse .detail {
  margin-left: 20px;
}
"""

SCAFFOLD_FILES: dict[str, str] = {
    CONFIG_FILENAME: CONFIG_TEMPLATE,
    "content/home.md": "---\ntemplate: entries\n---\nThis is the homepage.\n",
    "content/content/Something.md": "This is some content.\n",
    "templates/layout.jinja": LAYOUT_TEMPLATE,
    "templates/default.jinja": DEFAULT_TEMPLATE,
    "templates/entries.jinja": ENTRIES_TEMPLATE,
    "assets/css/default.css": DEFAULT_CSS,
}


def create_site(target: Path) -> list[Path]:
    """Write a minimal site into ``target`` and return the created files.

    Raises
    ------
    ContentIOError
        If ``target`` already exists or a file cannot be written.
    """
    if target.exists():
        raise ContentIOError(target, "already exists")
    created: list[Path] = []
    for relative, text in SCAFFOLD_FILES.items():
        path = target / relative
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise ContentIOError(path, exc.strerror or str(exc)) from exc
        logger.debug("Created %s", path)
        created.append(path)
    return created


__all__ = ["SCAFFOLD_FILES", "create_site"]
