"""HTML rendering. Every page is wrapped in the common layout."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import DictLoader, Environment

from snig.errors import WriteError

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

LAYOUT_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<title>{{ collection.name or 'Gallery' }}</title>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<link href="snig.css" rel="stylesheet" type="text/css">
</head>
<body>
{% block content %}{% endblock %}
<footer>
  Created with <a href="https://snig.plix.at">s<sup>n</sup>ig</a> {{ version }}.
</footer>
</body>
</html>
"""

INDEX_TEMPLATE = """\
{% extends "layout.html" %}
{% block content %}
<main class="index">
<nav>
  <ul id="menu">
    <li class="collection-name">{{ collection.name or 'Gallery' }}</li>
    <li class="counter">{{ "%03d"|format(collection.images|length) }}</li>
    {% if collection.archive_file %}<li class="zip-file"><a href="{{ collection.archive_file }}" download>&dArr; {{ collection.archive_file }} ({{ collection.archive_size }})</a></li>{% endif %}
  </ul>
</nav>
<ul class="images">
{% for image in collection.images %}  <li><a href="{{ image.html_file }}"><img src="{{ image.url_for('thumbnail') }}" alt="{{ image.basename }}" loading="lazy"></a></li>
{% endfor %}
</ul>
</main>
{% endblock %}
"""

PAGE_TEMPLATE = """\
{% extends "layout.html" %}
{% block content %}
<main class="page">
<nav>
  <ul id="menu">
    <li class="collection-name"><a href="index.html" title="{{ collection.name }}">{{ collection.name or 'Gallery' }}</a></li>
    <li class="counter">{{ "%03d"|format(image.position) }} / {{ "%03d"|format(collection.size) }}</li>
    <li><a href="index.html" title="{{ collection.name }}">&uArr;</a></li>
    <li><a href="{{ image.url_for('orig') }}" download>&dArr;</a></li>
    {% if image.previous %}<li><a href="{{ image.previous.html_file }}" title="previous">&lArr;</a></li>{% endif %}
    {% if image.next %}<li><a href="{{ image.next.html_file }}" title="next">&rArr;</a></li>{% endif %}
    <li class="help">(or click image for next)</li>
  </ul>
</nav>
<a href="{{ image.next.html_file if image.next else 'index.html' }}"><img src="{{ image.url_for('preview') }}" alt="{{ image.basename }}"></a>
<aside class="info">
  <ul>
    <li>{{ image.basename }}</li>
    {% if image.camera_model %}<li>{{ image.camera_model }}</li>{% endif %}
    {% if image.captured_display %}<li>{{ image.captured_display }}</li>{% endif %}
  </ul>
</aside>
</main>
{% endblock %}
"""

TEMPLATES = {
    "layout.html": LAYOUT_TEMPLATE,
    "index.html": INDEX_TEMPLATE,
    "page.html": PAGE_TEMPLATE,
}


class PageRenderer:
    """Renders named templates (``index``, ``page``) to UTF-8 bytes."""

    def __init__(self, templates: dict[str, str] | None = None) -> None:
        self.env = Environment(
            loader=DictLoader(templates or TEMPLATES),
            autoescape=True,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, data: dict[str, Any]) -> bytes:
        template = self.env.get_template(f"{template_name}.html")
        return template.render(**data).encode("utf-8")

    def render_to_file(self, template_name: str, data: dict[str, Any], path: Path) -> None:
        html = self.render(template_name, data)
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(html)
        except OSError as e:
            raise WriteError(f"Unable to write template output to {path}: {e}") from e
