from __future__ import annotations
"""HTML rendering of bucket listings."""
from typing import Iterable, Optional

from jinja2 import Environment

from .formatting import DEFAULT_SIZE_FORMAT, SizeFormatOptions, encode_href, format_size, format_uploaded
from .models import ListingEntry

FOLDER_GLYPH = "\U0001F4C1"
FILE_GLYPH = "\U0001F4C4"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{ display_prefix }}</title>
<style>
@import url('https://fonts.googleapis.com/css2?family=Inconsolata:wght@300;400;600;700&display=swap');
html { font-family: 'Inconsolata', monospace; }
body { padding: 1em; }
* { margin: 0; padding: 0; }
header { margin-bottom: 2em; }
table { margin-left: 1em; }
td, th { padding: 0.25em; max-width: 300px; }
thead { background-color: #eee; }
th { min-width: 100px; font-size: 1.1em; }
</style>
</head>
<body>
<header><h1>{{ display_prefix }}</h1></header>
<table>
<thead><tr><th>Name</th><th>Size</th><th>Uploaded</th></tr></thead>
<tbody>
{% if parent_href %}<tr><td colspan="3">{{ folder_glyph }} <a href="{{ parent_href }}">../</a></td></tr>
{% endif %}{% for row in rows %}{% if row.is_directory %}<tr><td colspan="3">{{ folder_glyph }} <a href="{{ row.href }}">{{ row.name }}</a></td></tr>
{% else %}<tr><td>{{ file_glyph }} <a href="{{ row.href }}">{{ row.name }}</a></td><td>{{ row.size }}</td><td>{{ row.uploaded }}</td></tr>
{% endif %}{% endfor %}</tbody>
</table>
</body>
</html>
"""

_environment = Environment(autoescape=True)
_template = _environment.from_string(PAGE_TEMPLATE)


def parent_href(display_prefix: str) -> Optional[str]:
    """Return the link one level up, or ``None`` at the top of the tree."""
    trimmed = display_prefix[:-1] if display_prefix.endswith("/") else display_prefix
    parent, separator, _ = trimmed.rpartition("/")
    if not separator:
        return None
    return encode_href(f"{parent}/")


def _row(entry: ListingEntry, query_prefix: str, size_format_options: SizeFormatOptions) -> dict:
    row = {
        "is_directory": entry.is_directory,
        "name": entry.display_name(query_prefix),
        "href": encode_href(entry.key),
    }
    if not entry.is_directory:
        row["size"] = format_size(entry.size, size_format_options)
        row["uploaded"] = format_uploaded(entry.uploaded)
    return row


def render(
    query_prefix: str,
    display_prefix: str,
    entries: Iterable[ListingEntry],
    size_format_options: SizeFormatOptions = DEFAULT_SIZE_FORMAT,
) -> str:
    """Render the listing page for ``entries`` in the order given.

    Display names and links are HTML-escaped and links are percent-encoded.

    Raises:
        InvariantViolationError: when an entry key lacks ``query_prefix``.
    """
    rows = [_row(entry, query_prefix, size_format_options) for entry in entries]
    return _template.render(
        display_prefix=display_prefix,
        folder_glyph=FOLDER_GLYPH,
        file_glyph=FILE_GLYPH,
        parent_href=parent_href(display_prefix),
        rows=rows,
    )
