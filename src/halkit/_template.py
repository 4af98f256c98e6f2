"""URL template grammar.

A path template is literal text with ``{name}`` placeholders, each standing
for exactly one path segment::

    /users/{user_id}/posts/{post_id}

A query template maps parameter names to either a literal value
(``"active"``) or a placeholder (``"{page}"``).

Compiled path patterns use ``google-re2``: literal text is escaped, each
placeholder becomes ``[^/]+`` and the result is matched with fullmatch, so
a placeholder can never span a ``/``.
"""

from __future__ import annotations

import functools

import re2

# {name}: one or more characters other than braces and the path separator.
PLACEHOLDER = re2.compile(r"\{([^{}/]+)\}")

SEGMENT_WILDCARD = "[^/]+"


def is_placeholder(value: object) -> bool:
    """Return True if value is a whole ``{name}`` placeholder."""
    return isinstance(value, str) and PLACEHOLDER.fullmatch(value) is not None


def placeholder_name(value: str) -> str | None:
    """Return the name inside a ``{name}`` placeholder, or None for a literal."""
    m = PLACEHOLDER.fullmatch(value)
    return m.group(1) if m is not None else None


def placeholder_names(template: str) -> list[str]:
    """Return placeholder names in the order they appear in template."""
    return [m.group(1) for m in PLACEHOLDER.finditer(template)]


def split_template(url: str) -> tuple[str, str]:
    """Split a URL template into its path and query portions."""
    path, _, query = url.partition("?")
    return path, query


def strip_base_url(url: str, base_url: str | None) -> str:
    """Remove base_url from the front of url, if present.

    The base only counts when it ends on a path boundary, so
    ``https://api.example.com/v10`` keeps its ``/v10`` under a
    ``https://api.example.com/v1`` base. The bare base itself becomes ``/``.
    """
    if not base_url:
        return url
    base = base_url.rstrip("/")
    if not base or not url.startswith(base):
        return url
    rest = url[len(base):]
    if not rest:
        return "/"
    if rest[0] == "/":
        return rest
    if rest[0] == "?":
        return "/" + rest
    return url


@functools.lru_cache(maxsize=1024)
def compile_path_template(template: str) -> re2.Pattern[str]:
    """Compile a path template into an anchored-by-fullmatch RE2 pattern."""
    parts: list[str] = []
    pos = 0
    for m in PLACEHOLDER.finditer(template):
        parts.append(re2.escape(template[pos:m.start()]))
        parts.append(SEGMENT_WILDCARD)
        pos = m.end()
    parts.append(re2.escape(template[pos:]))
    return re2.compile("".join(parts))
