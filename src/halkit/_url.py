"""URL building from templates.

Pure functions, no state::

    >>> interpolate("/users/{user_id}/posts/{post_id}", {"user_id": 123, "post_id": 456})
    '/users/123/posts/456'
    >>> build_query("/users", {"page": "{page}", "limit": "{limit}"}, {"page": 2})
    '/users?page=2'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from halkit._template import PLACEHOLDER, placeholder_name

if TYPE_CHECKING:
    from collections.abc import Mapping


def interpolate(template: str, params: Mapping[str, Any]) -> str:
    """Substitute each ``{name}`` in template with ``str(params[name])``.

    Placeholders with no supplied value are left in place as ``{name}``.
    """
    parts: list[str] = []
    pos = 0
    for m in PLACEHOLDER.finditer(template):
        parts.append(template[pos:m.start()])
        name = m.group(1)
        parts.append(str(params[name]) if name in params else m.group(0))
        pos = m.end()
    parts.append(template[pos:])
    return "".join(parts)


def build_query(
    path: str,
    query_template: Mapping[str, Any] | None,
    params: Mapping[str, Any],
) -> str:
    """Append the query parameters declared by query_template to path.

    Literal values are always emitted. A ``{x}`` placeholder is emitted as
    ``name=<params[x]>`` only when params has a non-None ``x``; otherwise the
    parameter is omitted entirely. Pairs keep declaration order. The path is
    returned unchanged when nothing is emitted.
    """
    pairs: list[str] = []
    for name, value in (query_template or {}).items():
        key = placeholder_name(value) if isinstance(value, str) else None
        if key is None:
            pairs.append(f"{name}={value}")
        elif params.get(key) is not None:
            pairs.append(f"{name}={params[key]}")

    if not pairs:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{'&'.join(pairs)}"


def build_url(
    template: str,
    params: Mapping[str, Any],
    query_template: Mapping[str, Any] | None = None,
) -> str:
    """Interpolate the path template, then append the query template."""
    return build_query(interpolate(template, params), query_template, params)
