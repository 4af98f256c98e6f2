"""Href, a parsed hypermedia link target used as the matching context.

Holds the path (without query string), the raw query string and the
query parameters parsed from it. PathInput and QueryParamInput read those
fields for endpoint predicates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from halkit._types import MatchingData


def parse_query(query_string: str) -> dict[str, str]:
    """Parse a raw query string into a name -> value mapping.

    Duplicate names keep the last value. Pairs without ``=`` are skipped.
    Values are kept verbatim (no percent-decoding).
    """
    params: dict[str, str] = {}
    for part in query_string.split("&"):
        if "=" not in part:
            continue
        k, v = part.split("=", 1)
        if k:
            params[k] = v
    return params


@dataclass(frozen=True, slots=True)
class Href:
    """An href as seen by endpoint predicates.

    The raw value may be a path (``/users/1?page=2``) or a full URL; it is
    split on the first ``?`` and nothing else is normalized here. The API
    base URL is handled by the registry and the path matcher.
    """

    raw: str

    # Parsed from raw
    _path: str = field(init=False, repr=False)
    _query_string: str = field(init=False, repr=False)
    _query_params: dict[str, str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        path, _, query_string = self.raw.partition("?")
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_query_string", query_string)
        object.__setattr__(self, "_query_params", parse_query(query_string))

    @property
    def path(self) -> str:
        """Everything before the first ``?``."""
        return self._path

    @property
    def query_string(self) -> str:
        """Raw query string, empty when absent."""
        return self._query_string

    @property
    def query_params(self) -> dict[str, str]:
        """Query parameters, last value per name."""
        return self._query_params

    def query_param(self, name: str) -> str | None:
        """Value of one query parameter, or None when absent."""
        return self._query_params.get(name)


# ─── Inputs ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PathInput:
    """The href path, query string excluded."""

    def get(self, ctx: Href, /) -> MatchingData:
        return ctx.path


@dataclass(frozen=True, slots=True)
class QueryParamInput:
    """One query parameter of the href; None when the href does not carry it."""

    name: str

    def get(self, ctx: Href, /) -> MatchingData:
        return ctx.query_param(self.name)
