"""Query template matching.

A query template is an ordered mapping of parameter name to either a
literal value or a ``{name}`` placeholder:

- literal     -> REQUIRED: the href must carry that exact value
- placeholder -> OPTIONAL: accepted whether present or not, any value

Parameters the template does not declare are ignored. An empty or missing
template accepts every query string, including none.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from halkit._href import Href, QueryParamInput, parse_query
from halkit._predicate import SinglePredicate
from halkit._string_matchers import ExactMatcher
from halkit._template import is_placeholder

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class QueryTemplateMatcher:
    """Decides whether a query string satisfies a query template."""

    params: Mapping[str, str] | None = None
    _required: tuple[tuple[str, ExactMatcher], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        required = tuple(
            (name, ExactMatcher(str(value)))
            for name, value in (self.params or {}).items()
            if not is_placeholder(value)
        )
        object.__setattr__(self, "_required", required)

    @property
    def required(self) -> dict[str, str]:
        """Literal parameters an href must carry, in declaration order."""
        return {name: m.value for name, m in self._required}

    def matches(self, query_string: str | None, /) -> bool:
        actual = parse_query(query_string or "")
        return all(m.matches(actual.get(name)) for name, m in self._required)

    def to_predicates(self) -> list[SinglePredicate[Href]]:
        """One predicate per required literal, for composing with a path match."""
        return [
            SinglePredicate(QueryParamInput(name), matcher)
            for name, matcher in self._required
        ]


def matches_query(params: Mapping[str, str] | None, query_string: str | None) -> bool:
    """Return True if query_string satisfies the declared query template.

    >>> matches_query({"status": "active", "page": "{page}"}, "status=active&page=2")
    True
    >>> matches_query({"status": "active"}, "")
    False
    """
    return QueryTemplateMatcher(params).matches(query_string)
