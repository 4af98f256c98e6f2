"""Concrete matchers implementing the InputMatcher protocol.

Each matcher is a frozen dataclass, immutable after construction.
All matchers return False for non-string, None or empty input values.

Path templates are compiled via ``google-re2`` for guaranteed linear-time
matching; see halkit._template for the grammar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from halkit._template import compile_path_template, strip_base_url

if TYPE_CHECKING:
    import re2

    from halkit._types import MatchingData


@dataclass(frozen=True, slots=True)
class ExactMatcher:
    """Exact, case-sensitive string equality match."""

    value: str

    def matches(self, value: MatchingData, /) -> bool:
        if not isinstance(value, str):
            return False
        return value == self.value


@dataclass(frozen=True, slots=True)
class PathTemplateMatcher:
    """Full-path match against a ``{name}`` path template.

    When base_url is set, hrefs may arrive with or without the scheme and
    host, and templates may be stored with or without them. A path that
    starts with ``/`` is then tried two ways:

    - the template with the base URL stripped, against the path as given
    - the template as stored, against base URL + path

    Anything else is matched against the template as stored.
    """

    template: str
    base_url: str | None = None
    _compiled: re2.Pattern[str] = field(init=False, repr=False)
    _relative: re2.Pattern[str] = field(init=False, repr=False)
    _base: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        base = (self.base_url or "").rstrip("/")
        object.__setattr__(self, "_base", base)
        object.__setattr__(self, "_compiled", compile_path_template(self.template))
        object.__setattr__(
            self,
            "_relative",
            compile_path_template(strip_base_url(self.template, base)),
        )

    def matches(self, value: MatchingData, /) -> bool:
        if not isinstance(value, str) or not value or not self.template:
            return False
        if self._base and value.startswith("/"):
            return (
                self._relative.fullmatch(value) is not None
                or self._compiled.fullmatch(self._base + value) is not None
            )
        return self._compiled.fullmatch(value) is not None


def matches_path(template: str | None, path: str | None, base_url: str | None = None) -> bool:
    """Return True if path matches the ``{name}`` path template.

    Empty or None template/path never match; they are not an error.

    >>> matches_path("/users/{id}", "/users/123")
    True
    >>> matches_path("/users/{id}", "/users/123/extra")
    False
    """
    if not template or not path:
        return False
    return PathTemplateMatcher(template, base_url).matches(path)
