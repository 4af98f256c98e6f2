"""EndpointEntry: one registered URL template -> target model mapping.

An entry compiles into a predicate over Href::

    And(
        SinglePredicate(PathInput(), PathTemplateMatcher(path_template, base_url)),
        SinglePredicate(QueryParamInput("status"), ExactMatcher("active")),
        ...one per required literal query parameter
    )

Placeholder query parameters add no predicate: they are optional at match
time. Compiled predicates are cached per (template, query params, base URL)
because the base URL belongs to the transport, which may be bound late.
"""

from __future__ import annotations

import functools
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from halkit._href import Href, PathInput, parse_query
from halkit._predicate import SinglePredicate, and_predicate
from halkit._query import QueryTemplateMatcher
from halkit._string_matchers import PathTemplateMatcher
from halkit._template import split_template

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from halkit._predicate import Predicate

_UNRESOLVED = object()


@dataclass(frozen=True, slots=True, eq=False)
class LazyTarget[T]:
    """A target model supplied through a resolver callback.

    The resolver is called at most once, on first use, and its result is
    memoized. Use it when the model class is defined after the endpoint
    table is declared.
    """

    resolver: Callable[[], T]
    _value: Any = field(init=False, repr=False, default=_UNRESOLVED)
    _lock: threading.Lock = field(init=False, repr=False, default_factory=threading.Lock)

    def resolve(self) -> T:
        if self._value is _UNRESOLVED:
            with self._lock:
                if self._value is _UNRESOLVED:
                    object.__setattr__(self, "_value", self.resolver())
        return self._value


def lazy[T](resolver: Callable[[], T]) -> LazyTarget[T]:
    """Wrap a zero-argument resolver as a lazily bound endpoint target.

    >>> entry_target = lazy(lambda: dict)
    >>> entry_target.resolve() is dict
    True
    """
    return LazyTarget(resolver)


@dataclass(frozen=True, slots=True)
class EndpointEntry:
    """A registered endpoint.

    ``kind`` is a caller-defined tag ("index", "resource", ...) that only
    takes part in duplicate detection. ``query_params`` values are literals
    (required when matching) or ``{name}`` placeholders (optional).
    """

    id: str
    kind: str
    url: str
    target: Any
    query_params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {str(k): str(v) for k, v in (self.query_params or {}).items()}
        object.__setattr__(self, "query_params", MappingProxyType(normalized))

    @property
    def model(self) -> Any:
        """The target model, resolving a lazy target on first access."""
        if isinstance(self.target, LazyTarget):
            return self.target.resolve()
        return self.target

    @property
    def path_template(self) -> str:
        """The url template without any inline query string."""
        return split_template(self.url)[0]

    @property
    def declared_query(self) -> dict[str, str]:
        """Inline query pairs from the url, overridden by query_params."""
        return {**parse_query(split_template(self.url)[1]), **self.query_params}

    @property
    def route_key(self) -> tuple[str, str, frozenset[tuple[str, str]]]:
        """Identity used for duplicate detection: (url, kind, query params)."""
        return (self.url, self.kind, frozenset(self.query_params.items()))

    def predicate(self, base_url: str | None = None) -> Predicate[Href]:
        """The compiled match predicate for this endpoint."""
        return endpoint_predicate(
            self.path_template,
            tuple(self.declared_query.items()),
            base_url,
        )

    def matches(self, href: str | Href, base_url: str | None = None) -> bool:
        """Return True if href matches both the path and the query template."""
        ctx = href if isinstance(href, Href) else Href(href)
        return self.predicate(base_url).evaluate(ctx)


@functools.lru_cache(maxsize=1024)
def endpoint_predicate(
    path_template: str,
    query_items: tuple[tuple[str, str], ...],
    base_url: str | None,
) -> Predicate[Href]:
    """Compile a path template and query template into one predicate."""
    path_predicate = SinglePredicate(PathInput(), PathTemplateMatcher(path_template, base_url))
    query_predicates = QueryTemplateMatcher(dict(query_items)).to_predicates()
    return and_predicate([path_predicate, *query_predicates], path_predicate)
