"""Core protocols and type aliases for halkit.

The matching side follows a small extract-then-match architecture:
- MatchingData is the type-erased value an input extracts from an Href
- DataInput is the extraction port (path, one query parameter, ...)
- InputMatcher is the matching port (exact literal, path template, ...)

The fetching side has a single port, Transport, implemented by HalClient
and by halkit.testing.StaticTransport.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

# None means "data not available" and makes the predicate evaluate to False.
MatchingData = str | None

Ctx = TypeVar("Ctx", contravariant=True)


@runtime_checkable
class DataInput(Protocol[Ctx]):
    """Extract a value from a matching context.

    Returning None signals "data not available" and causes the predicate
    to evaluate to False (the None -> false invariant).
    """

    def get(self, ctx: Ctx, /) -> MatchingData: ...


@runtime_checkable
class InputMatcher(Protocol):
    """Match against a type-erased value."""

    def matches(self, value: MatchingData, /) -> bool: ...


@runtime_checkable
class Transport(Protocol):
    """The HTTP collaborator the registry delegates GET requests to.

    Implementations raise halkit transport errors (ConnectError,
    RequestTimeoutError, ParsingError, HttpStatusError subclasses); the
    registry propagates them unchanged.
    """

    api_url: str

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any: ...

    def get_by_url(self, url: str, params: dict[str, Any] | None = None) -> Any: ...
