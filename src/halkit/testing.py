"""Test utilities for halkit.

Provides an in-memory Transport for tests and examples. It is NOT an HTTP
client; it exists to exercise registries without a network or an httpx
mock.

For real APIs, bind a HalClient.
"""

from __future__ import annotations

import copy
import urllib.parse
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from halkit._errors import NotFoundError
from halkit._template import strip_base_url

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True)
class StaticTransport:
    """Serve canned JSON bodies keyed by path.

    Requests are recorded in ``requests`` (paths after base URL stripping).
    Extra params are form-encoded the way httpx encodes them, so a canned
    key for ``q="a b&c"`` is ``/search?q=a+b%26c``.
    Unknown paths raise NotFoundError, like a 404 from a real server.

    >>> from halkit import EndpointRegistry
    >>> transport = StaticTransport("https://api.example.com", {"/users/1": {"name": "ada"}})
    >>> registry = EndpointRegistry(client=transport)
    >>> _ = registry.register("user", "resource", "/users/{id}", dict)
    >>> registry.fetch("user", id=1)
    {'name': 'ada'}
    >>> transport.requests
    ['/users/1']
    """

    api_url: str = "https://api.example.com"
    responses: dict[str, Any] = field(default_factory=dict)
    requests: list[str] = field(default_factory=list)

    def add(self, path: str, body: Any) -> StaticTransport:
        """Register a canned body for path."""
        self.responses[path] = body
        return self

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        if params:
            query = urllib.parse.urlencode(params)
            path = f"{path}{'&' if '?' in path else '?'}{query}"
        self.requests.append(path)
        if path not in self.responses:
            msg = f"Status: 404, Error: no canned response for {path}"
            raise NotFoundError(msg, 404, path)
        return copy.deepcopy(self.responses[path])

    def get_by_url(self, url: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.get(strip_base_url(url, self.api_url), params)
