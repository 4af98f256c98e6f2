"""EndpointRegistry: URL templates mapped to target models.

The registry owns an insertion-ordered table of EndpointEntry records and
an optional Transport. It answers two questions:

- "what URL does endpoint X with these params live at?" (url_for / fetch)
- "which endpoint does this href belong to?" (find_match / resolve_href)

Example::

    registry = EndpointRegistry("w3c", client=HalClient("https://api.w3.org"))
    registry.register("spec_index", "index", "/specifications", SpecificationIndex)
    registry.register("spec", "resource", "/specifications/{id}", Specification)

    index = registry.fetch("spec_index")
    png = registry.fetch("spec", id="png-2")
    same = registry.resolve_href("https://api.w3.org/specifications/png-2")

When several endpoints match an href, the one with the longest url template
string wins; ties go to the endpoint registered first.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from halkit._config import EndpointConfig, parse_endpoint_config
from halkit._endpoint import EndpointEntry
from halkit._errors import (
    ClientNotConfiguredError,
    ConfigParseError,
    DuplicateEndpointError,
    DuplicateIdError,
    LinkResolutionError,
    ParsingError,
    UnknownEndpointError,
)
from halkit._href import Href
from halkit._model import deserialize
from halkit._template import strip_base_url
from halkit._url import build_url

if TYPE_CHECKING:
    from collections.abc import Iterator

    from halkit._types import Transport

logger = logging.getLogger(__name__)


class EndpointRegistry:
    """Registry of endpoints for one HAL API.

    Registration and lookup may happen from different threads: the table
    is mutated under a lock and lookups work on a snapshot of it.
    """

    def __init__(
        self,
        name: str | None = None,
        client: Transport | None = None,
        *,
        base_url: str | None = None,
    ) -> None:
        self.name = name
        self.client = client
        self._base_url = base_url
        self._entries: dict[str, EndpointEntry] = {}
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"EndpointRegistry(name={self.name!r}, endpoints={len(self)})"

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, endpoint_id: object) -> bool:
        return endpoint_id in self._entries

    def __iter__(self) -> Iterator[EndpointEntry]:
        return iter(self.endpoints())

    @property
    def base_url(self) -> str | None:
        """The API base URL of the bound transport, else the one given at construction."""
        if self.client is None:
            return self._base_url
        return getattr(self.client, "api_url", None) or self._base_url

    # ── Registration ──────────────────────────────────────────────────────

    def register(
        self,
        endpoint_id: str,
        kind: str,
        url: str,
        target: Any,
        query_params: Mapping[str, Any] | None = None,
    ) -> EndpointEntry:
        """Register an endpoint.

        Raises:
            DuplicateIdError: endpoint_id is already registered
            DuplicateEndpointError: same url, kind and query_params already registered
        """
        entry = EndpointEntry(
            id=endpoint_id,
            kind=kind,
            url=url,
            target=target,
            query_params=query_params or {},
        )
        with self._lock:
            if endpoint_id in self._entries:
                raise DuplicateIdError(endpoint_id)
            for existing in self._entries.values():
                if existing.route_key == entry.route_key:
                    raise DuplicateEndpointError(url, kind, existing.id)
            self._entries[endpoint_id] = entry

        logger.debug(
            "Registered endpoint %s (%s) %s query=%s",
            endpoint_id,
            kind,
            url,
            dict(entry.query_params),
        )
        return entry

    def load_config(
        self,
        config: Mapping[str, Any] | tuple[EndpointConfig, ...],
        models: Mapping[str, Any],
    ) -> list[EndpointEntry]:
        """Register every endpoint declared in config.

        Model names are looked up in models only.

        Raises:
            ConfigParseError: malformed config or a model name missing from models
            DuplicateIdError, DuplicateEndpointError: as for register()
        """
        configs = parse_endpoint_config(config) if isinstance(config, Mapping) else config

        for cfg in configs:
            if cfg.model not in models:
                available = ", ".join(sorted(models)) or "none"
                msg = (
                    f"endpoint {cfg.id!r}: unknown model {cfg.model!r} "
                    f"(available: {available})"
                )
                raise ConfigParseError(msg)

        return [
            self.register(cfg.id, cfg.kind, cfg.url, models[cfg.model], cfg.query_params)
            for cfg in configs
        ]

    # ── Lookup ────────────────────────────────────────────────────────────

    def get(self, endpoint_id: str) -> EndpointEntry:
        """Return the endpoint registered under endpoint_id.

        Raises:
            UnknownEndpointError: endpoint_id is not registered
        """
        entry = self._entries.get(endpoint_id)
        if entry is None:
            raise UnknownEndpointError(endpoint_id, list(self._entries))
        return entry

    def endpoints(self) -> list[EndpointEntry]:
        """Return all endpoints in registration order."""
        with self._lock:
            return list(self._entries.values())

    def url_for(self, endpoint_id: str, /, **params: Any) -> str:
        """Build the request URL for an endpoint without fetching it."""
        entry = self.get(endpoint_id)
        return build_url(entry.url, params, entry.query_params)

    def find_match(self, href: str) -> EndpointEntry | None:
        """Return the most specific endpoint matching href, or None.

        href may be a path with query string or a full URL; the base URL of
        the bound transport is stripped first. Among all endpoints whose
        path template and query template match, the one with the longest
        url template wins.
        """
        base_url = self.base_url
        ctx = Href(strip_base_url(href, base_url))
        candidates = [e for e in self.endpoints() if e.matches(ctx, base_url)]
        if not candidates:
            return None
        return max(candidates, key=lambda e: len(e.url))

    # ── Fetching ──────────────────────────────────────────────────────────

    def fetch(self, endpoint_id: str, /, **params: Any) -> Any:
        """Build the endpoint URL from params, GET it, and return the model.

        Raises:
            UnknownEndpointError: endpoint_id is not registered
            ClientNotConfiguredError: no transport is bound
            transport errors from the client, unchanged
        """
        entry = self.get(endpoint_id)
        client = self._require_client()
        url = build_url(entry.url, params, entry.query_params)

        logger.debug("Fetching endpoint %s: %s", endpoint_id, url)
        body = client.get(url)
        return deserialize(entry.model, body, self)

    def resolve_href(self, href: str) -> Any:
        """Fetch href and return it as the model of the endpoint it matches.

        The href is merged into the response body so the model keeps its
        own address.

        Raises:
            ClientNotConfiguredError: no transport is bound
            LinkResolutionError: href matches no registered endpoint
            ParsingError: the response body is not a JSON object
            transport errors from the client, unchanged
        """
        client = self._require_client()

        logger.debug("Resolving href %s", href)
        body = client.get_by_url(href)

        entry = self.find_match(href)
        if entry is None:
            msg = f"Unregistered URL pattern: {href}"
            raise LinkResolutionError(msg, href=href)
        if not isinstance(body, Mapping):
            msg = f"Response parsing error: expected a JSON object from {href}"
            raise ParsingError(msg)

        logger.debug("Href %s matched endpoint %s", href, entry.id)
        return deserialize(entry.model, {**body, "href": href}, self)

    def _require_client(self) -> Transport:
        if self.client is None:
            raise ClientNotConfiguredError
        return self.client
