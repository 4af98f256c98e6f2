"""Error taxonomy for halkit.

Every error raised by the registry, the URL builder, the config loader and
the HTTP client derives from HalError, so callers can catch by kind:

| Error                     | Raised when                                      |
|---------------------------|--------------------------------------------------|
| DuplicateIdError          | an endpoint id is registered twice               |
| DuplicateEndpointError    | (url, kind, query_params) is registered twice    |
| UnknownEndpointError      | fetch() is given an unregistered id              |
| ClientNotConfiguredError  | a fetch is attempted with no transport bound     |
| LinkResolutionError       | an href matches no registered endpoint           |
| ConfigParseError          | an endpoint config payload is malformed          |
| transport family          | the HTTP client fails (connect, timeout, 4xx...) |

None of these are retried by halkit itself.
"""

from __future__ import annotations


class HalError(Exception):
    """Base class for all halkit errors."""


# ═══════════════════════════════════════════════════════════════════════════════
# Registry errors
# ═══════════════════════════════════════════════════════════════════════════════


class DuplicateIdError(HalError):
    """An endpoint with the same id is already registered."""

    def __init__(self, endpoint_id: str) -> None:
        self.endpoint_id = endpoint_id
        super().__init__(f"Duplicate endpoint id: {endpoint_id!r}")


class DuplicateEndpointError(HalError):
    """An endpoint with the same url, kind and query params is already registered."""

    def __init__(self, url: str, kind: str, existing_id: str) -> None:
        self.url = url
        self.kind = kind
        self.existing_id = existing_id
        super().__init__(
            f"Duplicate URL pattern: {url!r} (kind {kind!r}) "
            f"is already registered as {existing_id!r}"
        )


class UnknownEndpointError(HalError):
    """No endpoint is registered under the requested id."""

    def __init__(self, endpoint_id: str, available: list[str]) -> None:
        self.endpoint_id = endpoint_id
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown endpoint: {endpoint_id!r} (registered: {registered})"
        else:
            msg = f"unknown endpoint: {endpoint_id!r} (no endpoints are registered)"
        super().__init__(msg)


class ClientNotConfiguredError(HalError):
    """A request was attempted before a transport was bound to the registry."""

    def __init__(self) -> None:
        super().__init__("Client not configured")


class LinkResolutionError(HalError):
    """An href could not be resolved to a registered endpoint."""

    def __init__(self, message: str, href: str | None = None) -> None:
        self.href = href
        super().__init__(message)


class ConfigParseError(HalError):
    """Error parsing an endpoint config payload."""


# ═══════════════════════════════════════════════════════════════════════════════
# Transport errors
# ═══════════════════════════════════════════════════════════════════════════════


class ConnectError(HalError):
    """The HTTP connection could not be established."""


class RequestTimeoutError(HalError):
    """The HTTP request timed out."""


class ParsingError(HalError):
    """The response body could not be decoded as JSON."""


class HttpStatusError(HalError):
    """The server answered with a non-success status code."""

    def __init__(self, message: str, status: int, url: str) -> None:
        self.status = status
        self.url = url
        super().__init__(message)


class BadRequestError(HttpStatusError):
    """HTTP 400."""


class UnauthorizedError(HttpStatusError):
    """HTTP 401."""


class NotFoundError(HttpStatusError):
    """HTTP 404."""


class TooManyRequestsError(HttpStatusError):
    """HTTP 429."""


class ServerError(HttpStatusError):
    """HTTP 5xx."""
