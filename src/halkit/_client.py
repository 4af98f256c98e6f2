"""HalClient, a synchronous HAL API client on httpx.

Implements the Transport protocol the registry depends on. Every failure is
raised as a halkit error, chained to the httpx exception:

| Failure                        | Raised                 |
|--------------------------------|------------------------|
| httpx.TimeoutException         | RequestTimeoutError    |
| any other transport failure    | ConnectError           |
| body is not valid JSON         | ParsingError           |
| 400 / 401 / 404 / 429          | BadRequestError, UnauthorizedError, NotFoundError, TooManyRequestsError |
| 5xx                            | ServerError            |
| any other non-2xx              | HttpStatusError        |

Set ``debug=True`` (or the DEBUG_API environment variable) to log every
response's status, headers and body at INFO.
"""

from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING, Any

import httpx

from halkit._errors import (
    BadRequestError,
    ConnectError,
    HttpStatusError,
    NotFoundError,
    ParsingError,
    RequestTimeoutError,
    ServerError,
    TooManyRequestsError,
    UnauthorizedError,
)
from halkit._template import strip_base_url

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_STATUS_ERRORS: dict[int, type[HttpStatusError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    404: NotFoundError,
    429: TooManyRequestsError,
}


class HalClient:
    """GET-only client bound to one API base URL."""

    def __init__(
        self,
        api_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        params_default: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        debug: bool | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_url:
            msg = "api_url is required"
            raise ValueError(msg)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.params_default = dict(params_default or {})
        self.debug = debug if debug is not None else "DEBUG_API" in os.environ
        self.last_response: httpx.Response | None = None
        self._http = httpx.Client(
            base_url=self.api_url,
            timeout=timeout,
            headers={"Accept": "application/hal+json, application/json", **(headers or {})},
            follow_redirects=True,
            transport=transport,
        )

    def __repr__(self) -> str:
        return f"HalClient(api_url={self.api_url!r})"

    def __enter__(self) -> HalClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def get_by_url(self, url: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET a full URL or a path; the api_url prefix is stripped when present."""
        return self.get(strip_base_url(url, self.api_url), params)

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET path relative to api_url and return the decoded JSON body."""
        query = {**self.params_default, **(params or {})}
        logger.debug("GET %s params=%s", path, query)

        try:
            response = self._http.get(path, params=query or None)
        except httpx.TimeoutException as e:
            msg = f"Request timed out: {e}"
            raise RequestTimeoutError(msg) from e
        except httpx.TransportError as e:
            msg = f"Connection failed: {e}"
            raise ConnectError(msg) from e

        self.last_response = response
        if self.debug:
            self._debug_log(response, path)
        return self._handle_response(response, path)

    def _handle_response(self, response: httpx.Response, path: str) -> Any:
        body = self._decode(response)
        status = response.status_code
        logger.debug("GET %s -> %d", path, status)

        if 200 <= status < 300:
            if body is None:
                msg = f"Response parsing error: empty body from {path}"
                raise ParsingError(msg)
            return body

        message = _status_message(status, body)
        if status in _STATUS_ERRORS:
            raise _STATUS_ERRORS[status](message, status, path)
        if 500 <= status < 600:
            raise ServerError(message, status, path)
        raise HttpStatusError(message, status, path)

    def _decode(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            if response.is_success:
                msg = f"Response parsing error: {e}"
                raise ParsingError(msg) from e
            return None

    def _debug_log(self, response: httpx.Response, path: str) -> None:
        try:
            body = json.dumps(response.json(), indent=2)
        except ValueError:
            body = repr(response.text)
        logger.info(
            "HAL API request\nURL: %s\nStatus: %d\nHeaders:\n%s\nResponse body:\n%s",
            path,
            response.status_code,
            json.dumps(dict(response.headers), indent=2),
            body,
        )


def _status_message(status: int, body: Any) -> str:
    message = f"Status: {status}"
    if isinstance(body, dict) and body.get("error"):
        message += f", Error: {body['error']}"
    return message
