"""Tests for HalClient over httpx.MockTransport."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx
import pytest

from halkit import (
    BadRequestError,
    ConnectError,
    HalClient,
    HttpStatusError,
    NotFoundError,
    ParsingError,
    RequestTimeoutError,
    ServerError,
    TooManyRequestsError,
    Transport,
    UnauthorizedError,
)

API_URL = "https://api.example.com"


def _client(handler, **kwargs) -> HalClient:  # noqa: ANN001
    return HalClient(API_URL, transport=httpx.MockTransport(handler), **kwargs)


def _json(status: int, body: object) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, json=body)


class TestConstruction:
    def test_api_url_required(self) -> None:
        with pytest.raises(ValueError, match="api_url"):
            HalClient("")

    def test_trailing_slash_stripped(self) -> None:
        with HalClient("https://api.example.com/") as client:
            assert client.api_url == "https://api.example.com"

    def test_is_transport(self) -> None:
        with HalClient(API_URL) as client:
            assert isinstance(client, Transport)

    def test_debug_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEBUG_API", "1")
        with HalClient(API_URL) as client:
            assert client.debug is True
        monkeypatch.delenv("DEBUG_API")
        with HalClient(API_URL) as client:
            assert client.debug is False


class TestGet:
    def test_returns_decoded_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"name": "ada"})

        with _client(handler) as client:
            assert client.get("/users/1") == {"name": "ada"}
            assert client.last_response is not None
            assert client.last_response.status_code == 200

        assert str(seen[0].url) == "https://api.example.com/users/1"
        assert seen[0].method == "GET"
        assert "application/hal+json" in seen[0].headers["accept"]

    def test_query_in_path_is_kept(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        with _client(handler) as client:
            client.get("/users?status=active&page=2")

        assert seen[0].url.path == "/users"
        assert dict(seen[0].url.params) == {"status": "active", "page": "2"}

    def test_params_default_merged(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        with _client(handler, params_default={"embed": "true", "items": "10"}) as client:
            client.get("/users", {"items": "50"})

        assert dict(seen[0].url.params) == {"embed": "true", "items": "50"}

    def test_custom_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        with _client(handler, headers={"User-Agent": "halkit-tests"}) as client:
            client.get("/")

        assert seen[0].headers["user-agent"] == "halkit-tests"

    def test_get_by_url_strips_api_url(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        with _client(handler) as client:
            assert client.get_by_url("https://api.example.com/users/1") == {"ok": True}
            client.get_by_url("/users/2")

        assert [r.url.path for r in seen] == ["/users/1", "/users/2"]

    def test_get_by_url_keeps_hrefs_outside_api_url(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        transport = httpx.MockTransport(handler)
        with HalClient("https://api.example.com/v1", transport=transport) as client:
            client.get_by_url("https://api.example.com/v1/users/1")
            client.get_by_url("https://api.example.com/v10/users/1")
            client.get_by_url("https://api.example.com/v1.evil.org/users/1")

        assert [str(r.url) for r in seen] == [
            "https://api.example.com/v1/users/1",
            "https://api.example.com/v10/users/1",
            "https://api.example.com/v1.evil.org/users/1",
        ]

    def test_get_by_url_on_another_host_is_requested_as_given(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        with _client(handler) as client:
            client.get_by_url("https://api.example.com.evil.org/users/1")
            client.get_by_url("https://api.example.com")

        assert [str(r.url) for r in seen] == [
            "https://api.example.com.evil.org/users/1",
            "https://api.example.com/",
        ]


class TestErrors:
    @pytest.mark.parametrize(
        ("status", "error"),
        [
            (400, BadRequestError),
            (401, UnauthorizedError),
            (404, NotFoundError),
            (429, TooManyRequestsError),
            (500, ServerError),
            (503, ServerError),
            (418, HttpStatusError),
        ],
    )
    def test_status_mapping(self, status: int, error: type[HttpStatusError]) -> None:
        with _client(_json(status, {"error": "nope"})) as client:
            with pytest.raises(error) as exc:
                client.get("/users/1")

        assert type(exc.value) is error
        assert exc.value.status == status
        assert exc.value.url == "/users/1"
        assert str(exc.value) == f"Status: {status}, Error: nope"

    def test_status_message_without_error_field(self) -> None:
        with _client(lambda request: httpx.Response(404, text="not here")) as client:
            with pytest.raises(NotFoundError, match="^Status: 404$"):
                client.get("/missing")

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with _client(handler) as client:
            with pytest.raises(RequestTimeoutError, match="Request timed out") as exc:
                client.get("/slow")

        assert isinstance(exc.value.__cause__, httpx.TimeoutException)

    def test_connect_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(ConnectError, match="Connection failed"):
                client.get("/")

    def test_invalid_json(self) -> None:
        with _client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ParsingError, match="Response parsing error"):
                client.get("/")

    def test_empty_body(self) -> None:
        with _client(lambda request: httpx.Response(204)) as client:
            with pytest.raises(ParsingError, match="empty body"):
                client.get("/")


class TestDebugLogging:
    def test_debug_dump(self, caplog: pytest.LogCaptureFixture) -> None:
        with _client(_json(200, {"name": "ada"}), debug=True) as client:
            with caplog.at_level(logging.INFO, logger="halkit._client"):
                client.get("/users/1")

        assert "HAL API request" in caplog.text
        assert "Status: 200" in caplog.text
        assert '"name": "ada"' in caplog.text

    def test_no_dump_by_default(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("DEBUG_API", raising=False)
        with _client(_json(200, {"name": "ada"})) as client:
            with caplog.at_level(logging.INFO, logger="halkit._client"):
                client.get("/users/1")

        assert "HAL API request" not in caplog.text
