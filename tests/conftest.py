"""Shared fixtures for halkit tests.

Provides a small W3C-style API as canned JSON bodies, a StaticTransport
serving them, and a registry with the matching endpoint table bound to it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from pydantic import Field

from halkit import EndpointRegistry, Page, Resource
from halkit.testing import StaticTransport

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

API_URL = "https://api.w3.org"


# ─── Models ──────────────────────────────────────────────────────────────────


class SpecificationIndex(Page):
    """Paginated list of specifications."""


class Specification(Resource):
    shortname: str
    title: str
    description: str | None = None
    editor_draft: str | None = Field(default=None, alias="editor-draft")


class Group(Resource):
    id: int
    name: str


class GroupIndex(Page):
    pass


# ─── Canned API ──────────────────────────────────────────────────────────────


def _spec_link(shortname: str, title: str) -> dict[str, str]:
    return {"href": f"{API_URL}/specifications/{shortname}", "title": title}


W3C_BODIES: dict[str, Any] = {
    "/specifications": {
        "page": 1,
        "limit": 2,
        "pages": 2,
        "total": 3,
        "_links": {
            "specifications": [
                _spec_link("png-2", "Portable Network Graphics (PNG) Specification"),
                _spec_link("html5", "HTML5"),
            ],
            "self": {"href": f"{API_URL}/specifications?page=1&items=2"},
            "first": {"href": f"{API_URL}/specifications?page=1&items=2"},
            "next": {"href": f"{API_URL}/specifications?page=2&items=2"},
            "last": {"href": f"{API_URL}/specifications?page=2&items=2"},
        },
    },
    "/specifications?page=2&items=2": {
        "page": 2,
        "limit": 2,
        "pages": 2,
        "total": 3,
        "_links": {
            "specifications": [_spec_link("css-grid-1", "CSS Grid Layout Module Level 1")],
            "self": {"href": f"{API_URL}/specifications?page=2&items=2"},
            "first": {"href": f"{API_URL}/specifications?page=1&items=2"},
            "prev": {"href": f"{API_URL}/specifications?page=1&items=2"},
            "last": {"href": f"{API_URL}/specifications?page=2&items=2"},
        },
    },
    "/specifications/png-2": {
        "shortname": "png-2",
        "title": "Portable Network Graphics (PNG) Specification",
        "description": "An extensible file format for raster images.",
        "editor-draft": "https://w3c.github.io/PNG-spec/",
        "_links": {
            "self": {"href": f"{API_URL}/specifications/png-2"},
            "latest-version": {"href": f"{API_URL}/specifications/png-2/versions/20031110"},
        },
    },
    "/specifications/html5": {
        "shortname": "html5",
        "title": "HTML5",
        "_links": {"self": {"href": f"{API_URL}/specifications/html5"}},
    },
    "/groups/68239": {
        "id": 68239,
        "name": "Web Applications Working Group",
        "_links": {"self": {"href": f"{API_URL}/groups/68239"}},
    },
}


def w3c_endpoints(registry: EndpointRegistry) -> EndpointRegistry:
    """Register the W3C-style endpoint table on registry."""
    registry.register("spec_index", "index", "/specifications", SpecificationIndex)
    registry.register(
        "spec_index_page",
        "index",
        "/specifications",
        SpecificationIndex,
        {"page": "{page}", "items": "{items}"},
    )
    registry.register("spec", "resource", "/specifications/{shortname}", Specification)
    registry.register("group_index", "index", "/groups", GroupIndex)
    registry.register("group", "resource", "/groups/{id}", Group)
    return registry


@pytest.fixture
def transport() -> StaticTransport:
    return StaticTransport(API_URL, dict(W3C_BODIES))


@pytest.fixture
def registry(transport: StaticTransport) -> EndpointRegistry:
    return w3c_endpoints(EndpointRegistry("w3c", client=transport))


@pytest.fixture
def offline_registry() -> EndpointRegistry:
    """The W3C endpoint table with no transport bound."""
    return w3c_endpoints(EndpointRegistry("w3c", base_url=API_URL))
