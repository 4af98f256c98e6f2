"""Config types for declaring endpoint tables as data.

Config-driven registration path:
  dict / YAML → parse_endpoint_config() → EndpointConfig → EndpointRegistry.load_config()

The JSON/YAML shape::

    endpoints:
      - id: spec_index
        kind: index
        url: /specifications
        model: SpecificationIndex
      - id: spec_page
        kind: index
        url: /specifications
        model: SpecificationIndex
        query_params:
          page: "{page}"
          items: "{items}"

``model`` is a name looked up in the mapping the caller passes to
load_config(); names are never resolved against a module namespace.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from halkit._errors import ConfigParseError

DEFAULT_KIND = "resource"


@dataclass(frozen=True, slots=True)
class EndpointConfig:
    """One endpoint declaration."""

    id: str
    url: str
    model: str
    kind: str = DEFAULT_KIND
    query_params: dict[str, str] = field(default_factory=dict)


def parse_endpoint_config(data: Any) -> tuple[EndpointConfig, ...]:
    """Parse a dict into EndpointConfig entries.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_endpoints = data.get("endpoints")
    if raw_endpoints is None:
        msg = "missing required field 'endpoints'"
        raise ConfigParseError(msg)
    if not isinstance(raw_endpoints, list):
        msg = f"'endpoints' must be a list, got {type(raw_endpoints).__name__}"
        raise ConfigParseError(msg)

    return tuple(_parse_endpoint(ep, i) for i, ep in enumerate(raw_endpoints))


def load_endpoint_file(path: str | Path) -> tuple[EndpointConfig, ...]:
    """Read and parse a YAML (or JSON) endpoint file."""
    with Path(path).open() as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"invalid YAML in {path}: {e}"
            raise ConfigParseError(msg) from e
    return parse_endpoint_config(data)


def _parse_endpoint(data: Any, index: int) -> EndpointConfig:
    if not isinstance(data, dict):
        msg = f"endpoint #{index}: expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    endpoint_id = _require_str(data, "id", index)
    url = _require_str(data, "url", index)
    model = _require_str(data, "model", index)

    kind = data.get("kind", DEFAULT_KIND)
    if not isinstance(kind, str) or not kind:
        msg = f"endpoint {endpoint_id!r}: 'kind' must be a non-empty string"
        raise ConfigParseError(msg)

    raw_query = data.get("query_params") or {}
    if not isinstance(raw_query, dict):
        msg = (
            f"endpoint {endpoint_id!r}: 'query_params' must be a mapping, "
            f"got {type(raw_query).__name__}"
        )
        raise ConfigParseError(msg)
    query_params = {}
    for name, value in raw_query.items():
        if isinstance(value, (dict, list)) or value is None:
            msg = (
                f"endpoint {endpoint_id!r}: query param {name!r} must be a scalar "
                "(quote placeholders in YAML, e.g. \"{page}\")"
            )
            raise ConfigParseError(msg)
        query_params[str(name)] = str(value)

    return EndpointConfig(
        id=endpoint_id,
        url=url,
        model=model,
        kind=kind,
        query_params=query_params,
    )


def _require_str(data: dict[str, Any], key: str, index: int) -> str:
    value = data.get(key)
    if value is None:
        msg = f"endpoint #{index}: missing required field {key!r}"
        raise ConfigParseError(msg)
    if not isinstance(value, str) or not value:
        msg = f"endpoint #{index}: {key!r} must be a non-empty string"
        raise ConfigParseError(msg)
    return value
