"""halkit: client-side toolkit for HAL hypermedia APIs.

All public types are exported from this module for flat imports:

    from halkit import EndpointRegistry, HalClient, Resource, Page, Link
"""

__version__ = "0.1.0"

from halkit._client import HalClient

# Config types, see halkit._config for details
from halkit._config import EndpointConfig, load_endpoint_file, parse_endpoint_config
from halkit._endpoint import EndpointEntry, LazyTarget, lazy

# Errors, see halkit._errors for the full taxonomy
from halkit._errors import (
    BadRequestError,
    ClientNotConfiguredError,
    ConfigParseError,
    ConnectError,
    DuplicateEndpointError,
    DuplicateIdError,
    HalError,
    HttpStatusError,
    LinkResolutionError,
    NotFoundError,
    ParsingError,
    RequestTimeoutError,
    ServerError,
    TooManyRequestsError,
    UnauthorizedError,
    UnknownEndpointError,
)
from halkit._href import Href, PathInput, QueryParamInput, parse_query

# Models
from halkit._model import HalModel, Link, Page, Resource, deserialize
from halkit._predicate import And, Predicate, SinglePredicate, and_predicate
from halkit._query import QueryTemplateMatcher, matches_query
from halkit._registry import EndpointRegistry

# Concrete matchers
from halkit._string_matchers import ExactMatcher, PathTemplateMatcher, matches_path
from halkit._template import compile_path_template, is_placeholder, placeholder_names
from halkit._types import DataInput, InputMatcher, MatchingData, Transport
from halkit._url import build_query, build_url, interpolate

__all__ = [
    # Protocols
    "DataInput",
    "InputMatcher",
    "MatchingData",
    "Transport",
    # Matching context
    "Href",
    "parse_query",
    "PathInput",
    "QueryParamInput",
    # Predicates
    "SinglePredicate",
    "And",
    "Predicate",
    "and_predicate",
    # Matchers
    "ExactMatcher",
    "PathTemplateMatcher",
    "QueryTemplateMatcher",
    "matches_path",
    "matches_query",
    # Templates and URL building
    "compile_path_template",
    "is_placeholder",
    "placeholder_names",
    "interpolate",
    "build_query",
    "build_url",
    # Registry
    "EndpointEntry",
    "EndpointRegistry",
    "LazyTarget",
    "lazy",
    # Config
    "EndpointConfig",
    "parse_endpoint_config",
    "load_endpoint_file",
    # Models
    "HalModel",
    "Link",
    "Resource",
    "Page",
    "deserialize",
    # Client
    "HalClient",
    # Errors
    "HalError",
    "DuplicateIdError",
    "DuplicateEndpointError",
    "UnknownEndpointError",
    "ClientNotConfiguredError",
    "LinkResolutionError",
    "ConfigParseError",
    "ConnectError",
    "RequestTimeoutError",
    "ParsingError",
    "HttpStatusError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "TooManyRequestsError",
    "ServerError",
]
