"""HAL models: Link, Resource and Page on pydantic.

The registry that fetched a document is passed down through pydantic's
validation context (``{"registry": registry}``), so every nested Link knows
where to resolve itself without a global lookup::

    index = registry.fetch("spec_index")
    spec = index.link("specifications")[0].realize()

``Link.realize(registry=...)`` overrides the bound registry explicitly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    ValidationInfo,
    model_validator,
)

from halkit._errors import LinkResolutionError, ParsingError

if TYPE_CHECKING:
    from halkit._registry import EndpointRegistry

logger = logging.getLogger(__name__)


class HalModel(BaseModel):
    """Base for models that remember the registry which realized them."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    _registry: Any = PrivateAttr(default=None)

    @model_validator(mode="after")
    def bind_registry(self, info: ValidationInfo) -> HalModel:
        if isinstance(info.context, dict):
            self._registry = info.context.get("registry")
        return self

    @property
    def registry(self) -> EndpointRegistry | None:
        """The registry this model was realized through, if any."""
        return self._registry


class Link(HalModel):
    """A HAL link object (one entry under ``_links``)."""

    href: str
    title: str | None = None
    name: str | None = None
    templated: bool | None = None
    type: str | None = None
    deprecation: str | None = None
    profile: str | None = None
    lang: str | None = None

    def realize(self, registry: EndpointRegistry | None = None) -> Any:
        """Fetch the resource this link points to, as its registered model.

        Raises:
            LinkResolutionError: no registry given and none bound, or the
                href matches no registered endpoint.
        """
        registry = registry if registry is not None else self._registry
        if registry is None:
            msg = f"No registry available to realize link: {self.href}"
            raise LinkResolutionError(msg, href=self.href)
        logger.debug("Resolving link href: %s", self.href)
        return registry.resolve_href(self.href)


class Resource(HalModel):
    """Base class for HAL resources.

    Subclass it and declare attributes as pydantic fields; use
    ``Field(alias=...)`` for JSON keys that are not identifiers.
    """

    href: str | None = None
    links: dict[str, Link | list[Link]] = Field(default_factory=dict, alias="_links")

    def link(self, rel: str) -> Link | list[Link] | None:
        """Return the link (or links) for a relation, or None."""
        return self.links.get(rel)


class Page(Resource):
    """A paginated collection page."""

    page: int | None = None
    limit: int | None = None
    pages: int | None = None
    total: int | None = None

    @property
    def total_pages(self) -> int | None:
        return self.pages

    def has_next(self) -> bool:
        return self.next_page() is not None

    def has_prev(self) -> bool:
        return self.prev_page() is not None

    def has_first(self) -> bool:
        return self.first_page() is not None

    def has_last(self) -> bool:
        return self.last_page() is not None

    def next_page(self) -> Link | None:
        return self._single_link("next")

    def prev_page(self) -> Link | None:
        return self._single_link("prev")

    def first_page(self) -> Link | None:
        return self._single_link("first")

    def last_page(self) -> Link | None:
        return self._single_link("last")

    def _single_link(self, rel: str) -> Link | None:
        link = self.link(rel)
        return link if isinstance(link, Link) else None


def deserialize(target: Any, body: Any, registry: EndpointRegistry | None = None) -> Any:
    """Build an instance of target from a decoded JSON body.

    pydantic models are validated with the registry in the validation
    context; any other target is called with the body.

    Raises:
        ParsingError: the body does not validate against a pydantic target.
    """
    if isinstance(target, type) and issubclass(target, BaseModel):
        try:
            return target.model_validate(body, context={"registry": registry})
        except ValidationError as e:
            msg = f"Response parsing error: {e}"
            raise ParsingError(msg) from e
    return target(body)
