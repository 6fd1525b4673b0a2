"""Hypermedia link resolution.

Raw resources carry their relations in a links sub-structure. The API emits
HAL (``{"_links": {"game": {"href": "/games/5"}}}``); a plain mapping of
relation name to URL (``{"links": {"game": "/games/5"}}``) is accepted too.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.errors import MissingLinkError

RawResource = dict[str, Any]

_LINK_KEYS = ("_links", "links")


class Link(BaseModel):
    """A (relation, URL) pair derived from a raw resource."""

    model_config = ConfigDict(frozen=True)

    relation: str = Field(..., min_length=1)
    href: str = Field(..., min_length=1)

    @property
    def path(self) -> str:
        return self.href


def _links_of(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    for key in _LINK_KEYS:
        links = raw.get(key)
        if isinstance(links, Mapping):
            return links
    return {}


def _href_of(value: Any) -> str | None:
    if isinstance(value, Mapping):
        value = value.get("href")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def available_relations(raw: Mapping[str, Any]) -> list[str]:
    """Relation names that carry a usable href."""

    return [name for name, value in _links_of(raw).items() if _href_of(value)]


def resolve_link(raw: Mapping[str, Any], relation: str) -> Link:
    """Return the link for ``relation`` or raise ``MissingLinkError``."""

    href = _href_of(_links_of(raw).get(relation))
    if href is None:
        raise MissingLinkError(relation, available_relations(raw))
    return Link(relation=relation, href=href)


def link_for(path: str, relation: str = "self") -> Link:
    """Build a link for a path that is already known (write requests)."""

    return Link(relation=relation, href=path)
