"""Paged listing responses.

The API wraps listings as::

    {"_embedded": {"tournaments": [...]}, "page": {"size": 20, "totalElements": 41,
     "totalPages": 3, "number": 0}}

``_embedded`` is omitted by the server when the page is empty.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PageInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    size: int = Field(default=0, ge=0)
    total_elements: int = Field(default=0, ge=0, alias="totalElements")
    total_pages: int = Field(default=0, ge=0, alias="totalPages")
    number: int = Field(default=0, ge=0)


class RawPage(BaseModel):
    """Ordered raw items of one page plus its pagination metadata."""

    model_config = ConfigDict(frozen=True)

    items: tuple[dict[str, Any], ...] = ()
    page: PageInfo = Field(default_factory=PageInfo)


def parse_page(raw: Mapping[str, Any], collection: str) -> RawPage:
    """Extract the ``collection`` items (e.g. ``"tournaments"``) from a listing."""

    embedded = raw.get("_embedded")
    items: list[dict[str, Any]] = []
    if isinstance(embedded, Mapping):
        values = embedded.get(collection)
        if isinstance(values, list):
            items = [dict(v) for v in values if isinstance(v, Mapping)]
    page = PageInfo.model_validate(raw.get("page") or {})
    return RawPage(items=tuple(items), page=page)
