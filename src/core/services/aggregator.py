"""Hypermedia aggregation.

The API returns partial resources whose relations are links. This module
follows those links and joins the results into the tuple a mapper expects:

1. resolve every required link on the primary resource (``MissingLinkError``
   before any request goes out);
2. fetch sibling relations concurrently, recursing into relations that are
   composite themselves (a registration's tournament needs its game);
3. assemble the parts in declaration order, never completion order;
4. on any failure, cancel the siblings still in flight and re-raise the
   original exception. Nothing is cached between calls.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence, TypeVar

from core.domain.links import Link, RawResource, resolve_link
from core.domain.models import Registration, Tournament
from core.domain.pages import RawPage
from core.interfaces.datasource import ArenaDatasource
from core.mappers import Mappers
from core.services.concurrency import gather_or_cancel

logger = logging.getLogger(__name__)

E = TypeVar("E")

LinkFetcher = Callable[[Link], Awaitable[RawResource]]


@dataclass(frozen=True)
class Relation:
    """A relation to follow from a raw resource.

    ``nested`` relations are resolved on the fetched resource before the
    relation counts as complete.
    """

    name: str
    fetch: LinkFetcher
    nested: tuple["Relation", ...] = ()


async def expand(raw: RawResource, relations: Sequence[Relation]) -> list[RawResource]:
    """Return ``[raw, *relation parts]`` with nested parts right after their parent."""

    links = [resolve_link(raw, relation.name) for relation in relations]

    async def follow(relation: Relation, link: Link) -> list[RawResource]:
        logger.debug("Following %s -> %s", relation.name, link.href)
        child = await relation.fetch(link)
        if relation.nested:
            return await expand(child, relation.nested)
        return [child]

    groups = await gather_or_cancel(*(follow(r, link) for r, link in zip(relations, links)))
    return [raw, *itertools.chain.from_iterable(groups)]


async def transform_page(
    page: RawPage,
    aggregate: Callable[[RawResource], Awaitable[E]],
) -> list[E]:
    """Aggregate every item of a page concurrently; any failure fails the page."""

    return await gather_or_cancel(*(aggregate(item) for item in page.items))


class Aggregator:
    """Builds composite entities out of a datasource and the mappers."""

    def __init__(self, datasource: ArenaDatasource, mappers: Mappers | None = None) -> None:
        self._ds = datasource
        self._mappers = mappers or Mappers()

    def tournament_relations(self) -> tuple[Relation, ...]:
        return (
            Relation("game", self._ds.get_game_by_link),
            Relation("admin", self._ds.get_user_by_link),
        )

    def registration_relations(self) -> tuple[Relation, ...]:
        return (
            Relation(
                "tournament",
                self._ds.get_tournament_by_link,
                nested=(Relation("game", self._ds.get_game_by_link),),
            ),
            Relation("user", self._ds.get_user_by_link),
        )

    async def aggregate_tournament(self, raw: RawResource) -> Tournament:
        try:
            tournament, game, admin = await expand(raw, self.tournament_relations())
        except Exception as exc:
            logger.warning("Tournament aggregation failed: %s", exc)
            raise
        return self._mappers.tournament.from_remote((tournament, game, admin))

    async def aggregate_registration(self, raw: RawResource) -> Registration:
        try:
            registration, tournament, game, user = await expand(raw, self.registration_relations())
        except Exception as exc:
            logger.warning("Registration aggregation failed: %s", exc)
            raise
        return self._mappers.registration.from_remote((registration, tournament, game, user))

    async def get_tournament(self, tournament_id: int) -> Tournament:
        logger.debug("Aggregating tournament %s", tournament_id)
        raw = await self._ds.get_tournament_by_id(tournament_id)
        return await self.aggregate_tournament(raw)

    async def get_registration(self, registration_id: int) -> Registration:
        logger.debug("Aggregating registration %s", registration_id)
        raw = await self._ds.get_registration_by_id(registration_id)
        return await self.aggregate_registration(raw)

    async def tournaments_page(self, page: RawPage) -> list[Tournament]:
        return await transform_page(page, self.aggregate_tournament)

    async def registrations_page(self, page: RawPage) -> list[Registration]:
        return await transform_page(page, self.aggregate_registration)
