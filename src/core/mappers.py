"""Raw JSON → domain entity mappers.

Mappers are pure: no I/O, no state. Composite mappers receive the joined raw
parts as a tuple, primary resource first, in the order documented on each
``from_remote``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import quote, unquote

from core.domain.links import Link, RawResource, available_relations, link_for
from core.domain.models import Game, Mode, Registration, Tournament, TournamentSummary, User
from core.domain.pages import RawPage
from core.errors import MissingLinkError


def resource_id(raw: Mapping[str, Any]) -> str:
    """Identifier of a raw resource: its ``id`` field, else the tail of its self link."""

    value = raw.get("id")
    if value is not None and str(value).strip():
        return str(value).strip()

    links = raw.get("_links") or raw.get("links") or {}
    self_link = links.get("self") if isinstance(links, Mapping) else None
    if isinstance(self_link, Mapping):
        self_link = self_link.get("href")
    if isinstance(self_link, str) and self_link.strip("/"):
        return unquote(self_link.rstrip("/").rsplit("/", 1)[-1])
    raise MissingLinkError("self", available_relations(raw))


def _tournament_fields(raw: RawResource) -> dict[str, Any]:
    return {
        "id": int(resource_id(raw)),
        "title": raw.get("title"),
        "description": raw.get("tournamentDescription"),
        "mode": raw.get("tournamentMode"),
        "players_number": int(raw.get("playersNumber") or 0),
    }


class GameMapper:
    def from_remote(self, raw: RawResource) -> Game:
        modes = raw.get("availableModes") or []
        return Game(
            name=raw.get("gameName") or raw.get("name"),
            available_modes=tuple(str(m) for m in modes),
            image=raw.get("image"),
            icon=raw.get("icon"),
        )

    def from_remote_page(self, page: RawPage) -> list[Game]:
        return [self.from_remote(item) for item in page.items]


class ModeMapper:
    def from_remote(self, raw: RawResource) -> Mode:
        return Mode(name=raw.get("modeName") or raw.get("name"))


class UserMapper:
    def from_remote(self, raw: RawResource) -> User:
        return User(
            id=resource_id(raw),
            nickname=raw.get("nickname"),
            email=raw.get("email"),
            image=raw.get("image"),
            is_subscriber=bool(raw.get("subscriber", raw.get("isSubscriber", False))),
        )


class TournamentMapper:
    """Maps ``(tournament, game, admin)``."""

    def __init__(self, game_mapper: GameMapper | None = None, user_mapper: UserMapper | None = None) -> None:
        self._games = game_mapper or GameMapper()
        self._users = user_mapper or UserMapper()

    def from_remote(self, parts: tuple[RawResource, RawResource, RawResource]) -> Tournament:
        tournament, game, admin = parts
        return Tournament(
            **_tournament_fields(tournament),
            game=self._games.from_remote(game),
            admin=self._users.from_remote(admin),
        )


class RegistrationMapper:
    """Maps ``(registration, tournament, game, user)``."""

    def __init__(self, game_mapper: GameMapper | None = None, user_mapper: UserMapper | None = None) -> None:
        self._games = game_mapper or GameMapper()
        self._users = user_mapper or UserMapper()

    def from_remote(
        self, parts: tuple[RawResource, RawResource, RawResource, RawResource]
    ) -> Registration:
        registration, tournament, game, user = parts
        return Registration(
            id=int(resource_id(registration)),
            outcome=registration.get("outcome"),
            tournament=TournamentSummary(
                **_tournament_fields(tournament),
                game=self._games.from_remote(game),
            ),
            user=self._users.from_remote(user),
        )


# Entity → link path, for write request bodies.


def user_link(user: User) -> Link:
    return link_for(f"/users/{quote(user.id, safe='')}", "user")


def game_link(game: Game) -> Link:
    return link_for(f"/games/{quote(game.name, safe='')}", "game")


def tournament_link(tournament: TournamentSummary) -> Link:
    return link_for(f"/tournaments/{tournament.id}", "tournament")


@dataclass
class Mappers:
    """Mapper bundle injected into the repository."""

    game: GameMapper = field(default_factory=GameMapper)
    mode: ModeMapper = field(default_factory=ModeMapper)
    user: UserMapper = field(default_factory=UserMapper)
    tournament: TournamentMapper = field(default_factory=TournamentMapper)
    registration: RegistrationMapper = field(default_factory=RegistrationMapper)
