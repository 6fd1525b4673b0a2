"""Resource fetcher contract for the tournaments REST API.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- The aggregation core depends on this abstraction only; the httpx adapter
  and the in-memory test doubles are interchangeable.

Rules:
- Every method is async and single-shot (no retry).
- Single resources come back as raw mappings; listings as ``RawPage``.
- Failures raise ``NotFoundError`` (404) or ``TransportError`` (anything else).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.links import Link, RawResource
from core.domain.pages import RawPage


@runtime_checkable
class ArenaDatasource(Protocol):
    # Single resources, by id.
    async def get_tournament_by_id(self, tournament_id: int) -> RawResource: ...

    async def get_registration_by_id(self, registration_id: int) -> RawResource: ...

    async def get_user_by_id(self, user_id: str) -> RawResource: ...

    async def get_game_by_name(self, game_name: str) -> RawResource: ...

    # Single resources, by link discovered mid-aggregation.
    async def get_game_by_link(self, link: Link) -> RawResource: ...

    async def get_user_by_link(self, link: Link) -> RawResource: ...

    async def get_tournament_by_link(self, link: Link) -> RawResource: ...

    # Game listings.
    async def get_all_games(self, page: int) -> RawPage: ...

    async def get_games_by_mode(self, mode: str, page: int) -> RawPage: ...

    async def get_games_containing_name(self, name: str, page: int) -> RawPage: ...

    async def search_games_by_name(self, name: str, page: int) -> RawPage: ...

    # Tournament listings.
    async def get_showcase_tournaments(self, page: int) -> RawPage: ...

    async def get_tournaments_by_game_name(self, game_name: str, page: int) -> RawPage: ...

    async def get_tournaments_by_mode(self, mode: str, page: int) -> RawPage: ...

    async def get_tournaments_by_user(self, user_id: str, page: int) -> RawPage: ...

    async def get_tournaments_containing_title(self, title: str, page: int) -> RawPage: ...

    async def search_tournaments(
        self, title: str, page: int, game_id: str | None = None
    ) -> RawPage: ...

    # Registration listings.
    async def get_registrations_by_tournament(self, tournament_id: int, page: int) -> RawPage: ...

    async def get_registrations_by_user(self, user_id: str, page: int) -> RawPage: ...

    # Writes. The response is the created raw resource.
    async def create_game(self, body: dict[str, Any]) -> RawResource: ...

    async def create_game_mode(self, body: dict[str, Any]) -> RawResource: ...

    async def create_tournament(self, body: dict[str, Any]) -> RawResource: ...

    async def create_registration(self, body: dict[str, Any]) -> RawResource: ...
