"""Resource fetcher backed by the tournaments REST API (httpx).

Every call is a single request: no retry, no cache. HTTP 404 becomes
``NotFoundError``; any other failure (status >= 400, network error, a body
that is not a JSON object) becomes ``TransportError``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.links import Link, RawResource
from core.domain.pages import RawPage, parse_page
from core.errors import NotFoundError, TransportError

logger = logging.getLogger(__name__)


class HttpArenaDatasource:
    """``ArenaDatasource`` implementation over an ``httpx.AsyncClient``.

    Usage::

        async with HttpArenaDatasource.from_settings(settings) as ds:
            raw = await ds.get_tournament_by_id(2)
    """

    def __init__(self, client: httpx.AsyncClient, *, page_size: int = 20) -> None:
        self._client = client
        self._page_size = page_size

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpArenaDatasource":
        settings = settings or AppSettings()
        client = build_async_client(settings, transport=transport)
        return cls(client, page_size=settings.page_size)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpArenaDatasource":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> RawResource:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        logger.debug("%s %s params=%s", method, url, params)

        try:
            resp = await self._client.request(method, url, params=params, json=body)
        except httpx.HTTPError as exc:
            raise TransportError(url, str(exc) or exc.__class__.__name__) from exc

        if resp.status_code == 404:
            raise NotFoundError(str(resp.request.url))
        if resp.status_code >= 400:
            logger.error("HTTP %s for %s: %s", resp.status_code, resp.request.url, resp.text[:200])
            raise TransportError(str(resp.request.url), resp.reason_phrase, resp.status_code)

        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError(str(resp.request.url), f"Invalid JSON response: {exc}") from exc
        if not isinstance(data, dict):
            raise TransportError(str(resp.request.url), "Expected a JSON object")
        return data

    async def _get(self, url: str) -> RawResource:
        return await self._request("GET", url)

    async def _page(self, url: str, collection: str, page: int, **params: Any) -> RawPage:
        raw = await self._request("GET", url, params={**params, "page": page, "size": self._page_size})
        return parse_page(raw, collection)

    # ------------------------------------------------------------------
    # Single resources
    # ------------------------------------------------------------------

    async def get_tournament_by_id(self, tournament_id: int) -> RawResource:
        return await self._get(f"/tournaments/{tournament_id}")

    async def get_registration_by_id(self, registration_id: int) -> RawResource:
        return await self._get(f"/registrations/{registration_id}")

    async def get_user_by_id(self, user_id: str) -> RawResource:
        return await self._get(f"/users/{quote(user_id, safe='')}")

    async def get_game_by_name(self, game_name: str) -> RawResource:
        return await self._get(f"/games/{quote(game_name, safe='')}")

    async def get_game_by_link(self, link: Link) -> RawResource:
        return await self._get(link.href)

    async def get_user_by_link(self, link: Link) -> RawResource:
        return await self._get(link.href)

    async def get_tournament_by_link(self, link: Link) -> RawResource:
        return await self._get(link.href)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def get_all_games(self, page: int) -> RawPage:
        return await self._page("/games", "games", page)

    async def get_games_by_mode(self, mode: str, page: int) -> RawPage:
        return await self._page("/games/search/findByMode", "games", page, mode=mode)

    async def get_games_containing_name(self, name: str, page: int) -> RawPage:
        return await self._page("/games/search/findByNameContaining", "games", page, name=name)

    async def search_games_by_name(self, name: str, page: int) -> RawPage:
        return await self._page("/games/search/searchByName", "games", page, name=name)

    async def get_showcase_tournaments(self, page: int) -> RawPage:
        return await self._page("/tournaments/search/showcase", "tournaments", page)

    async def get_tournaments_by_game_name(self, game_name: str, page: int) -> RawPage:
        return await self._page(
            "/tournaments/search/findByGameName", "tournaments", page, gameName=game_name
        )

    async def get_tournaments_by_mode(self, mode: str, page: int) -> RawPage:
        return await self._page("/tournaments/search/findByMode", "tournaments", page, mode=mode)

    async def get_tournaments_by_user(self, user_id: str, page: int) -> RawPage:
        return await self._page("/tournaments/search/findByAdmin", "tournaments", page, userId=user_id)

    async def get_tournaments_containing_title(self, title: str, page: int) -> RawPage:
        return await self._page(
            "/tournaments/search/findByTitleContaining", "tournaments", page, title=title
        )

    async def search_tournaments(self, title: str, page: int, game_id: str | None = None) -> RawPage:
        return await self._page(
            "/tournaments/search/searchByTitle", "tournaments", page, title=title, gameId=game_id
        )

    async def get_registrations_by_tournament(self, tournament_id: int, page: int) -> RawPage:
        return await self._page(
            "/registrations/search/findByTournament", "registrations", page, tournamentId=tournament_id
        )

    async def get_registrations_by_user(self, user_id: str, page: int) -> RawPage:
        return await self._page("/registrations/search/findByUser", "registrations", page, userId=user_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_game(self, body: dict[str, Any]) -> RawResource:
        return await self._request("POST", "/games", body=body)

    async def create_game_mode(self, body: dict[str, Any]) -> RawResource:
        return await self._request("POST", "/modes", body=body)

    async def create_tournament(self, body: dict[str, Any]) -> RawResource:
        return await self._request("POST", "/tournaments", body=body)

    async def create_registration(self, body: dict[str, Any]) -> RawResource:
        return await self._request("POST", "/registrations", body=body)
