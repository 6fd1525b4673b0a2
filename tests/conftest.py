"""Shared fixtures and in-memory doubles for the arena-client test suite."""

from __future__ import annotations

import asyncio
import copy
from typing import Any

import pytest

from core.domain.links import Link, RawResource
from core.domain.models import AuthProvider, AuthUser, UserClaims
from core.domain.pages import PageInfo, RawPage
from core.errors import NotFoundError


# ---------------------------------------------------------------------------
# Raw resource builders
# ---------------------------------------------------------------------------

def hal_links(self_path: str, **relations: str) -> dict[str, dict[str, str]]:
    links = {"self": {"href": self_path}}
    links.update({name: {"href": href} for name, href in relations.items()})
    return links


def raw_tournament(
    tournament_id: int,
    *,
    game: str | None = "/games/5",
    admin: str | None = "/users/9",
    title: str | None = None,
) -> RawResource:
    relations = {k: v for k, v in (("game", game), ("admin", admin)) if v is not None}
    return {
        "id": tournament_id,
        "title": title or f"Cup #{tournament_id}",
        "tournamentDescription": "Single elimination",
        "tournamentMode": "1v1",
        "playersNumber": 16,
        "_links": hal_links(f"/tournaments/{tournament_id}", **relations),
    }


def raw_registration(
    registration_id: int,
    *,
    user: str | None = "/users/3",
    tournament: str | None = "/tournaments/2",
    outcome: str | None = None,
) -> RawResource:
    relations = {k: v for k, v in (("user", user), ("tournament", tournament)) if v is not None}
    return {
        "id": registration_id,
        "outcome": outcome,
        "_links": hal_links(f"/registrations/{registration_id}", **relations),
    }


def raw_game(name: str = "Chess", path: str = "/games/5") -> RawResource:
    return {
        "gameName": name,
        "availableModes": ["1v1", "blitz"],
        "image": f"https://cdn.test/{name.lower()}.png",
        "icon": f"https://cdn.test/{name.lower()}-icon.png",
        "_links": hal_links(path),
    }


def raw_user(user_id: str, nickname: str | None = None) -> RawResource:
    return {
        "id": user_id,
        "nickname": nickname or f"user{user_id}",
        "email": f"user{user_id}@arena.test",
        "image": None,
        "subscriber": False,
        "_links": hal_links(f"/users/{user_id}"),
    }


def scenario_resources() -> dict[str, Any]:
    """Registration 7 → user 3 + tournament 2 → game 5 (admin 9)."""

    return {
        "/registrations/7": raw_registration(7),
        "/tournaments/2": raw_tournament(2),
        "/games/5": raw_game(),
        "/users/3": raw_user("3", "alice"),
        "/users/9": raw_user("9", "bob"),
    }


def raw_page(items: list[RawResource], number: int = 0) -> RawPage:
    return RawPage(
        items=tuple(items),
        page=PageInfo(size=20, total_elements=len(items), total_pages=1, number=number),
    )


# ---------------------------------------------------------------------------
# In-memory datasource
# ---------------------------------------------------------------------------

class FakeArenaDatasource:
    """Path-addressed datasource with per-path latency and failure injection.

    ``resources`` maps a path to a raw resource or to an exception to raise.
    Unknown paths raise ``NotFoundError``.
    """

    def __init__(
        self,
        resources: dict[str, Any] | None = None,
        *,
        delays: dict[str, float] | None = None,
        pages: dict[str, RawPage] | None = None,
        created: dict[str, RawResource] | None = None,
    ) -> None:
        self.resources = dict(resources or {})
        self.delays = dict(delays or {})
        self.pages = dict(pages or {})
        self.created = dict(created or {})
        self.requested: list[str] = []
        self.completed: list[str] = []
        self.cancelled: list[str] = []
        self.posted: list[tuple[str, dict[str, Any]]] = []
        self.listed: list[tuple[str, tuple[Any, ...]]] = []

    async def _get(self, path: str) -> RawResource:
        self.requested.append(path)
        try:
            await asyncio.sleep(self.delays.get(path, 0))
        except asyncio.CancelledError:
            self.cancelled.append(path)
            raise
        value = self.resources.get(path)
        if value is None:
            raise NotFoundError(path)
        if isinstance(value, BaseException):
            raise value
        self.completed.append(path)
        return copy.deepcopy(value)

    async def _listing(self, name: str, *args: Any) -> RawPage:
        self.listed.append((name, args))
        return self.pages.get(name, RawPage())

    async def _post(self, path: str, body: dict[str, Any]) -> RawResource:
        self.posted.append((path, body))
        return copy.deepcopy(self.created[path])

    async def get_tournament_by_id(self, tournament_id: int) -> RawResource:
        return await self._get(f"/tournaments/{tournament_id}")

    async def get_registration_by_id(self, registration_id: int) -> RawResource:
        return await self._get(f"/registrations/{registration_id}")

    async def get_user_by_id(self, user_id: str) -> RawResource:
        return await self._get(f"/users/{user_id}")

    async def get_game_by_name(self, game_name: str) -> RawResource:
        return await self._get(f"/games/{game_name}")

    async def get_game_by_link(self, link: Link) -> RawResource:
        return await self._get(link.href)

    async def get_user_by_link(self, link: Link) -> RawResource:
        return await self._get(link.href)

    async def get_tournament_by_link(self, link: Link) -> RawResource:
        return await self._get(link.href)

    async def get_all_games(self, page: int) -> RawPage:
        return await self._listing("all_games", page)

    async def get_games_by_mode(self, mode: str, page: int) -> RawPage:
        return await self._listing("games_by_mode", mode, page)

    async def get_games_containing_name(self, name: str, page: int) -> RawPage:
        return await self._listing("games_containing_name", name, page)

    async def search_games_by_name(self, name: str, page: int) -> RawPage:
        return await self._listing("search_games", name, page)

    async def get_showcase_tournaments(self, page: int) -> RawPage:
        return await self._listing("showcase", page)

    async def get_tournaments_by_game_name(self, game_name: str, page: int) -> RawPage:
        return await self._listing("tournaments_by_game", game_name, page)

    async def get_tournaments_by_mode(self, mode: str, page: int) -> RawPage:
        return await self._listing("tournaments_by_mode", mode, page)

    async def get_tournaments_by_user(self, user_id: str, page: int) -> RawPage:
        return await self._listing("tournaments_by_user", user_id, page)

    async def get_tournaments_containing_title(self, title: str, page: int) -> RawPage:
        return await self._listing("tournaments_containing_title", title, page)

    async def search_tournaments(self, title: str, page: int, game_id: str | None = None) -> RawPage:
        return await self._listing("search_tournaments", title, page, game_id)

    async def get_registrations_by_tournament(self, tournament_id: int, page: int) -> RawPage:
        return await self._listing("registrations_by_tournament", tournament_id, page)

    async def get_registrations_by_user(self, user_id: str, page: int) -> RawPage:
        return await self._listing("registrations_by_user", user_id, page)

    async def create_game(self, body: dict[str, Any]) -> RawResource:
        return await self._post("/games", body)

    async def create_game_mode(self, body: dict[str, Any]) -> RawResource:
        return await self._post("/modes", body)

    async def create_tournament(self, body: dict[str, Any]) -> RawResource:
        return await self._post("/tournaments", body)

    async def create_registration(self, body: dict[str, Any]) -> RawResource:
        return await self._post("/registrations", body)


# ---------------------------------------------------------------------------
# Identity / storage doubles
# ---------------------------------------------------------------------------

class FakeAuth:
    def __init__(self, current: AuthUser | None = None, *, subscriber: bool = False) -> None:
        self.current = current
        self.claims = UserClaims(is_subscriber=subscriber)
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.profile_image_path: str | None = None

    def _record(self, name: str, *args: Any) -> bool:
        self.calls.append((name, args))
        return True

    async def get_current_auth_user(self) -> AuthUser | None:
        return self.current

    async def get_current_user_claims(self) -> UserClaims:
        return self.claims

    async def create_account_with_email_password(self, email: str, password: str) -> bool:
        return self._record("create_account_with_email_password", email, password)

    async def get_auth_methods_for_email(self, email: str) -> list[AuthProvider]:
        self._record("get_auth_methods_for_email", email)
        return [AuthProvider.PASSWORD, AuthProvider.GOOGLE]

    async def get_current_user_auth_methods(self) -> list[AuthProvider]:
        return [AuthProvider.FACEBOOK]

    async def is_current_user_email_verified(self) -> bool:
        return self.current is not None

    async def link_facebook_auth_provider(self, token: str) -> bool:
        return self._record("link_facebook_auth_provider", token)

    async def link_google_auth_provider(self, token: str) -> bool:
        return self._record("link_google_auth_provider", token)

    async def link_password_auth_provider(self, password: str) -> bool:
        return self._record("link_password_auth_provider", password)

    async def login_with_email_password(self, email: str, password: str) -> bool:
        return self._record("login_with_email_password", email, password)

    async def login_with_facebook_token(self, token: str) -> bool:
        return self._record("login_with_facebook_token", token)

    async def login_with_google_token(self, token: str) -> bool:
        return self._record("login_with_google_token", token)

    async def logout(self) -> bool:
        self.current = None
        return self._record("logout")

    async def reauthenticate_with_facebook(self, token: str) -> bool:
        return self._record("reauthenticate_with_facebook", token)

    async def reauthenticate_with_google(self, token: str) -> bool:
        return self._record("reauthenticate_with_google", token)

    async def update_user_email(self, email: str) -> bool:
        return self._record("update_user_email", email)

    async def update_user_nickname(self, nickname: str) -> bool:
        return self._record("update_user_nickname", nickname)

    async def update_user_password(self, password: str) -> bool:
        return self._record("update_user_password", password)

    async def update_user_profile_image(self, storage_path: str) -> bool:
        self.profile_image_path = storage_path
        return self._record("update_user_profile_image", storage_path)


class FakeStorage:
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}

    async def get_file_url(self, path: str) -> str | None:
        if path not in self.files:
            return None
        return f"https://storage.test/{path}"

    async def upload_file(self, data: bytes, path: str) -> bool:
        self.files[path] = data
        return True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def scenario_ds() -> FakeArenaDatasource:
    return FakeArenaDatasource(scenario_resources())


@pytest.fixture
def signed_in_auth() -> FakeAuth:
    return FakeAuth(AuthUser(id="u-42", email="me@arena.test", nickname="me"), subscriber=True)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()
