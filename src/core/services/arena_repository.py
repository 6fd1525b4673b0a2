"""Arena repository: the single entry point for callers.

This module consolidates every data-access operation the application needs.
Composite entities go through the ``Aggregator``; identity and profile
operations delegate to the injected auth/storage providers. Every
collaborator is passed in, so tests and alternative entry points (CLI, batch
jobs) wire their own.
"""

from __future__ import annotations

import logging

from core.domain.models import (
    AuthProvider,
    Game,
    Mode,
    Registration,
    Tournament,
    TournamentSummary,
    User,
    storage_image_path_for,
)
from core.errors import NotLoggedInError
from core.interfaces.datasource import ArenaDatasource
from core.interfaces.identity import AuthDatasource, StorageDatasource
from core.mappers import Mappers, game_link, resource_id, tournament_link, user_link
from core.services.aggregator import Aggregator
from core.services.concurrency import gather_or_cancel

logger = logging.getLogger(__name__)


class ArenaRepository:
    def __init__(
        self,
        datasource: ArenaDatasource,
        auth: AuthDatasource,
        storage: StorageDatasource,
        mappers: Mappers | None = None,
    ) -> None:
        self._ds = datasource
        self._auth = auth
        self._storage = storage
        self._mappers = mappers or Mappers()
        self._aggregator = Aggregator(datasource, self._mappers)

    # ------------------------------------------------------------------
    # Identity / profile
    # ------------------------------------------------------------------

    async def create_account_with_email_and_password(self, email: str, password: str) -> bool:
        return await self._auth.create_account_with_email_password(email, password)

    async def get_auth_methods_for_email(self, email: str) -> list[AuthProvider]:
        return await self._auth.get_auth_methods_for_email(email)

    async def get_current_user_auth_methods(self) -> list[AuthProvider]:
        return await self._auth.get_current_user_auth_methods()

    async def is_current_user_email_verified(self) -> bool:
        return await self._auth.is_current_user_email_verified()

    async def is_current_user_subscriber(self) -> bool:
        claims = await self._auth.get_current_user_claims()
        return claims.is_subscriber

    async def link_facebook_provider(self, token: str) -> bool:
        return await self._auth.link_facebook_auth_provider(token)

    async def link_google_provider(self, token: str) -> bool:
        return await self._auth.link_google_auth_provider(token)

    async def link_password_provider(self, password: str) -> bool:
        return await self._auth.link_password_auth_provider(password)

    async def login_with_email_and_password(self, email: str, password: str) -> bool:
        return await self._auth.login_with_email_password(email, password)

    async def login_with_facebook_token(self, token: str) -> bool:
        return await self._auth.login_with_facebook_token(token)

    async def login_with_google_token(self, token: str) -> bool:
        return await self._auth.login_with_google_token(token)

    async def logout(self) -> bool:
        return await self._auth.logout()

    async def reauthenticate_with_facebook_token(self, token: str) -> bool:
        return await self._auth.reauthenticate_with_facebook(token)

    async def reauthenticate_with_google_token(self, token: str) -> bool:
        return await self._auth.reauthenticate_with_google(token)

    async def update_current_user_email(self, email: str) -> bool:
        return await self._auth.update_user_email(email)

    async def update_current_user_nickname(self, nickname: str) -> bool:
        return await self._auth.update_user_nickname(nickname)

    async def update_current_user_password(self, password: str) -> bool:
        return await self._auth.update_user_password(password)

    async def get_current_user(self) -> User | None:
        """The signed-in user with profile image and subscription resolved, or ``None``."""

        auth_user = await self._auth.get_current_auth_user()
        if auth_user is None:
            return None

        image_url, claims = await gather_or_cancel(
            self._storage.get_file_url(storage_image_path_for(auth_user.id)),
            self._auth.get_current_user_claims(),
        )
        return User(
            id=auth_user.id,
            email=auth_user.email,
            nickname=auth_user.nickname,
            image=image_url,
            is_subscriber=claims.is_subscriber,
        )

    async def update_current_user_profile_image(self, image: bytes) -> bool:
        """Upload ``image`` to the current user's storage path and point the profile at it."""

        current = await self._current_user_or_error()
        storage_path = storage_image_path_for(current.id)
        await self._storage.upload_file(image, storage_path)
        logger.info("Uploaded profile image for user %s", current.id)
        return await self._auth.update_user_profile_image(storage_path)

    async def _current_user_or_error(self) -> User:
        current = await self.get_current_user()
        if current is None:
            raise NotLoggedInError()
        return current

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------

    async def create_game(
        self,
        game_name: str,
        available_modes: list[str],
        image: str,
        icon: str,
    ) -> Game:
        raw = await self._ds.create_game(
            {
                "availableModes": list(available_modes),
                "gameName": game_name,
                "icon": icon,
                "image": image,
            }
        )
        return self._mappers.game.from_remote(raw)

    async def create_game_mode(self, mode_name: str) -> Mode:
        raw = await self._ds.create_game_mode({"modeName": mode_name})
        return self._mappers.mode.from_remote(raw)

    async def get_all_games(self, page: int) -> list[Game]:
        return self._mappers.game.from_remote_page(await self._ds.get_all_games(page))

    async def get_game_by_name(self, game_name: str) -> Game:
        return self._mappers.game.from_remote(await self._ds.get_game_by_name(game_name))

    async def get_games_by_mode(self, mode: str, page: int) -> list[Game]:
        return self._mappers.game.from_remote_page(await self._ds.get_games_by_mode(mode, page))

    async def get_games_containing_name(self, name: str, page: int) -> list[Game]:
        raw_page = await self._ds.get_games_containing_name(name, page)
        return self._mappers.game.from_remote_page(raw_page)

    async def search_games_by_name(self, game_name: str, page: int) -> list[Game]:
        raw_page = await self._ds.search_games_by_name(game_name, page)
        return self._mappers.game.from_remote_page(raw_page)

    # ------------------------------------------------------------------
    # Tournaments
    # ------------------------------------------------------------------

    async def create_tournament(
        self,
        players_number: int,
        title: str,
        description: str,
        mode: str,
        admin: User,
        game: Game,
    ) -> Tournament:
        raw = await self._ds.create_tournament(
            {
                "playersNumber": players_number,
                "title": title,
                "tournamentDescription": description,
                "tournamentMode": mode,
                "admin": user_link(admin).path,
                "game": game_link(game).path,
            }
        )
        return await self.get_tournament_by_id(int(resource_id(raw)))

    async def get_tournament_by_id(self, tournament_id: int) -> Tournament:
        return await self._aggregator.get_tournament(tournament_id)

    async def get_showcase_tournaments(self, page: int) -> list[Tournament]:
        return await self._aggregator.tournaments_page(await self._ds.get_showcase_tournaments(page))

    async def get_tournaments_by_game(self, game_name: str, page: int) -> list[Tournament]:
        raw_page = await self._ds.get_tournaments_by_game_name(game_name, page)
        return await self._aggregator.tournaments_page(raw_page)

    async def get_tournaments_by_mode(self, mode: str, page: int) -> list[Tournament]:
        return await self._aggregator.tournaments_page(await self._ds.get_tournaments_by_mode(mode, page))

    async def get_tournaments_by_user(self, user_id: str, page: int) -> list[Tournament]:
        return await self._aggregator.tournaments_page(await self._ds.get_tournaments_by_user(user_id, page))

    async def get_tournaments_containing_title(self, title: str, page: int) -> list[Tournament]:
        raw_page = await self._ds.get_tournaments_containing_title(title, page)
        return await self._aggregator.tournaments_page(raw_page)

    async def search_tournaments(
        self, title: str, page: int, game_id: str | None = None
    ) -> list[Tournament]:
        raw_page = await self._ds.search_tournaments(title, page, game_id)
        return await self._aggregator.tournaments_page(raw_page)

    # ------------------------------------------------------------------
    # Registrations
    # ------------------------------------------------------------------

    async def create_registration(
        self,
        user: User,
        tournament: TournamentSummary,
        outcome: str | None = None,
    ) -> Registration:
        body: dict[str, object] = {
            "user": user_link(user).path,
            "tournament": tournament_link(tournament).path,
        }
        if outcome is not None:
            body["outcome"] = outcome
        raw = await self._ds.create_registration(body)
        return await self.get_registration_by_id(int(resource_id(raw)))

    async def get_registration_by_id(self, registration_id: int) -> Registration:
        return await self._aggregator.get_registration(registration_id)

    async def get_registrations_by_tournament(self, tournament_id: int, page: int) -> list[Registration]:
        raw_page = await self._ds.get_registrations_by_tournament(tournament_id, page)
        return await self._aggregator.registrations_page(raw_page)

    async def get_registrations_by_user(self, user_id: str, page: int) -> list[Registration]:
        raw_page = await self._ds.get_registrations_by_user(user_id, page)
        return await self._aggregator.registrations_page(raw_page)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user_by_id(self, user_id: str) -> User:
        return self._mappers.user.from_remote(await self._ds.get_user_by_id(user_id))
