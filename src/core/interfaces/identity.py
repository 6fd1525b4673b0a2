"""Contracts for the external identity and storage providers.

Neither provider is implemented in this repository: an application wires
its own SDK behind these protocols and injects them into the repository.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import AuthProvider, AuthUser, UserClaims


@runtime_checkable
class AuthDatasource(Protocol):
    """Sign-in, session and account management."""

    async def get_current_auth_user(self) -> AuthUser | None:
        """Return the signed-in account, or ``None`` when signed out."""

        ...

    async def get_current_user_claims(self) -> UserClaims: ...

    async def create_account_with_email_password(self, email: str, password: str) -> bool: ...

    async def get_auth_methods_for_email(self, email: str) -> list[AuthProvider]: ...

    async def get_current_user_auth_methods(self) -> list[AuthProvider]: ...

    async def is_current_user_email_verified(self) -> bool: ...

    async def link_facebook_auth_provider(self, token: str) -> bool: ...

    async def link_google_auth_provider(self, token: str) -> bool: ...

    async def link_password_auth_provider(self, password: str) -> bool: ...

    async def login_with_email_password(self, email: str, password: str) -> bool: ...

    async def login_with_facebook_token(self, token: str) -> bool: ...

    async def login_with_google_token(self, token: str) -> bool: ...

    async def logout(self) -> bool: ...

    async def reauthenticate_with_facebook(self, token: str) -> bool: ...

    async def reauthenticate_with_google(self, token: str) -> bool: ...

    async def update_user_email(self, email: str) -> bool: ...

    async def update_user_nickname(self, nickname: str) -> bool: ...

    async def update_user_password(self, password: str) -> bool: ...

    async def update_user_profile_image(self, storage_path: str) -> bool: ...


@runtime_checkable
class StorageDatasource(Protocol):
    """Binary object storage (profile images)."""

    async def get_file_url(self, path: str) -> str | None:
        """Download URL for ``path``, or ``None`` when nothing is stored there."""

        ...

    async def upload_file(self, data: bytes, path: str) -> bool: ...
