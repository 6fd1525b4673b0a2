"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- Entities are frozen value objects: a mapper builds them once, from a
  complete join, and nobody mutates them afterwards.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class AuthProvider(str, Enum):
    """Sign-in methods an account can have linked."""

    PASSWORD = "password"
    GOOGLE = "google.com"
    FACEBOOK = "facebook.com"


class Mode(BaseModel):
    """A game mode (e.g. '1v1', 'battle royale')."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Mode name as stored by the API.",
    )


class Game(BaseModel):
    """A game tournaments can be played in. Games are addressed by name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Unique game name.",
    )
    available_modes: tuple[str, ...] = Field(
        default=(),
        description="Mode names the game supports.",
    )
    image: str | None = Field(
        default=None,
        description="Cover image URL.",
    )
    icon: str | None = Field(
        default=None,
        description="Icon URL.",
    )


class User(BaseModel):
    """A platform user, either fetched from the API or built from the auth session."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque user identifier shared by the API and the auth provider.",
    )
    nickname: str | None = Field(
        default=None,
        description="Public nickname.",
    )
    email: str | None = Field(
        default=None,
        description="Email address (only known for the current user or admins).",
    )
    image: str | None = Field(
        default=None,
        description="Profile image URL.",
    )
    is_subscriber: bool = Field(
        default=False,
        description="Whether the user has an active subscription.",
    )


class TournamentSummary(BaseModel):
    """A tournament with its game resolved.

    This is the shape reached through a registration, whose join does not
    include the tournament admin.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Tournament identifier.")
    title: str = Field(..., min_length=1, description="Tournament title.")
    description: str | None = Field(default=None, description="Free text description.")
    mode: str | None = Field(default=None, description="Mode the tournament is played in.")
    players_number: int = Field(
        default=0,
        ge=0,
        description="Maximum number of players.",
    )
    game: Game


class Tournament(TournamentSummary):
    """Fully-hydrated tournament: its game and admin are always resolved."""

    admin: User


class Registration(BaseModel):
    """A user's registration to a tournament, with both sides resolved."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Registration identifier.")
    outcome: str | None = Field(
        default=None,
        description="Final outcome, once the tournament is over.",
    )
    tournament: TournamentSummary
    user: User


class AuthUser(BaseModel):
    """Identity of the signed-in account as reported by the auth provider."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    email: str | None = None
    nickname: str | None = None


class UserClaims(BaseModel):
    """Custom claims attached to the auth token."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    is_subscriber: bool = False


def storage_image_path_for(user_id: str) -> str:
    """Storage path of a user's profile image."""

    return f"users/{user_id}/profile"
