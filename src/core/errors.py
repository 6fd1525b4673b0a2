"""Exception hierarchy for the arena client.

Callers tell a data integrity problem (``MissingLinkError``) apart from a
missing resource (``NotFoundError``) and a network problem
(``TransportError``) by type. The aggregation layer never wraps one into
another.
"""

from __future__ import annotations


class ArenaError(Exception):
    """Base exception for all arena client errors."""


class MissingLinkError(ArenaError):
    """A required relation link is absent from a raw resource."""

    def __init__(self, relation: str, available: list[str] | None = None) -> None:
        self.relation = relation
        self.available = sorted(available or [])
        super().__init__(f"Missing required link '{relation}' (available: {self.available})")


class NotFoundError(ArenaError):
    """The referenced resource does not exist (HTTP 404)."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Resource not found: {url}")


class TransportError(ArenaError):
    """Network or protocol failure while talking to the API."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        detail = f"HTTP {status_code}: {message}" if status_code is not None else message
        super().__init__(f"{detail} ({url})")


class NotLoggedInError(ArenaError):
    """The operation needs a signed-in user and there is none."""

    def __init__(self) -> None:
        super().__init__("User not logged in.")
