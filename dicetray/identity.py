"""Identity collaborators: where the table gets its username from."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol

USERNAME_KEY = "username"
LOGGED_IN_KEY = "is_logged_in"


class IdentityProvider(Protocol):
    def get_username(self) -> str | None: ...


class SessionIdentity:
    """Reads the username stored in the signed cookie session at login."""

    def __init__(self, session: MutableMapping[str, Any]) -> None:
        self._session = session

    def get_username(self) -> str | None:
        username = self._session.get(USERNAME_KEY)
        return username or None


class StaticIdentity:
    def __init__(self, username: str | None) -> None:
        self._username = username

    def get_username(self) -> str | None:
        return self._username
