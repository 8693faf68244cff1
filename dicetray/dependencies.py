"""FastAPI dependencies for dicetray."""

from __future__ import annotations

from starlette.requests import Request

from dicetray.identity import LOGGED_IN_KEY, SessionIdentity
from dicetray.table import DiceTable, registry

TABLE_TOKEN_KEY = "table_token"


class _AuthRedirect(Exception):
    """Raised by get_table when no logged-in session exists."""


async def get_table(request: Request) -> DiceTable:
    """Return the dice table bound to this browser session.

    Raises _AuthRedirect (handled in main.py) if the player is not logged in.
    A table is opened lazily the first time a logged-in session asks for one.
    """
    if not request.session.get(LOGGED_IN_KEY):
        raise _AuthRedirect()
    token = request.session.get(TABLE_TOKEN_KEY)
    if not token:
        token = registry.new_token()
        request.session[TABLE_TOKEN_KEY] = token
    return registry.open(token, identity=SessionIdentity(request.session))
