"""Login and logout.

There are no accounts: logging in just records a display name in the signed
session cookie. Logging out drops the player's dice table and clears the session.
"""

from __future__ import annotations

from fastapi import APIRouter, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.requests import Request

from dicetray.dependencies import TABLE_TOKEN_KEY
from dicetray.identity import LOGGED_IN_KEY, USERNAME_KEY
from dicetray.rendering import templates
from dicetray.table import registry

router = APIRouter()


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request) -> HTMLResponse:
    """Show the login form."""
    return templates.TemplateResponse(request, "login.html", {})


@router.post("/login")
async def login(request: Request, username: str = Form("")) -> RedirectResponse:
    """Remember the display name and send the player to their table."""
    request.session[USERNAME_KEY] = username.strip()
    request.session[LOGGED_IN_KEY] = True
    return RedirectResponse(url="/", status_code=303)


@router.post("/logout")
async def logout(request: Request) -> RedirectResponse:
    """Close the dice table, clear the session and redirect to /login."""
    token = request.session.get(TABLE_TOKEN_KEY)
    if token:
        registry.close(token)
    request.session.clear()
    return RedirectResponse(url="/login", status_code=303)
