from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request

from dicetray.config import settings
from dicetray.dependencies import _AuthRedirect
from dicetray.routers import auth, roller

app = FastAPI(title="Dicetray", debug=settings.debug)

app.add_middleware(SessionMiddleware, secret_key=settings.session_secret_key)

app.include_router(auth.router)
app.include_router(roller.router)


@app.exception_handler(_AuthRedirect)
async def auth_redirect_handler(request: Request, exc: _AuthRedirect) -> RedirectResponse:
    return RedirectResponse(url="/login", status_code=302)
