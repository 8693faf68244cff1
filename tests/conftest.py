"""Shared test fixtures for the dicetray test suite.

Core tests (dice, engine, history, roll lines, table) need no fixtures beyond
the deterministic helpers here: ScriptedRandom replays a fixed sequence of die
faces and fixed_clock always reports the same instant.

client  (function scope)
    AsyncClient wired to the FastAPI app. The table registry is cleared after
    each test so no dice table leaks between tests.

logged_in_client  (function scope)
    The same client after a POST /login as "Alice".
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dicetray.main import app
from dicetray.table import registry

FIXED_NOW = datetime(2024, 5, 4, 14, 3, 9)


class ScriptedRandom:
    """Random source that returns pre-chosen faces in order."""

    def __init__(self, faces: Iterable[int]) -> None:
        self._faces = list(faces)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        face = self._faces.pop(0)
        assert a <= face <= b, f"scripted face {face} outside [{a}, {b}]"
        return face


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    registry.clear()


@pytest_asyncio.fixture
async def logged_in_client(client):
    resp = await client.post("/login", data={"username": "Alice"})
    assert resp.status_code == 303
    return client
