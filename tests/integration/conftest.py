"""API test fixtures: the app wired to an in-memory database."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from revenue_split.api.app import create_app
from revenue_split.api.dependencies import get_calendar, get_feed, get_session_factory

AUTH_HEADERS = {"X-Authenticated-User": "cfo@example.com"}


@pytest_asyncio.fixture
async def app(session_factory, calendar, feed, repository) -> FastAPI:
    """Application with the test database, calendar and feed injected."""
    app = create_app()
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_calendar] = lambda: calendar
    app.dependency_overrides[get_feed] = lambda: feed
    return app


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def submit(client):
    """Post a revenue event and return the response."""

    async def _submit(submitter, for_team, amount, **extra):
        return await client.post(
            "/api/v1/revenue-events",
            headers=AUTH_HEADERS,
            json={"submitter": submitter, "for_team": for_team, "amount": amount, **extra},
        )

    return _submit
