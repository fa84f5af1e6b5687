"""Pytest fixtures for revenue split tests."""

from __future__ import annotations

from datetime import date
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from revenue_split.database import create_schema, make_session_factory
from revenue_split.services.feed import LedgerFeed
from revenue_split.services.ledger_service import PayoutLedger
from revenue_split.services.roster_service import EmployeeRepository
from revenue_split.splitting.calendar import BiWeekCalendar, BiWeekPeriod
from revenue_split.splitting.roster import RosterDirectory
from revenue_split.splitting.types import EmployeeRecord

# In-memory SQLite shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

# Today as seen by the calendar: inside period #3 (2025-09-08 .. 2025-09-21)
TODAY = date(2025, 9, 10)


def make_roster() -> list[EmployeeRecord]:
    """Fully staffed roster in directory order."""
    return [
        EmployeeRecord("ceo", "Meech", "CEO", "C-suite"),
        EmployeeRecord("coo", "Nya", "COO", "C-suite"),
        EmployeeRecord("cfo", "Avery", "CFO", "C-suite"),
        EmployeeRecord("company", "Company", "Company", "C-suite"),
        EmployeeRecord("lead", "Bri", "Sales Lead", "Sales Team"),
        EmployeeRecord("mgr", "Sam", "Sales Manager", "Sales Team"),
        EmployeeRecord("coord", "Caylin", "Sales Coordinator", "Sales Team"),
        EmployeeRecord("streamer", "Chris", "Streamer", "Streamer Team"),
        EmployeeRecord(
            "stream_lead", "Jesy", "Streaming Growth & Partnerships Lead", "Streamer Team"
        ),
        EmployeeRecord(
            "video_lead", "Val", "Video Content Distribution Lead", "Streamer Team"
        ),
        EmployeeRecord("content_lead", "Olu", "VP of Content Operations", "Content Team"),
        EmployeeRecord("content", "Tosh", "Content Manager", "Content Team"),
    ]


@pytest.fixture
def employees() -> list[EmployeeRecord]:
    return make_roster()


@pytest.fixture
def roster(employees) -> RosterDirectory:
    return RosterDirectory(employees)


@pytest.fixture
def calendar() -> BiWeekCalendar:
    """Calendar with today pinned to TODAY."""
    return BiWeekCalendar(today=lambda: TODAY)


@pytest.fixture
def period(calendar) -> BiWeekPeriod:
    return calendar.current_period()


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with the schema in place."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return make_session_factory(engine)


@pytest.fixture
def feed() -> LedgerFeed:
    return LedgerFeed()


@pytest.fixture
def ledger(session_factory, feed, calendar) -> PayoutLedger:
    return PayoutLedger(session_factory, feed=feed, calendar=calendar)


@pytest_asyncio.fixture
async def repository(session_factory, employees) -> EmployeeRepository:
    """Employee repository seeded with the test roster."""
    repository = EmployeeRepository(session_factory)
    await repository.add_employees(employees)
    return repository
