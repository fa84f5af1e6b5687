"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from revenue_split.config import get_settings
from revenue_split.database import init_db
from revenue_split.services.expense_service import ExpenseRepository
from revenue_split.services.feed import LedgerFeed
from revenue_split.services.ledger_service import PayoutLedger
from revenue_split.services.roster_service import EmployeeRepository
from revenue_split.splitting.calendar import BiWeekCalendar


async def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory dependency."""
    _, factory = init_db()
    return factory


async def get_db_session(
    factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()


@lru_cache(maxsize=1)
def get_feed() -> LedgerFeed:
    """Process-wide ledger change feed."""
    return LedgerFeed()


def get_calendar() -> BiWeekCalendar:
    """Bi-week calendar anchored at the configured first period."""
    return BiWeekCalendar(anchor=get_settings().first_period_start)


SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
Calendar = Annotated[BiWeekCalendar, Depends(get_calendar)]


def get_ledger(
    factory: SessionFactory,
    feed: Annotated[LedgerFeed, Depends(get_feed)],
    calendar: Calendar,
) -> PayoutLedger:
    return PayoutLedger(factory, feed=feed, calendar=calendar)


def get_roster_repository(factory: SessionFactory) -> EmployeeRepository:
    return EmployeeRepository(factory)


def get_expense_repository(factory: SessionFactory) -> ExpenseRepository:
    return ExpenseRepository(factory)


async def get_principal(
    x_authenticated_user: Annotated[str | None, Header()] = None
) -> str:
    """Principal forwarded by the upstream identity provider."""
    if not x_authenticated_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Authenticated-User header is required",
        )
    return x_authenticated_user


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Ledger = Annotated[PayoutLedger, Depends(get_ledger)]
Roster = Annotated[EmployeeRepository, Depends(get_roster_repository)]
Expenses = Annotated[ExpenseRepository, Depends(get_expense_repository)]
Principal = Annotated[str, Depends(get_principal)]
