"""Payout Ledger - append-only store of payout lines.

Provides:
- One independent write (own session, own commit) per payout line
- Store-assigned creation timestamps
- Period-scoped reads with the key/legacy-start membership rule
- A change feed pushing the full record set after every write

Lines are never updated or deleted here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import or_, select

from revenue_split.models import PayoutLine
from revenue_split.services.feed import LedgerFeed
from revenue_split.splitting.calendar import BiWeekCalendar, BiWeekPeriod

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from revenue_split.splitting.types import PayoutLineCandidate

logger = logging.getLogger(__name__)


class PayoutLedger:
    """Append-only payout line store.

    Notes:
    - Each `append` commits on its own; there is no surrounding transaction
      for the lines of one event.
    - Feed subscribers are notified after each successful commit. A feed
      failure never turns a committed write into a failure.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        feed: LedgerFeed | None = None,
        calendar: BiWeekCalendar | None = None,
    ):
        self.session_factory = session_factory
        self.feed = feed or LedgerFeed()
        self.calendar = calendar or BiWeekCalendar()

    async def append(self, candidate: PayoutLineCandidate) -> PayoutLine:
        """Write one payout line and return it with its id and timestamp."""
        async with self.session_factory() as session:
            line = PayoutLine(**candidate.to_record())
            session.add(line)
            await session.commit()
            await session.refresh(line)

        logger.debug(
            "Payout line %s written for employee %s (take-home %s)",
            line.id,
            line.employee_id,
            line.take_home,
        )

        if self.feed.has_subscribers:
            try:
                await self.feed.publish(await self.all_lines())
            except Exception:
                logger.exception("Ledger feed refresh failed after writing %s", line.id)
        return line

    async def all_lines(self) -> list[PayoutLine]:
        """Every payout line, oldest first."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(PayoutLine).order_by(PayoutLine.created_at, PayoutLine.id)
            )
            return list(result.scalars().all())

    async def lines_for_period(self, period: BiWeekPeriod) -> list[PayoutLine]:
        """Payout lines belonging to `period`.

        Rows with a key are filtered in SQL; legacy rows with a NULL or empty key are
        fetched and matched by recomputing their period from `bi_week_start`.
        """
        async with self.session_factory() as session:
            result = await session.execute(
                select(PayoutLine)
                .where(
                    or_(
                        PayoutLine.bi_week_key == period.key,
                        PayoutLine.bi_week_key == "",
                        PayoutLine.bi_week_key.is_(None),
                    )
                )
                .order_by(PayoutLine.created_at, PayoutLine.id)
            )
            rows = result.scalars().all()
        return [row for row in rows if self.calendar.contains(row, period)]

    async def lines_for_employee(
        self, employee_id: str, period: BiWeekPeriod | None = None
    ) -> list[PayoutLine]:
        lines = await self.lines_for_period(period) if period else await self.all_lines()
        return [line for line in lines if line.employee_id == employee_id]

    async def refresh_subscribers(self) -> None:
        """Push the current record set to subscribers (initial load)."""
        await self.feed.publish(await self.all_lines())
