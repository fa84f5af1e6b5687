"""Roster loading from the employee table."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from revenue_split.models import Employee
from revenue_split.splitting.roster import RosterDirectory
from revenue_split.splitting.types import EmployeeRecord

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class EmployeeRepository:
    """One-shot roster queries.

    Snapshots are not live: roster edits made after a snapshot was taken are
    only seen by the next snapshot.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_employees(self, team: str | None = None) -> list[EmployeeRecord]:
        """All employees in directory (insertion) order."""
        query = select(Employee).order_by(Employee.position, Employee.id)
        if team:
            query = query.where(Employee.team == team)
        async with self.session_factory() as session:
            result = await session.execute(query)
            return [row.to_record() for row in result.scalars().all()]

    async def snapshot(self) -> RosterDirectory:
        return RosterDirectory(await self.list_employees())

    async def add_employees(self, records: Iterable[EmployeeRecord]) -> int:
        """Append roster entries after the existing ones, preserving order."""
        count = 0
        async with self.session_factory() as session:
            last = await session.scalar(select(func.max(Employee.position)))
            position = (last or 0) + 1
            for record in records:
                session.add(
                    Employee(
                        id=record.id,
                        name=record.name,
                        job_title=record.job_title,
                        team=record.team,
                        role=record.role.value if record.role else None,
                        position=position + count,
                    )
                )
                count += 1
            await session.commit()
        return count
