"""Aggregation views over payout lines.

All views are pure reductions over a record set: per-employee revenue and
take-home totals, the revenue leaderboard, all-time revenue and the
company's retained take-home. `LiveTotals` keeps them current from the
ledger feed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from revenue_split.services.feed import LedgerFeed
from revenue_split.splitting.calendar import BiWeekCalendar, BiWeekPeriod
from revenue_split.splitting.types import EmployeeRecord, Team

logger = logging.getLogger(__name__)

LEADERBOARD_TARGET = Decimal("10000")
ZERO = Decimal("0")


@dataclass
class EmployeeTotals:
    """Revenue and take-home summed for one employee."""

    employee_id: str
    name: str
    job_title: str
    revenue: Decimal = ZERO
    take_home: Decimal = ZERO


@dataclass
class LeaderboardRow:
    """One ranked leaderboard entry."""

    rank: int
    employee_id: str
    name: str
    job_title: str
    total_revenue: Decimal
    total_take_home: Decimal
    target: Decimal

    @property
    def progress(self) -> Decimal:
        """Share of the target reached, clamped to [0, 1]."""
        if self.target <= 0:
            return ZERO
        return max(ZERO, min(Decimal("1"), self.total_revenue / self.target))

    @property
    def over_target(self) -> bool:
        return self.total_revenue > self.target


def field_value(line: Any, name: str) -> Any:
    if isinstance(line, Mapping):
        return line.get(name)
    return getattr(line, name, None)


def stored_amount(value: Any) -> Decimal:
    """Coerce a stored amount; missing or malformed amounts count as zero."""
    if value is None or value == "":
        return ZERO
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    return number if number.is_finite() else ZERO


def filter_period(
    lines: Iterable[Any],
    calendar: BiWeekCalendar,
    period: BiWeekPeriod | None,
) -> list[Any]:
    """Lines in `period`, or every line when `period` is None."""
    if period is None:
        return list(lines)
    return [line for line in lines if calendar.contains(line, period)]


def employee_totals(lines: Iterable[Any]) -> dict[str, EmployeeTotals]:
    """Sum revenue and take-home per employee id."""
    totals: dict[str, EmployeeTotals] = {}
    for line in lines:
        employee_id = field_value(line, "employee_id")
        if not employee_id:
            continue
        entry = totals.get(employee_id)
        if entry is None:
            entry = EmployeeTotals(
                employee_id=employee_id,
                name=field_value(line, "name") or "",
                job_title=field_value(line, "job_title") or "",
            )
            totals[employee_id] = entry
        entry.revenue += stored_amount(field_value(line, "revenue"))
        entry.take_home += stored_amount(field_value(line, "take_home"))
    return totals


def roster_totals(
    employees: Iterable[EmployeeRecord],
    lines: Iterable[Any],
    team: Team | str | None = None,
) -> list[EmployeeTotals]:
    """Totals for every roster employee (zero when they have no lines).

    Optionally restricted to one team, in directory order.
    """
    by_id = employee_totals(lines)
    team_label = team.value if isinstance(team, Team) else team
    rows: list[EmployeeTotals] = []
    for employee in employees:
        if team_label and employee.team != team_label:
            continue
        found = by_id.get(employee.id)
        rows.append(
            EmployeeTotals(
                employee_id=employee.id,
                name=employee.name,
                job_title=employee.job_title,
                revenue=found.revenue if found else ZERO,
                take_home=found.take_home if found else ZERO,
            )
        )
    return rows


def leaderboard(
    employees: Iterable[EmployeeRecord],
    lines: Iterable[Any],
    target: Decimal = LEADERBOARD_TARGET,
) -> list[LeaderboardRow]:
    """Rank every employee by revenue, highest first.

    Ranking uses revenue only; ties keep directory order.
    """
    rows = roster_totals(employees, lines)
    rows.sort(key=lambda r: r.revenue, reverse=True)
    return [
        LeaderboardRow(
            rank=i + 1,
            employee_id=r.employee_id,
            name=r.name,
            job_title=r.job_title,
            total_revenue=r.revenue,
            total_take_home=r.take_home,
            target=target,
        )
        for i, r in enumerate(rows)
    ]


def all_time_revenue(lines: Iterable[Any]) -> Decimal:
    return sum((stored_amount(field_value(line, "revenue")) for line in lines), ZERO)


def company_revenue(lines: Iterable[Any]) -> Decimal:
    """Take-home recorded on lines whose snapshotted title names the company."""
    return sum(
        (
            stored_amount(field_value(line, "take_home"))
            for line in lines
            if "company" in str(field_value(line, "job_title") or "").lower()
        ),
        ZERO,
    )


class LiveTotals:
    """Totals recomputed from every ledger feed snapshot.

    The roster is fixed at construction; later roster edits are not seen.
    """

    def __init__(
        self,
        employees: Sequence[EmployeeRecord],
        calendar: BiWeekCalendar,
        period: BiWeekPeriod | None = None,
    ):
        self.employees = list(employees)
        self.calendar = calendar
        self.period = period
        self.lines: list[Any] = []
        self.totals: list[EmployeeTotals] = roster_totals(self.employees, [])
        self.all_time_revenue = ZERO
        self.updates = 0

    def attach(self, feed: LedgerFeed) -> Callable[[], None]:
        return feed.subscribe(self.on_snapshot)

    def on_snapshot(self, records: Sequence[Any]) -> None:
        self.lines = list(records)
        self.all_time_revenue = all_time_revenue(self.lines)
        self.totals = roster_totals(
            self.employees, filter_period(self.lines, self.calendar, self.period)
        )
        self.updates += 1
        logger.debug("Live totals recomputed from %d lines", len(self.lines))

    def view(self, period: BiWeekPeriod | None) -> None:
        """Switch the viewed period and recompute from the last snapshot."""
        self.period = period
        self.totals = roster_totals(
            self.employees, filter_period(self.lines, self.calendar, period)
        )

    def for_employee(self, employee_id: str) -> EmployeeTotals | None:
        return next((t for t in self.totals if t.employee_id == employee_id), None)
