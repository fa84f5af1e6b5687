"""Bi-week accounting calendar.

Time is partitioned into fixed 14-day periods anchored at a Monday epoch.
Period #0 starts on the anchor; period n starts anchor + 14n days. Arithmetic
is done on whole days so calendar irregularities cannot shift boundaries.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any

FIRST_PERIOD_START = date(2025, 7, 28)  # Monday, period #0
PERIOD_DAYS = 14


class InvalidPeriodKeyError(ValueError):
    """Raised when a key does not name the first day of a period."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid period key '{key}': {reason}")


class PeriodOutOfRangeError(ValueError):
    """Raised when a period lies before the anchor or after the current period."""

    def __init__(self, key: str, earliest: str, latest: str):
        self.key = key
        self.earliest = earliest
        self.latest = latest
        super().__init__(
            f"Period '{key}' is outside the navigable range {earliest}..{latest}"
        )


@dataclass(frozen=True)
class BiWeekPeriod:
    """One 14-day accounting period."""

    start_date: date
    end_date: date

    @property
    def key(self) -> str:
        """Canonical identifier: ISO date of the first day."""
        return self.start_date.isoformat()

    @property
    def start(self) -> str:
        """Display label for the first day, e.g. 'Jul 28'."""
        return f"{self.start_date:%b} {self.start_date.day}"

    @property
    def end(self) -> str:
        """Display label for the last day, e.g. 'Aug 10, 2025'."""
        return f"{self.end_date:%b} {self.end_date.day}, {self.end_date.year}"

    @property
    def start_at(self) -> datetime:
        """Start of the first day."""
        return datetime.combine(self.start_date, time.min)

    @property
    def end_at(self) -> datetime:
        """End of the last day."""
        return datetime.combine(self.end_date, time.max)

    def includes(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def stamp(self) -> dict[str, Any]:
        """Period fields copied onto every payout line."""
        return {
            "bi_week_start": self.start_at,
            "bi_week_end": self.end_at,
            "bi_week_key": self.key,
        }


def start_of_day(instant: date | datetime | str) -> date:
    """Reduce an instant to its calendar day.

    Strings are parsed as ISO 8601 (legacy rows stored timestamps as text).
    """
    if isinstance(instant, str):
        instant = datetime.fromisoformat(instant.replace("Z", "+00:00"))
    if isinstance(instant, datetime):
        return instant.date()
    return instant


def period_from_start(start_date: date) -> BiWeekPeriod:
    """Build the period beginning on `start_date`."""
    return BiWeekPeriod(
        start_date=start_date,
        end_date=start_date + timedelta(days=PERIOD_DAYS - 1),
    )


class BiWeekCalendar:
    """Period math and navigation bounded by the anchor and today.

    `today` is injectable so navigation limits can be pinned in tests.
    """

    def __init__(
        self,
        anchor: date = FIRST_PERIOD_START,
        today: Callable[[], date] | None = None,
    ):
        self.anchor = anchor
        self._today = today or date.today

    def period_start_for(self, instant: date | datetime | str) -> date:
        """Return the first day of the period containing `instant`."""
        day = start_of_day(instant)
        periods = (day - self.anchor).days // PERIOD_DAYS
        return self.anchor + timedelta(days=periods * PERIOD_DAYS)

    def period_for(self, instant: date | datetime | str) -> BiWeekPeriod:
        return period_from_start(self.period_start_for(instant))

    def period_index(self, period: BiWeekPeriod) -> int:
        """Number of the period counted from the anchor (anchor period is 0)."""
        return (period.start_date - self.anchor).days // PERIOD_DAYS

    @property
    def first_period(self) -> BiWeekPeriod:
        return period_from_start(self.anchor)

    def current_period(self) -> BiWeekPeriod:
        return self.period_for(self._today())

    def previous(self, period: BiWeekPeriod) -> BiWeekPeriod:
        """Step back one period, never before the anchor period."""
        start = period.start_date - timedelta(days=PERIOD_DAYS)
        if start < self.anchor:
            start = self.anchor
        return period_from_start(start)

    def next(self, period: BiWeekPeriod) -> BiWeekPeriod:
        """Step forward one period, never past the current period."""
        current = self.current_period().start_date
        start = period.start_date + timedelta(days=PERIOD_DAYS)
        if start > current:
            start = current
        return period_from_start(start)

    def has_previous(self, period: BiWeekPeriod) -> bool:
        return period.start_date > self.anchor

    def has_next(self, period: BiWeekPeriod) -> bool:
        return period.start_date < self.current_period().start_date

    def period_for_key(self, key: str, *, navigable: bool = True) -> BiWeekPeriod:
        """Parse a period key.

        Raises:
            InvalidPeriodKeyError: If the key is not an ISO date or is not
                the first day of a period
            PeriodOutOfRangeError: If `navigable` and the period lies before
                the anchor or after the current period
        """
        try:
            start = date.fromisoformat(key)
        except ValueError:
            raise InvalidPeriodKeyError(key, "expected an ISO date (YYYY-MM-DD)")

        if self.period_start_for(start) != start:
            raise InvalidPeriodKeyError(key, "not the first day of a bi-week period")

        if navigable:
            current = self.current_period()
            if start < self.anchor or start > current.start_date:
                raise PeriodOutOfRangeError(key, self.anchor.isoformat(), current.key)

        return period_from_start(start)

    def contains(self, line: Any, period: BiWeekPeriod) -> bool:
        """Check whether a payout line belongs to `period`.

        Lines carrying a period key are matched on the key. Older lines that
        only stored the period start are matched by recomputing the period
        from that start. Lines with neither belong to no period.
        """
        key = _field(line, "bi_week_key")
        if key:
            return key == period.key

        stored_start = _field(line, "bi_week_start")
        if not stored_start:
            return False
        try:
            inferred = self.period_start_for(stored_start)
        except ValueError:
            return False
        return inferred.isoformat() == period.key


def _field(line: Any, name: str) -> Any:
    if isinstance(line, Mapping):
        return line.get(name)
    return getattr(line, name, None)
