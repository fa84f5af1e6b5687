"""Property-based tests for splitting and calendar invariants.

These use hypothesis to generate amounts, submitters, target teams and dates,
and check that the invariants hold for every combination.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import given, settings, strategies as st

from revenue_split.splitting.calendar import PERIOD_DAYS, BiWeekCalendar
from revenue_split.splitting.engine import SplitEngine
from revenue_split.splitting.roster import RosterDirectory
from revenue_split.splitting.types import EmployeeRecord, RevenueEvent, Team

HALF_CENT = Decimal("0.005")

ROSTER = RosterDirectory(
    [
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
        EmployeeRecord("adv", "Ray", "Advisor", "C-suite"),
    ]
)
CALENDAR = BiWeekCalendar(today=lambda: date(2025, 9, 10))
PERIOD = CALENDAR.current_period()

amounts = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("1000000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
submitters = st.sampled_from([e.id for e in ROSTER.employees])
teams = st.sampled_from(list(Team))


def planned(submitter: str, team: Team, amount: Decimal):
    event = RevenueEvent(submitter=submitter, for_team=team.value, amount=amount)
    return SplitEngine().plan(event, ROSTER, PERIOD)


class TestSplitInvariants:
    """Invariants of one revenue event's payout lines."""

    @given(submitter=submitters, team=teams, amount=amounts)
    @settings(max_examples=200)
    def test_fully_staffed_split_covers_amount(self, submitter, team, amount):
        """With every role filled the lines add up to the amount.

        Every rounding step (each line and each derived pool) may shift the
        total by at most half a cent.
        """
        result = planned(submitter, team, amount)
        assert result.complete

        rounding_steps = len(result.planned) + 2
        drift = abs(result.total_take_home - amount)
        assert drift <= rounding_steps * HALF_CENT

    @given(submitter=submitters, team=teams, amount=amounts)
    @settings(max_examples=100)
    def test_take_home_never_negative(self, submitter, team, amount):
        result = planned(submitter, team, amount)
        assert all(line.take_home >= 0 for line in result.planned)

    @given(submitter=submitters, team=teams, amount=amounts)
    @settings(max_examples=100)
    def test_only_submitter_line_carries_revenue(self, submitter, team, amount):
        """Revenue is counted once per event, on the submitter's line."""
        result = planned(submitter, team, amount)

        first, *rest = result.planned
        assert first.employee.id == submitter
        assert first.revenue == amount
        assert sum(line.revenue for line in result.planned) == amount
        assert all(line.revenue == 0 for line in rest)

    @given(submitter=submitters, team=teams, amount=amounts)
    @settings(max_examples=100)
    def test_lines_are_cents(self, submitter, team, amount):
        result = planned(submitter, team, amount)
        for line in result.planned:
            assert line.take_home == line.take_home.quantize(Decimal("0.01"))

    @given(amount=amounts)
    @settings(max_examples=50)
    def test_executive_tiers_cover_pool(self, amount):
        lines = SplitEngine().distribute_executives(
            amount, "note", ROSTER.resolve_roles(), Team.C_SUITE
        )
        assert len(lines) == 4
        assert abs(sum(line.take_home for line in lines) - amount) <= 4 * HALF_CENT


class TestCalendarInvariants:
    """Periods partition the timeline."""

    @given(day=st.dates(min_value=date(2020, 1, 1), max_value=date(2035, 12, 31)))
    @settings(max_examples=200)
    def test_every_day_in_exactly_one_aligned_period(self, day):
        period = CALENDAR.period_for(day)

        assert period.includes(day)
        assert (period.start_date - CALENDAR.anchor).days % PERIOD_DAYS == 0
        assert (period.end_date - period.start_date).days == PERIOD_DAYS - 1
        assert not CALENDAR.period_for(period.start_date - timedelta(days=1)).includes(day)

    @given(day=st.dates(min_value=date(2020, 1, 1), max_value=date(2035, 12, 31)))
    @settings(max_examples=100)
    def test_period_key_round_trips(self, day):
        period = CALENDAR.period_for(day)
        assert CALENDAR.period_for_key(period.key, navigable=False) == period
