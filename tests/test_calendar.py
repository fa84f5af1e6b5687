"""Tests for the bi-week calendar."""

from datetime import date, datetime, time

import pytest

from revenue_split.splitting.calendar import (
    FIRST_PERIOD_START,
    BiWeekCalendar,
    InvalidPeriodKeyError,
    PeriodOutOfRangeError,
    period_from_start,
)


class TestPeriodMath:
    """Test period boundaries."""

    def test_anchor_is_first_period(self, calendar):
        assert calendar.period_start_for(FIRST_PERIOD_START) == FIRST_PERIOD_START
        assert calendar.first_period.key == "2025-07-28"

    def test_last_day_belongs_to_period(self, calendar):
        """Day 13 of a period is still inside it; day 14 starts the next."""
        assert calendar.period_start_for(date(2025, 8, 10)) == date(2025, 7, 28)
        assert calendar.period_start_for(date(2025, 8, 11)) == date(2025, 8, 11)

    def test_time_of_day_is_ignored(self, calendar):
        late = datetime(2025, 8, 10, 23, 59, 59)
        assert calendar.period_start_for(late) == date(2025, 7, 28)

    def test_iso_strings_are_parsed(self, calendar):
        assert calendar.period_start_for("2025-08-12T10:00:00Z") == date(2025, 8, 11)
        assert calendar.period_start_for("2025-08-12") == date(2025, 8, 11)

    def test_dates_before_anchor_floor_backwards(self, calendar):
        assert calendar.period_start_for(date(2025, 7, 27)) == date(2025, 7, 14)

    def test_period_spans_fourteen_days(self):
        period = period_from_start(date(2025, 7, 28))
        assert period.end_date == date(2025, 8, 10)
        assert period.includes(date(2025, 8, 10))
        assert not period.includes(date(2025, 8, 11))

    def test_labels(self):
        period = period_from_start(date(2025, 7, 28))
        assert period.start == "Jul 28"
        assert period.end == "Aug 10, 2025"

    def test_stamp_covers_whole_days(self):
        """The stamp runs from start of the first day to end of the last."""
        stamp = period_from_start(date(2025, 9, 8)).stamp()
        assert stamp["bi_week_key"] == "2025-09-08"
        assert stamp["bi_week_start"] == datetime(2025, 9, 8, 0, 0)
        assert stamp["bi_week_end"] == datetime.combine(date(2025, 9, 21), time.max)

    def test_period_index(self, calendar):
        assert calendar.period_index(calendar.first_period) == 0
        assert calendar.period_index(calendar.current_period()) == 3


class TestNavigation:
    """Test navigation bounded by the anchor and today."""

    def test_current_period_contains_today(self, calendar):
        current = calendar.current_period()
        assert current.key == "2025-09-08"
        assert current.includes(date(2025, 9, 10))

    def test_previous_clamps_at_anchor(self, calendar):
        first = calendar.first_period
        assert calendar.previous(first) == first
        assert not calendar.has_previous(first)

    def test_next_clamps_at_current(self, calendar):
        current = calendar.current_period()
        assert calendar.next(current) == current
        assert not calendar.has_next(current)

    def test_step_back_and_forward(self, calendar):
        current = calendar.current_period()
        back = calendar.previous(current)
        assert back.key == "2025-08-25"
        assert calendar.has_next(back)
        assert calendar.next(back) == current

    def test_today_is_injectable(self):
        calendar = BiWeekCalendar(today=lambda: date(2025, 7, 30))
        assert calendar.current_period() == calendar.first_period
        assert not calendar.has_next(calendar.first_period)


class TestPeriodKeys:
    """Test parsing of period keys."""

    def test_valid_key(self, calendar):
        assert calendar.period_for_key("2025-08-11").end_date == date(2025, 8, 24)

    def test_non_date_key_rejected(self, calendar):
        with pytest.raises(InvalidPeriodKeyError) as exc_info:
            calendar.period_for_key("last-week")
        assert exc_info.value.key == "last-week"

    def test_key_must_be_period_start(self, calendar):
        with pytest.raises(InvalidPeriodKeyError):
            calendar.period_for_key("2025-07-29")

    def test_future_period_out_of_range(self, calendar):
        with pytest.raises(PeriodOutOfRangeError) as exc_info:
            calendar.period_for_key("2025-09-22")
        assert exc_info.value.latest == "2025-09-08"

    def test_pre_anchor_period_out_of_range(self, calendar):
        with pytest.raises(PeriodOutOfRangeError):
            calendar.period_for_key("2025-07-14")

    def test_unbounded_lookup(self, calendar):
        """With navigable=False any aligned key is accepted."""
        assert calendar.period_for_key("2025-09-22", navigable=False).key == "2025-09-22"


class TestMembership:
    """Test which period a stored line belongs to."""

    def test_key_wins(self, calendar):
        period = calendar.period_for_key("2025-08-11")
        line = {"bi_week_key": "2025-08-11", "bi_week_start": datetime(2025, 7, 28)}
        assert calendar.contains(line, period)

    def test_legacy_line_matched_by_start(self, calendar):
        period = calendar.period_for_key("2025-08-11")
        assert calendar.contains({"bi_week_start": datetime(2025, 8, 11)}, period)
        assert calendar.contains({"bi_week_start": "2025-08-15T12:00:00"}, period)
        assert not calendar.contains({"bi_week_start": datetime(2025, 7, 28)}, period)

    def test_line_without_period_fields_matches_nothing(self, calendar):
        assert not calendar.contains({"name": "Bri"}, calendar.current_period())

    def test_unparseable_legacy_start(self, calendar):
        assert not calendar.contains({"bi_week_start": "soon"}, calendar.current_period())
