"""Tests for the period CSV export."""

from datetime import datetime
from decimal import Decimal

from revenue_split.services.export import export_filename, export_period_csv
from revenue_split.splitting.calendar import period_from_start

HEADER = (
    "name,employeeId,jobTitle,team,forTeam,description,"
    "amount,revenue,takeHome,biWeekStart,biWeekEnd,biWeekKey"
)


def row(**overrides):
    period = period_from_start(datetime(2025, 9, 8).date())
    values = {
        "name": "Bri",
        "employee_id": "lead",
        "job_title": "Sales Lead",
        "team": "Sales Team",
        "for_team": "Sales Team",
        "description": "Sales split from Bri",
        "amount": Decimal("0"),
        "revenue": Decimal("0"),
        "take_home": Decimal("70"),
        **period.stamp(),
    }
    values.update(overrides)
    return values


class TestExport:
    """Test CSV rendering."""

    def test_header_is_plain(self):
        assert export_period_csv([]) == HEADER

    def test_values_are_quoted(self):
        lines = export_period_csv([row()]).split("\n")

        assert lines[0] == HEADER
        assert lines[1] == (
            '"Bri","lead","Sales Lead","Sales Team","Sales Team","Sales split from Bri",'
            '"0.00","0.00","70.00","2025-09-08T00:00:00","2025-09-21T23:59:59.999999",'
            '"2025-09-08"'
        )

    def test_embedded_quotes_doubled(self):
        text = export_period_csv([row(description='Deal "Alpha"')])
        assert '"Deal ""Alpha"""' in text

    def test_newlines_flattened(self):
        text = export_period_csv([row(description="line one\nline two")])
        assert '"line one line two"' in text
        assert len(text.split("\n")) == 2

    def test_no_trailing_newline(self):
        text = export_period_csv([row(), row(name="Sam")])
        assert not text.endswith("\n")
        assert len(text.split("\n")) == 3

    def test_amounts_rounded_to_cents(self):
        text = export_period_csv([row(take_home=Decimal("49.005"), revenue=1000)])
        assert '"49.01"' in text
        assert '"1000.00"' in text

    def test_missing_values_empty(self):
        text = export_period_csv([row(bi_week_key=None, bi_week_end=None)])
        assert text.split("\n")[1].endswith('"2025-09-08T00:00:00","",""')

    def test_legacy_layout_drops_key(self):
        text = export_period_csv([row()], legacy=True)
        header, data = text.split("\n")
        assert header == HEADER.removesuffix(",biWeekKey")
        assert data.endswith('"2025-09-21T23:59:59.999999"')

    def test_filename(self):
        period = period_from_start(datetime(2025, 7, 28).date())
        assert export_filename(period) == "cfo_all_teams_2025-07-28_to_2025-08-10.csv"
