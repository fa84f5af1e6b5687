"""CSV export of payout lines and company expenses."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from revenue_split.splitting.calendar import BiWeekPeriod

# (CSV column, record attribute)
LEGACY_COLUMNS: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("employeeId", "employee_id"),
    ("jobTitle", "job_title"),
    ("team", "team"),
    ("forTeam", "for_team"),
    ("description", "description"),
    ("amount", "amount"),
    ("revenue", "revenue"),
    ("takeHome", "take_home"),
    ("biWeekStart", "bi_week_start"),
    ("biWeekEnd", "bi_week_end"),
)
COLUMNS: tuple[tuple[str, str], ...] = LEGACY_COLUMNS + (("biWeekKey", "bi_week_key"),)

EXPENSE_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("category", "category"),
    ("date", "expense_date"),
    ("vendor", "vendor"),
    ("description", "description"),
    ("amount", "amount"),
    ("createdByEmail", "created_by_email"),
)

NUMERIC_FIELDS = {"amount", "revenue", "take_home"}


def export_filename(period: BiWeekPeriod) -> str:
    """File name carrying the period's first and last day."""
    return (
        f"cfo_all_teams_{period.start_date.isoformat()}"
        f"_to_{period.end_date.isoformat()}.csv"
    )


def _raw(line: Any, attr: str) -> Any:
    if isinstance(line, Mapping):
        return line.get(attr)
    return getattr(line, attr, None)


def format_cell(attr: str, value: Any) -> str:
    """Render one value: numbers at 2 dp, timestamps ISO, newlines flattened."""
    if value is None:
        return ""
    if attr in NUMERIC_FIELDS and isinstance(value, (Decimal, int, float)):
        number = value if isinstance(value, Decimal) else Decimal(str(value))
        return str(number.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def _render(rows: Iterable[Any], columns: tuple[tuple[str, str], ...]) -> str:
    output = io.StringIO()
    output.write(",".join(header for header, _ in columns) + "\n")

    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow([format_cell(attr, _raw(row, attr)) for _, attr in columns])

    # No trailing newline after the last row
    return output.getvalue().removesuffix("\n")


def export_period_csv(lines: Iterable[Any], *, legacy: bool = False) -> str:
    """Render payout lines as CSV.

    The header row is plain; every data value is quoted with embedded quotes
    doubled. `legacy` drops the trailing biWeekKey column.
    """
    return _render(lines, LEGACY_COLUMNS if legacy else COLUMNS)


def expenses_filename(day: date) -> str:
    return f"expenses_all_{day.isoformat()}.csv"


def export_expenses_csv(expenses: Iterable[Any]) -> str:
    """Render expenses as CSV in the same quoting style as payout exports."""
    return _render(expenses, EXPENSE_COLUMNS)
