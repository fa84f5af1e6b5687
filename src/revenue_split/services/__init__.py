"""Revenue split services."""

from revenue_split.services.aggregation import LiveTotals, leaderboard, roster_totals
from revenue_split.services.expense_service import (
    EXPENSE_CATEGORIES,
    ExpenseRepository,
    InvalidExpenseError,
)
from revenue_split.services.export import (
    export_expenses_csv,
    export_filename,
    export_period_csv,
)
from revenue_split.services.feed import LedgerFeed
from revenue_split.services.ledger_service import PayoutLedger
from revenue_split.services.roster_service import EmployeeRepository

__all__ = [
    "LiveTotals",
    "leaderboard",
    "roster_totals",
    "EXPENSE_CATEGORIES",
    "ExpenseRepository",
    "InvalidExpenseError",
    "export_expenses_csv",
    "export_filename",
    "export_period_csv",
    "LedgerFeed",
    "PayoutLedger",
    "EmployeeRepository",
]
