"""ORM models."""

from revenue_split.models.base import Base, TimestampMixin
from revenue_split.models.employee import Employee
from revenue_split.models.expense import Expense
from revenue_split.models.payout import PayoutLine

__all__ = [
    "Base",
    "TimestampMixin",
    "Employee",
    "Expense",
    "PayoutLine",
]
