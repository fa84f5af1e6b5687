"""Company expense model."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from revenue_split.models.base import Base, TimestampMixin, new_id


class Expense(Base, TimestampMixin):
    """One company expense, recorded against the whole business.

    Expenses are not split and never touch the payout ledger; they only
    offset company revenue in the expense summary.
    """

    __tablename__ = "expense"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    category: Mapped[str] = mapped_column(String(40), nullable=False)
    vendor: Mapped[str] = mapped_column(String, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(nullable=False)
    expense_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    created_by_email: Mapped[str] = mapped_column(String, nullable=False, default="")

    __table_args__ = (
        CheckConstraint("amount > 0", name="expense_amount_positive"),
        Index("expense_category_idx", "category"),
        Index("expense_date_idx", "expense_date"),
    )
