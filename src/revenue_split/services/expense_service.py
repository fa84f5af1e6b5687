"""Company expense tracking and the revenue-minus-expenses summary."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select

from revenue_split.models import Expense
from revenue_split.services.aggregation import company_revenue, field_value, stored_amount
from revenue_split.splitting.money import round_to_cents, to_decimal

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Technology",
    "Company Perks",
    "Marketing",
    "Company Travel",
    "Dinner",
    "Camera Equipment",
    "Other",
)
FALLBACK_CATEGORY = "Other"
ZERO = Decimal("0")


class InvalidExpenseError(ValueError):
    """Raised when an expense is rejected before anything is written."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ExpenseRepository:
    """Create, delete and list company expenses."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def add_expense(
        self,
        *,
        category: str,
        amount: Decimal | str | int | float,
        expense_date: date,
        created_by: str,
        vendor: str = "",
        description: str = "",
        created_by_email: str = "",
    ) -> Expense:
        """Validate and store one expense.

        Vendor and description are trimmed. The amount must be a positive
        number and the category one of `EXPENSE_CATEGORIES`.
        """
        if category not in EXPENSE_CATEGORIES:
            raise InvalidExpenseError(f"Unknown expense category '{category}'")
        try:
            value = to_decimal(amount)
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidExpenseError(f"Amount '{amount}' is not a number") from None
        if not value.is_finite() or value <= ZERO:
            raise InvalidExpenseError(f"Amount must be greater than 0, got {amount}")
        value = round_to_cents(value)

        expense = Expense(
            category=category,
            vendor=(vendor or "").strip(),
            description=(description or "").strip(),
            amount=value,
            expense_date=expense_date,
            created_by=created_by,
            created_by_email=created_by_email or "",
        )
        async with self.session_factory() as session:
            session.add(expense)
            await session.commit()
            await session.refresh(expense)
        logger.info(
            "Recorded %s expense %s of %s by %s",
            category,
            expense.id,
            value,
            created_by,
        )
        return expense

    async def delete_expense(self, expense_id: str) -> bool:
        """Remove an expense; False when no such expense exists."""
        async with self.session_factory() as session:
            result = await session.execute(delete(Expense).where(Expense.id == expense_id))
            await session.commit()
        deleted = bool(result.rowcount)
        if deleted:
            logger.info("Deleted expense %s", expense_id)
        return deleted

    async def list_expenses(self, category: str | None = None) -> list[Expense]:
        """Expenses newest first by expense date, then by recording time."""
        query = select(Expense).order_by(
            Expense.expense_date.desc(), Expense.created_at.desc(), Expense.id.desc()
        )
        if category:
            query = query.where(Expense.category == category)
        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())


def category_totals(expenses: Iterable[Any]) -> dict[str, Decimal]:
    """Spend per category, with every known category present.

    Expenses without a category count as "Other".
    """
    totals = {category: ZERO for category in EXPENSE_CATEGORIES}
    for expense in expenses:
        category = field_value(expense, "category") or FALLBACK_CATEGORY
        amount = stored_amount(field_value(expense, "amount"))
        totals[category] = totals.get(category, ZERO) + amount
    return totals


def total_expenses(expenses: Iterable[Any]) -> Decimal:
    return sum((stored_amount(field_value(e, "amount")) for e in expenses), ZERO)


@dataclass
class ExpenseSummary:
    """Company revenue set against recorded expenses."""

    by_category: dict[str, Decimal]
    total_expenses: Decimal
    company_revenue: Decimal

    @property
    def net(self) -> Decimal:
        return self.company_revenue - self.total_expenses


def summarize(expenses: Iterable[Any], lines: Iterable[Any]) -> ExpenseSummary:
    """Per-category spend and net against the company's take-home."""
    expenses = list(expenses)
    return ExpenseSummary(
        by_category=category_totals(expenses),
        total_expenses=total_expenses(expenses),
        company_revenue=company_revenue(lines),
    )
