"""Tests for company expense tracking."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from revenue_split.services.expense_service import (
    EXPENSE_CATEGORIES,
    ExpenseRepository,
    InvalidExpenseError,
    category_totals,
    summarize,
    total_expenses,
)
from revenue_split.services.export import expenses_filename, export_expenses_csv

DAY = date(2025, 9, 1)


@pytest.fixture
def expenses(session_factory) -> ExpenseRepository:
    return ExpenseRepository(session_factory)


class TestExpenseRepository:
    """Test expense persistence."""

    async def test_add_trims_text_and_rounds_amount(self, expenses):
        stored = await expenses.add_expense(
            category="Marketing",
            amount="250.005",
            expense_date=DAY,
            created_by="cfo",
            vendor="  Meta Ads ",
            description="\tboosted posts \n",
        )

        assert stored.id
        assert stored.created_at is not None
        assert stored.vendor == "Meta Ads"
        assert stored.description == "boosted posts"
        assert stored.amount == Decimal("250.01")
        assert stored.created_by_email == ""

    @pytest.mark.parametrize("amount", [0, "-5", "abc", "NaN"])
    async def test_rejects_bad_amounts(self, expenses, amount):
        with pytest.raises(InvalidExpenseError):
            await expenses.add_expense(
                category="Dinner", amount=amount, expense_date=DAY, created_by="cfo"
            )
        assert await expenses.list_expenses() == []

    async def test_rejects_unknown_category(self, expenses):
        with pytest.raises(InvalidExpenseError, match="Unknown expense category"):
            await expenses.add_expense(
                category="Yachts", amount=10, expense_date=DAY, created_by="cfo"
            )

    async def test_list_newest_first(self, expenses):
        older = await expenses.add_expense(
            category="Dinner", amount=10, expense_date=date(2025, 8, 1), created_by="cfo"
        )
        first = await expenses.add_expense(
            category="Dinner", amount=20, expense_date=DAY, created_by="cfo"
        )
        second = await expenses.add_expense(
            category="Technology", amount=30, expense_date=DAY, created_by="cfo"
        )

        listed = await expenses.list_expenses()

        assert [e.id for e in listed] == [second.id, first.id, older.id]
        assert [e.id for e in await expenses.list_expenses("Dinner")] == [first.id, older.id]

    async def test_delete(self, expenses):
        stored = await expenses.add_expense(
            category="Other", amount=5, expense_date=DAY, created_by="cfo"
        )

        assert await expenses.delete_expense(stored.id) is True
        assert await expenses.delete_expense(stored.id) is False
        assert await expenses.list_expenses() == []


class TestExpenseTotals:
    """Test expense aggregation."""

    def test_every_category_present(self):
        totals = category_totals([])
        assert list(totals) == list(EXPENSE_CATEGORIES)
        assert set(totals.values()) == {Decimal("0")}

    def test_uncategorized_counts_as_other(self):
        totals = category_totals(
            [
                {"category": "", "amount": Decimal("4")},
                {"category": None, "amount": "6"},
                {"category": "Dinner", "amount": Decimal("12.50")},
            ]
        )
        assert totals["Other"] == Decimal("10")
        assert totals["Dinner"] == Decimal("12.50")

    def test_total_ignores_malformed_amounts(self):
        rows = [{"amount": "10.25"}, {"amount": "oops"}, {"amount": None}]
        assert total_expenses(rows) == Decimal("10.25")

    def test_summary_nets_company_take_home(self):
        lines = [
            {"job_title": "Company", "take_home": Decimal("69")},
            {"job_title": "CEO", "take_home": Decimal("500")},
        ]
        summary = summarize([{"category": "Dinner", "amount": Decimal("80")}], lines)

        assert summary.company_revenue == Decimal("69")
        assert summary.total_expenses == Decimal("80")
        assert summary.net == Decimal("-11")


class TestExpenseExport:
    """Test expense CSV rendering."""

    def test_header_only_when_empty(self):
        assert export_expenses_csv([]) == (
            "id,category,date,vendor,description,amount,createdByEmail"
        )

    def test_row_rendering(self):
        text = export_expenses_csv(
            [
                {
                    "id": "e1",
                    "category": "Company Travel",
                    "expense_date": DAY,
                    "vendor": "Delta",
                    "description": "flight\nto LA",
                    "amount": Decimal("300"),
                    "created_by_email": "cfo@example.com",
                }
            ]
        )
        assert text.split("\n")[1] == (
            '"e1","Company Travel","2025-09-01","Delta","flight to LA",'
            '"300.00","cfo@example.com"'
        )

    def test_filename(self):
        assert expenses_filename(DAY) == "expenses_all_2025-09-01.csv"
