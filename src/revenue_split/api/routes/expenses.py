"""Company expense endpoints."""

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Header, HTTPException, Response, status

from revenue_split.api.dependencies import Expenses, Ledger, Principal
from revenue_split.api.schemas import (
    ErrorResponse,
    ExpenseCreate,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseSummaryResponse,
)
from revenue_split.services.expense_service import summarize, total_expenses
from revenue_split.services.export import expenses_filename, export_expenses_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    expenses: Expenses,
    category: str | None = None,
) -> ExpenseListResponse:
    """Expenses newest first, optionally limited to one category."""
    rows = await expenses.list_expenses(category)
    return ExpenseListResponse(
        items=[ExpenseResponse.model_validate(row) for row in rows],
        total=len(rows),
        category=category,
        category_total=total_expenses(rows),
    )


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_expense(
    payload: ExpenseCreate,
    principal: Principal,
    expenses: Expenses,
    x_authenticated_email: Annotated[str | None, Header()] = None,
) -> ExpenseResponse:
    """Record one company expense on behalf of the caller."""
    email = x_authenticated_email or (principal if "@" in principal else "")
    expense = await expenses.add_expense(
        category=payload.category,
        amount=payload.amount,
        expense_date=payload.expense_date or date.today(),
        created_by=principal,
        vendor=payload.vendor,
        description=payload.description,
        created_by_email=email,
    )
    return ExpenseResponse.model_validate(expense)


@router.get("/summary", response_model=ExpenseSummaryResponse)
async def expense_summary(expenses: Expenses, ledger: Ledger) -> ExpenseSummaryResponse:
    """Spend per category and net against the company's take-home."""
    summary = summarize(await expenses.list_expenses(), await ledger.all_lines())
    return ExpenseSummaryResponse(
        by_category=summary.by_category,
        total_expenses=summary.total_expenses,
        company_revenue=summary.company_revenue,
        net=summary.net,
    )


@router.get(
    "/export",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_expenses(expenses: Expenses) -> Response:
    """Download every expense as CSV."""
    rows = await expenses.list_expenses()
    return Response(
        content=export_expenses_csv(rows),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": (
                f'attachment; filename="{expenses_filename(date.today())}"'
            )
        },
    )


@router.delete(
    "/{expense_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_expense(
    expense_id: str,
    principal: Principal,
    expenses: Expenses,
) -> Response:
    """Remove an expense."""
    if not await expenses.delete_expense(expense_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Expense {expense_id} not found",
        )
    logger.info("Expense %s removed by %s", expense_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
