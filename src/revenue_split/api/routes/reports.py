"""Aggregate report endpoints: totals, leaderboard, revenue figures, export."""

from typing import Annotated, Literal

from fastapi import APIRouter, Query, Response

from revenue_split.api.dependencies import Calendar, Ledger, Roster
from revenue_split.api.routes.revenue import resolve_period
from revenue_split.api.schemas import (
    EmployeeTotalsResponse,
    ErrorResponse,
    LeaderboardResponse,
    LeaderboardRowResponse,
    RevenueTotalResponse,
    TotalsResponse,
)
from revenue_split.services.aggregation import (
    all_time_revenue,
    company_revenue,
    leaderboard,
    roster_totals,
)
from revenue_split.services.export import export_filename, export_period_csv
from revenue_split.splitting.types import Team

router = APIRouter(tags=["reports"])

PeriodQuery = Annotated[str | None, Query(description="Period key; defaults to current")]


@router.get(
    "/totals",
    response_model=TotalsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def period_totals(
    ledger: Ledger,
    roster: Roster,
    calendar: Calendar,
    period: PeriodQuery = None,
    team: Team | None = None,
) -> TotalsResponse:
    """Revenue and take-home per employee for one period."""
    viewed = resolve_period(calendar, period)
    employees = await roster.list_employees()
    lines = await ledger.lines_for_period(viewed)
    rows = roster_totals(employees, lines, team)
    return TotalsResponse(
        items=[EmployeeTotalsResponse.model_validate(r) for r in rows],
        period_key=viewed.key,
        team=team,
    )


@router.get(
    "/leaderboard",
    response_model=LeaderboardResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_leaderboard(
    ledger: Ledger,
    roster: Roster,
    calendar: Calendar,
    period: PeriodQuery = None,
    mode: Literal["biweek", "all"] = "biweek",
) -> LeaderboardResponse:
    """Employees ranked by revenue for one period or for all time."""
    employees = await roster.list_employees()
    if mode == "all":
        lines = await ledger.all_lines()
        period_key = None
    else:
        viewed = resolve_period(calendar, period)
        lines = await ledger.lines_for_period(viewed)
        period_key = viewed.key
    rows = leaderboard(employees, lines)
    return LeaderboardResponse(
        items=[LeaderboardRowResponse.model_validate(r) for r in rows],
        mode=mode,
        period_key=period_key,
    )


@router.get("/revenue/all-time", response_model=RevenueTotalResponse)
async def get_all_time_revenue(ledger: Ledger) -> RevenueTotalResponse:
    """Revenue across every payout line ever recorded."""
    return RevenueTotalResponse(total=all_time_revenue(await ledger.all_lines()))


@router.get("/revenue/company", response_model=RevenueTotalResponse)
async def get_company_revenue(ledger: Ledger) -> RevenueTotalResponse:
    """Take-home retained by the company entity across all periods."""
    return RevenueTotalResponse(total=company_revenue(await ledger.all_lines()))


@router.get(
    "/export",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def export_period(
    ledger: Ledger,
    calendar: Calendar,
    period: PeriodQuery = None,
    legacy: bool = False,
) -> Response:
    """Download every team's payout lines for one period as CSV."""
    viewed = resolve_period(calendar, period)
    lines = await ledger.lines_for_period(viewed)
    return Response(
        content=export_period_csv(lines, legacy=legacy),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(viewed)}"'
        },
    )
