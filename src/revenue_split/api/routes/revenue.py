"""Revenue event and payout line endpoints."""

import logging
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from revenue_split.api.dependencies import Calendar, Ledger, Principal, Roster
from revenue_split.api.schemas import (
    ErrorResponse,
    PayoutLineListResponse,
    PayoutLineResponse,
    RevenueEventCreate,
    RevenueEventResponse,
)
from revenue_split.splitting.calendar import BiWeekCalendar, BiWeekPeriod
from revenue_split.splitting.engine import SplitEngine
from revenue_split.splitting.types import RevenueEvent

logger = logging.getLogger(__name__)

router = APIRouter(tags=["revenue"])


def resolve_period(calendar: BiWeekCalendar, key: str | None) -> BiWeekPeriod:
    """The period named by `key`, or the current period when omitted."""
    if key:
        return calendar.period_for_key(key)
    return calendar.current_period()


@router.post(
    "/revenue-events",
    response_model=RevenueEventResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def submit_revenue_event(
    payload: RevenueEventCreate,
    principal: Principal,
    ledger: Ledger,
    roster: Roster,
    calendar: Calendar,
) -> RevenueEventResponse:
    """Record a revenue event and write its payout lines.

    Lines are written one at a time. If some writes fail the response still
    lists the lines that were written and reports the failure count.
    """
    period = resolve_period(calendar, payload.period_key)
    logger.info(
        "Revenue event for %s recorded by %s in period %s",
        payload.for_team.value,
        principal,
        period.key,
    )
    snapshot = await roster.snapshot()
    event = RevenueEvent(
        submitter=payload.submitter,
        for_team=payload.for_team.value,
        amount=payload.amount,
        description=payload.description,
    )

    result = await SplitEngine(ledger).submit(event, snapshot, period)
    if not result.accepted:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=result.rejected_reason,
        )

    return RevenueEventResponse(
        event_id=result.planned[0].event_id if result.planned else None,
        period_key=period.key,
        lines=[PayoutLineResponse.model_validate(line) for line in result.written],
        planned_count=len(result.planned),
        failed_count=len(result.failures),
        total_take_home=result.total_take_home,
        unallocated=Decimal(payload.amount) - result.total_take_home,
    )


@router.get(
    "/payout-lines",
    response_model=PayoutLineListResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def list_payout_lines(
    ledger: Ledger,
    calendar: Calendar,
    period: Annotated[str | None, Query(description="Period key; defaults to current")] = None,
    employee_id: str | None = None,
) -> PayoutLineListResponse:
    """List the payout lines of one period."""
    viewed = resolve_period(calendar, period)
    if employee_id:
        lines = await ledger.lines_for_employee(employee_id, viewed)
    else:
        lines = await ledger.lines_for_period(viewed)
    return PayoutLineListResponse(
        items=[PayoutLineResponse.model_validate(line) for line in lines],
        total=len(lines),
        period_key=viewed.key,
    )
