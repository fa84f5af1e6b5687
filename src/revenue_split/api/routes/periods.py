"""Bi-week period navigation endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path

from revenue_split.api.dependencies import Calendar
from revenue_split.api.schemas import ErrorResponse, PeriodResponse
from revenue_split.splitting.calendar import BiWeekCalendar, BiWeekPeriod

router = APIRouter(prefix="/periods", tags=["periods"])

PeriodKey = Annotated[str, Path(description="ISO date of the period's first day")]


def period_response(calendar: BiWeekCalendar, period: BiWeekPeriod) -> PeriodResponse:
    return PeriodResponse(
        key=period.key,
        start=period.start,
        end=period.end,
        start_date=period.start_date,
        end_date=period.end_date,
        index=calendar.period_index(period),
        has_previous=calendar.has_previous(period),
        has_next=calendar.has_next(period),
    )


@router.get("/current", response_model=PeriodResponse)
async def current_period(calendar: Calendar) -> PeriodResponse:
    """The period containing today."""
    return period_response(calendar, calendar.current_period())


@router.get(
    "/{key}",
    response_model=PeriodResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_period(calendar: Calendar, key: PeriodKey) -> PeriodResponse:
    return period_response(calendar, calendar.period_for_key(key))


@router.get(
    "/{key}/previous",
    response_model=PeriodResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def previous_period(calendar: Calendar, key: PeriodKey) -> PeriodResponse:
    """One period back; the first period is returned unchanged."""
    return period_response(calendar, calendar.previous(calendar.period_for_key(key)))


@router.get(
    "/{key}/next",
    response_model=PeriodResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def next_period(calendar: Calendar, key: PeriodKey) -> PeriodResponse:
    """One period forward; the current period is returned unchanged."""
    return period_response(calendar, calendar.next(calendar.period_for_key(key)))
