"""Roster endpoints."""

from fastapi import APIRouter

from revenue_split.api.dependencies import Roster
from revenue_split.api.schemas import EmployeeListResponse, EmployeeResponse
from revenue_split.splitting.types import Team

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=EmployeeListResponse)
async def list_employees(roster: Roster, team: Team | None = None) -> EmployeeListResponse:
    """List the roster in directory order, optionally for one team."""
    employees = await roster.list_employees(team.value if team else None)
    return EmployeeListResponse(
        items=[EmployeeResponse.model_validate(e) for e in employees],
        total=len(employees),
    )
