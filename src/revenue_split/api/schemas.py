"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from revenue_split.splitting.types import Role, Team


# ============================================================================
# Roster schemas
# ============================================================================


class EmployeeResponse(BaseModel):
    """Schema for a roster entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    job_title: str
    team: str
    role: Role | None = None


class EmployeeListResponse(BaseModel):
    """Schema for listing the roster."""

    items: list[EmployeeResponse]
    total: int


# ============================================================================
# Period schemas
# ============================================================================


class PeriodResponse(BaseModel):
    """Schema for a bi-week period."""

    key: str
    start: str
    end: str
    start_date: date
    end_date: date
    index: int
    has_previous: bool
    has_next: bool


# ============================================================================
# Revenue event schemas
# ============================================================================


class RevenueEventCreate(BaseModel):
    """Schema for submitting a revenue event."""

    submitter: str = Field(min_length=1, description="Employee id or exact name")
    for_team: Team
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    description: str = ""
    period_key: str | None = Field(
        default=None, description="Period to record against; defaults to the current one"
    )


class PayoutLineResponse(BaseModel):
    """Schema for a written payout line."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    name: str
    job_title: str
    team: str
    for_team: str
    description: str
    amount: Decimal
    revenue: Decimal
    take_home: Decimal
    created_at: datetime | None = None
    bi_week_start: datetime | None = None
    bi_week_end: datetime | None = None
    bi_week_key: str | None = None
    event_id: str | None = None
    line_no: int = 0


class PayoutLineListResponse(BaseModel):
    """Schema for listing payout lines."""

    items: list[PayoutLineResponse]
    total: int
    period_key: str | None = None


class RevenueEventResponse(BaseModel):
    """Schema for the outcome of a revenue event submission."""

    event_id: str | None
    period_key: str
    lines: list[PayoutLineResponse]
    planned_count: int
    failed_count: int
    total_take_home: Decimal
    unallocated: Decimal


# ============================================================================
# Expense schemas
# ============================================================================


class ExpenseCreate(BaseModel):
    """Schema for recording a company expense."""

    category: str = Field(min_length=1, description="One of the expense categories")
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    vendor: str = ""
    description: str = ""
    expense_date: date | None = Field(default=None, description="Defaults to today")


class ExpenseResponse(BaseModel):
    """Schema for a stored expense."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    category: str
    vendor: str
    description: str
    amount: Decimal
    expense_date: date
    created_by: str
    created_by_email: str
    created_at: datetime | None = None


class ExpenseListResponse(BaseModel):
    """Schema for listing expenses."""

    items: list[ExpenseResponse]
    total: int
    category: str | None = None
    category_total: Decimal


class ExpenseSummaryResponse(BaseModel):
    """Schema for spend per category set against company revenue."""

    by_category: dict[str, Decimal]
    total_expenses: Decimal
    company_revenue: Decimal
    net: Decimal


# ============================================================================
# Report schemas
# ============================================================================


class EmployeeTotalsResponse(BaseModel):
    """Schema for one employee's totals."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    name: str
    job_title: str
    revenue: Decimal
    take_home: Decimal


class TotalsResponse(BaseModel):
    """Schema for per-employee totals in a period."""

    items: list[EmployeeTotalsResponse]
    period_key: str
    team: Team | None = None


class LeaderboardRowResponse(BaseModel):
    """Schema for one leaderboard row."""

    model_config = ConfigDict(from_attributes=True)

    rank: int
    employee_id: str
    name: str
    job_title: str
    total_revenue: Decimal
    total_take_home: Decimal
    target: Decimal
    progress: Decimal
    over_target: bool


class LeaderboardResponse(BaseModel):
    """Schema for the leaderboard."""

    items: list[LeaderboardRowResponse]
    mode: str
    period_key: str | None = None


class RevenueTotalResponse(BaseModel):
    """Schema for a single revenue figure."""

    total: Decimal


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str | None = None
