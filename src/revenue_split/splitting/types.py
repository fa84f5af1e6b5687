"""Type definitions for the commission splitting pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class Team(str, Enum):
    """Teams an employee can belong to or revenue can be attributed to."""

    SALES = "Sales Team"
    STREAMER = "Streamer Team"
    CONTENT = "Content Team"
    C_SUITE = "C-suite"

    @classmethod
    def parse(cls, value: str | Team | None) -> Team | None:
        """Return the matching team, or None for unknown labels."""
        if isinstance(value, Team):
            return value
        for team in cls:
            if team.value == value:
                return team
        return None


class Role(str, Enum):
    """Beneficiary roles the rule table pays out to."""

    SALES_MANAGER = "sales_manager"
    SALES_LEAD = "sales_lead"
    CEO = "ceo"
    COO = "coo"
    CFO = "cfo"
    COMPANY = "company"
    STREAM_LEAD = "stream_lead"
    VIDEO_LEAD = "video_lead"
    CONTENT_LEAD = "content_lead"


# Executive tiers in payout order: CEO, COO, CFO, Company
EXECUTIVE_TIERS: tuple[tuple[Role, Decimal], ...] = (
    (Role.CEO, Decimal("0.60")),
    (Role.COO, Decimal("0.20")),
    (Role.CFO, Decimal("0.10")),
    (Role.COMPANY, Decimal("0.10")),
)


@dataclass(frozen=True)
class EmployeeRecord:
    """Snapshot of one roster entry."""

    id: str
    name: str
    job_title: str
    team: str
    role: Role | None = None  # Explicit tag; inferred from job_title when None

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> EmployeeRecord:
        """Build a record from a loosely-typed mapping (seed files, API payloads)."""
        role = data.get("role")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            job_title=str(data.get("job_title") or data.get("jobTitle") or ""),
            team=str(data.get("team") or ""),
            role=Role(role) if role else None,
        )


@dataclass(frozen=True)
class RevenueEvent:
    """A submitted revenue event. Transient: expanded into payout lines."""

    submitter: str  # Employee id or exact employee name
    for_team: str
    amount: Decimal
    description: str = ""


@dataclass
class PayoutLineCandidate:
    """A payout line before it is written to the ledger."""

    employee: EmployeeRecord
    for_team: str
    description: str
    take_home: Decimal
    amount: Decimal = Decimal("0")
    revenue: Decimal = Decimal("0")

    # Period stamp, shared by every line of one event
    bi_week_start: datetime | None = None
    bi_week_end: datetime | None = None
    bi_week_key: str | None = None

    # Traceability
    role: Role | None = None  # None for the submitter's own line
    event_id: str | None = None  # Shared by all lines of one event
    line_no: int = 0

    @property
    def is_submitter_line(self) -> bool:
        return self.role is None

    def to_record(self) -> dict[str, Any]:
        """Return the ledger record shape for this line."""
        return {
            "employee_id": self.employee.id,
            "name": self.employee.name,
            "job_title": self.employee.job_title,
            "team": self.employee.team,
            "for_team": self.for_team,
            "description": self.description,
            "amount": self.amount,
            "revenue": self.revenue,
            "take_home": self.take_home,
            "bi_week_start": self.bi_week_start,
            "bi_week_end": self.bi_week_end,
            "bi_week_key": self.bi_week_key,
            "event_id": self.event_id,
            "line_no": self.line_no,
        }


@dataclass
class SplitResult:
    """Outcome of one revenue event submission.

    `rejected_reason` is set when validation failed and nothing was written.
    `failures` holds the candidates whose individual write failed; these are
    not retried and do not undo the lines already written.
    """

    event: RevenueEvent
    planned: list[PayoutLineCandidate] = field(default_factory=list)
    written: list[Any] = field(default_factory=list)
    failures: list[tuple[PayoutLineCandidate, Exception]] = field(default_factory=list)
    rejected_reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.rejected_reason is None

    @property
    def complete(self) -> bool:
        return self.accepted and not self.failures

    @property
    def total_take_home(self) -> Decimal:
        return sum((c.take_home for c in self.planned), Decimal("0"))
