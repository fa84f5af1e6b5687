"""Commission splitting engine."""

from revenue_split.splitting.calendar import BiWeekCalendar, BiWeekPeriod
from revenue_split.splitting.engine import SplitEngine
from revenue_split.splitting.roster import RoleRegistry, RosterDirectory
from revenue_split.splitting.types import (
    EmployeeRecord,
    PayoutLineCandidate,
    RevenueEvent,
    Role,
    SplitResult,
    Team,
)

__all__ = [
    "BiWeekCalendar",
    "BiWeekPeriod",
    "SplitEngine",
    "RoleRegistry",
    "RosterDirectory",
    "EmployeeRecord",
    "PayoutLineCandidate",
    "RevenueEvent",
    "Role",
    "SplitResult",
    "Team",
]
