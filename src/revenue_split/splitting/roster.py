"""Roster directory with role resolution.

Employees are looked up against a snapshot supplied by the caller. Roles are
resolved once per snapshot into a `RoleRegistry`; the splitting engine only
consults the registry and never matches job titles itself.

Role resolution order:
1. First employee (directory order) carrying an explicit `role` tag
2. First employee on the role's team whose job title contains an alias,
   trying aliases in the order listed
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from revenue_split.splitting.types import EmployeeRecord, Role, Team

# Title aliases per role. Historical titles stay as extra aliases.
ROLE_ALIASES: dict[Role, tuple[Team, tuple[str, ...]]] = {
    Role.SALES_MANAGER: (Team.SALES, ("sales manager",)),
    Role.SALES_LEAD: (Team.SALES, ("sales lead",)),
    Role.CEO: (Team.C_SUITE, ("ceo",)),
    Role.COO: (Team.C_SUITE, ("coo",)),
    Role.CFO: (Team.C_SUITE, ("cfo",)),
    Role.COMPANY: (Team.C_SUITE, ("company",)),
    Role.STREAM_LEAD: (Team.STREAMER, ("streaming growth & partnerships lead",)),
    Role.VIDEO_LEAD: (
        Team.STREAMER,
        ("video content distribution lead", "vp of video content distribution"),
    ),
    Role.CONTENT_LEAD: (Team.CONTENT, ("vp of content operations",)),
}


class RoleRegistry(Mapping[Role, "EmployeeRecord | None"]):
    """Resolved mapping of every role to its holder (or None if unfilled)."""

    def __init__(self, holders: dict[Role, EmployeeRecord | None]):
        self._holders = {role: holders.get(role) for role in Role}

    def __getitem__(self, role: Role) -> EmployeeRecord | None:
        return self._holders[role]

    def __iter__(self) -> Iterator[Role]:
        return iter(self._holders)

    def __len__(self) -> int:
        return len(self._holders)

    def holds(self, role: Role, employee: EmployeeRecord) -> bool:
        """Check whether `employee` is the resolved holder of `role`."""
        holder = self._holders[role]
        return holder is not None and holder.id == employee.id

    def unfilled(self) -> list[Role]:
        return [role for role, holder in self._holders.items() if holder is None]


class RosterDirectory:
    """Read-only lookups over a roster snapshot."""

    def __init__(self, employees: Iterable[EmployeeRecord]):
        self.employees: list[EmployeeRecord] = list(employees)

    def __len__(self) -> int:
        return len(self.employees)

    def find_by_role(self, role_substring: str, team: Team | str) -> EmployeeRecord | None:
        """Find the first employee on `team` whose job title contains the substring.

        Matching is case-insensitive. Ties go to directory order.
        """
        needle = role_substring.lower()
        team_label = _team_label(team)
        for employee in self.employees:
            if employee.team == team_label and needle in (employee.job_title or "").lower():
                return employee
        return None

    def find_video_lead(self) -> EmployeeRecord | None:
        """Find the video content lead, accepting the legacy VP title."""
        return (
            self.find_by_role("video content distribution lead", Team.STREAMER)
            or self.find_by_role("vp of video content distribution", Team.STREAMER)
        )

    @staticmethod
    def is_on_team(employee: EmployeeRecord, team: Team | str) -> bool:
        """Exact team equality."""
        return employee.team == _team_label(team)

    def get(self, employee_id: str) -> EmployeeRecord | None:
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        return None

    def find_submitter(self, key: str) -> EmployeeRecord | None:
        """Resolve a submitter by exact id, falling back to exact name."""
        if not key:
            return None
        by_id = self.get(key)
        if by_id is not None:
            return by_id
        for employee in self.employees:
            if employee.name == key:
                return employee
        return None

    def resolve_roles(self) -> RoleRegistry:
        """Resolve every role against this snapshot."""
        holders: dict[Role, EmployeeRecord | None] = {}
        for role, (team, aliases) in ROLE_ALIASES.items():
            holder = next((e for e in self.employees if e.role == role), None)
            if holder is None:
                for alias in aliases:
                    holder = self.find_by_role(alias, team)
                    if holder is not None:
                        break
            holders[role] = holder
        return RoleRegistry(holders)


def _team_label(team: Team | str) -> str:
    return team.value if isinstance(team, Team) else str(team)
