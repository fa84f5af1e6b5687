"""Commission splitting engine.

Expands a revenue event into payout lines using the rule table, then writes
the lines to the ledger one at a time.

Pipeline (stable order per event):
1) Validate the event (positive amount, known submitter, known team)
2) Resolve roles against the roster snapshot
3) Select the rule variant for the submitter
4) Derive pools from the event amount
5) Build the submitter line, then beneficiary lines in rule order
6) Stamp every line with the viewed period and a shared event id
7) Write lines sequentially; a failed write is logged and the rest continue
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Protocol
from uuid import uuid4

from revenue_split.splitting.calendar import BiWeekPeriod
from revenue_split.splitting.money import split, to_decimal
from revenue_split.splitting.roster import RoleRegistry, RosterDirectory
from revenue_split.splitting.rules import (
    DEFAULT_RULES,
    POOL_FRACTIONS,
    ExecutiveShare,
    Pool,
    Share,
    SplitVariant,
    SubmitterTake,
    TeamRule,
)
from revenue_split.splitting.types import (
    EXECUTIVE_TIERS,
    EmployeeRecord,
    PayoutLineCandidate,
    RevenueEvent,
    Role,
    SplitResult,
    Team,
)

logger = logging.getLogger(__name__)


class LedgerWriter(Protocol):
    """Anything that can persist one payout line."""

    async def append(self, candidate: PayoutLineCandidate) -> Any:
        ...


class SplitEngine:
    """Fans a revenue event out into payout lines.

    There is no transaction around the fan-out and no deduplication:
    submitting the same event twice writes two full line sets.
    """

    def __init__(
        self,
        ledger: LedgerWriter | None = None,
        rules: dict[Team, TeamRule] | None = None,
    ):
        self.ledger = ledger
        self.rules = rules if rules is not None else DEFAULT_RULES

    def plan(
        self,
        event: RevenueEvent,
        roster: RosterDirectory,
        period: BiWeekPeriod,
        registry: RoleRegistry | None = None,
    ) -> SplitResult:
        """Compute the payout lines for an event without writing anything."""
        result = SplitResult(event=event)

        try:
            amount = to_decimal(event.amount)
        except (InvalidOperation, ValueError, TypeError):
            result.rejected_reason = f"Amount '{event.amount}' is not a number"
            return result
        if not amount.is_finite() or amount <= 0:
            result.rejected_reason = f"Amount must be positive, got {event.amount}"
            return result

        submitter = roster.find_submitter(event.submitter)
        if submitter is None:
            result.rejected_reason = f"Unknown submitter '{event.submitter}'"
            return result

        team = Team.parse(event.for_team)
        rule = self.rules.get(team) if team is not None else None
        if team is None or rule is None:
            result.rejected_reason = f"Unknown target team '{event.for_team}'"
            return result

        registry = registry or roster.resolve_roles()
        variant = rule.select(
            holds_role={role: registry.holds(role, submitter) for role in Role},
            on_target_team=roster.is_on_team(submitter, team),
        )

        pools = self._pools(amount)
        lines = [
            PayoutLineCandidate(
                employee=submitter,
                for_team=team.value,
                description=event.description,
                amount=amount,
                revenue=amount,
                take_home=self._submitter_take(variant, amount, submitter, registry),
            )
        ]
        for share in variant.shares:
            if isinstance(share, ExecutiveShare):
                lines.extend(
                    self._executive_lines(share, pools, submitter, registry, team)
                )
            else:
                line = self._share_line(share, pools, submitter, registry, team)
                if line is not None:
                    lines.append(line)

        stamp = period.stamp()
        event_id = uuid4().hex
        for line_no, line in enumerate(lines):
            line.event_id = event_id
            line.line_no = line_no
            line.bi_week_start = stamp["bi_week_start"]
            line.bi_week_end = stamp["bi_week_end"]
            line.bi_week_key = stamp["bi_week_key"]

        result.planned = lines
        return result

    async def submit(
        self,
        event: RevenueEvent,
        roster: RosterDirectory,
        period: BiWeekPeriod,
    ) -> SplitResult:
        """Plan an event and write each line to the ledger in order.

        Validation failures write nothing. Individual write failures are
        logged and recorded on the result; remaining lines are still
        attempted and nothing already written is undone.
        """
        if self.ledger is None:
            raise RuntimeError("SplitEngine.submit requires a ledger writer")

        result = self.plan(event, roster, period)
        if not result.accepted:
            logger.info("Revenue event rejected: %s", result.rejected_reason)
            return result

        logger.info(
            "Splitting %s for %s into %d lines (period %s)",
            event.amount,
            event.for_team,
            len(result.planned),
            period.key,
        )
        for candidate in result.planned:
            try:
                written = await self.ledger.append(candidate)
            except Exception as e:
                logger.exception(
                    "Payout line write failed for employee %s (%s)",
                    candidate.employee.id,
                    candidate.description,
                )
                result.failures.append((candidate, e))
                continue
            result.written.append(written)

        return result

    def distribute_executives(
        self,
        pool: Decimal,
        note: str,
        registry: RoleRegistry,
        for_team: Team,
        exclude: EmployeeRecord | None = None,
    ) -> list[PayoutLineCandidate]:
        """Split `pool` across the executive tiers (CEO 60, COO 20, CFO 10, Company 10).

        Unfilled tiers are skipped and their share stays unallocated.
        """
        lines: list[PayoutLineCandidate] = []
        for role, tier in EXECUTIVE_TIERS:
            holder = registry[role]
            if holder is None:
                logger.debug("No holder for %s; share unallocated", role.value)
                continue
            if exclude is not None and holder.id == exclude.id:
                continue
            lines.append(
                PayoutLineCandidate(
                    employee=holder,
                    for_team=for_team.value,
                    description=note,
                    take_home=split(pool, tier),
                    role=role,
                )
            )
        return lines

    @staticmethod
    def _pools(amount: Decimal) -> dict[Pool, Decimal]:
        return {
            pool: amount if fraction is None else split(amount, fraction)
            for pool, fraction in POOL_FRACTIONS.items()
        }

    @staticmethod
    def _submitter_take(
        variant: SplitVariant,
        amount: Decimal,
        submitter: EmployeeRecord,
        registry: RoleRegistry,
    ) -> Decimal:
        if variant.submitter_take == SubmitterTake.EXECUTIVE_TIER:
            for role, tier in EXECUTIVE_TIERS:
                if registry.holds(role, submitter):
                    return split(amount, tier)
            return Decimal("0")
        return split(amount, variant.submitter_take)

    @staticmethod
    def _share_line(
        share: Share,
        pools: dict[Pool, Decimal],
        submitter: EmployeeRecord,
        registry: RoleRegistry,
        team: Team,
    ) -> PayoutLineCandidate | None:
        holder = registry[share.role]
        if holder is None:
            logger.debug("No holder for %s; share unallocated", share.role.value)
            return None
        return PayoutLineCandidate(
            employee=holder,
            for_team=team.value,
            description=share.note.format(name=submitter.name),
            take_home=split(pools[share.base], share.fraction),
            role=share.role,
        )

    def _executive_lines(
        self,
        share: ExecutiveShare,
        pools: dict[Pool, Decimal],
        submitter: EmployeeRecord,
        registry: RoleRegistry,
        team: Team,
    ) -> list[PayoutLineCandidate]:
        base = pools[share.base]
        pool = base if share.pool_fraction is None else split(base, share.pool_fraction)
        return self.distribute_executives(
            pool,
            share.note.format(name=submitter.name),
            registry,
            team,
            exclude=submitter if share.exclude_submitter else None,
        )
