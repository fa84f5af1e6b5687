"""Declarative commission rule table.

Each target team has an ordered list of variants; the first variant whose
match condition holds for the submitter is applied. A variant states the
submitter's own share and the ordered beneficiary shares, each taken from a
named pool:

- AMOUNT: the full event amount
- REMAINING: 70% of the amount (what is left after a 30% submitter cut)
- TEAM_POT: 30% of the amount (the streamer team pot)

Executive shares pay the CEO/COO/CFO/Company tiers (60/20/10/10) out of an
executive pool derived from one of the pools above.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from revenue_split.splitting.types import Role, Team


class Pool(str, Enum):
    """Base amounts a share can be computed from."""

    AMOUNT = "amount"
    REMAINING = "remaining"
    TEAM_POT = "team_pot"


# Fraction of the event amount each derived pool holds (None = the amount itself)
POOL_FRACTIONS: dict[Pool, Decimal | None] = {
    Pool.AMOUNT: None,
    Pool.REMAINING: Decimal("0.70"),
    Pool.TEAM_POT: Decimal("0.30"),
}


class Match(str, Enum):
    """How a variant is selected for a submitter."""

    HOLDS_ROLE = "holds_role"  # submitter is the resolved holder of `role`
    ON_TARGET_TEAM = "on_target_team"  # submitter's team equals the target team
    OTHERWISE = "otherwise"


class SubmitterTake(str, Enum):
    """Submitter share computed from the submitter's executive tier."""

    EXECUTIVE_TIER = "executive_tier"


@dataclass(frozen=True)
class Share:
    """A fixed fraction of a pool paid to the holder of a role."""

    role: Role
    fraction: Decimal
    base: Pool
    note: str


@dataclass(frozen=True)
class ExecutiveShare:
    """Executive tier distribution.

    The executive pool is `pool_fraction` of `base`, or `base` itself when
    `pool_fraction` is None. With `exclude_submitter` the submitter's own
    tier is skipped (it is already paid on the submitter line).
    """

    base: Pool
    pool_fraction: Decimal | None
    note: str
    exclude_submitter: bool = False


@dataclass(frozen=True)
class SplitVariant:
    """One row of the rule table."""

    name: str
    match: Match
    submitter_take: Decimal | SubmitterTake
    shares: tuple[Share | ExecutiveShare, ...] = ()
    role: Role | None = None  # Used by Match.HOLDS_ROLE


@dataclass(frozen=True)
class TeamRule:
    """Ordered variants for one target team."""

    team: Team
    variants: tuple[SplitVariant, ...]

    def select(self, *, holds_role: dict[Role, bool], on_target_team: bool) -> SplitVariant:
        """Return the first variant matching the submitter."""
        for variant in self.variants:
            if variant.match == Match.OTHERWISE:
                return variant
            if variant.match == Match.ON_TARGET_TEAM and on_target_team:
                return variant
            if (
                variant.match == Match.HOLDS_ROLE
                and variant.role is not None
                and holds_role.get(variant.role, False)
            ):
                return variant
        raise LookupError(f"No variant of {self.team.value} rule matches the submitter")


SEVENTY = Decimal("0.70")

DEFAULT_RULES: dict[Team, TeamRule] = {
    Team.SALES: TeamRule(
        team=Team.SALES,
        variants=(
            SplitVariant(
                name="sales_manager_submits",
                match=Match.HOLDS_ROLE,
                role=Role.SALES_MANAGER,
                submitter_take=Decimal("0.20"),
                shares=(
                    Share(Role.SALES_LEAD, Decimal("0.10"), Pool.AMOUNT, "10% from {name} (Sales Team)"),
                    ExecutiveShare(Pool.AMOUNT, SEVENTY, "C-suite share from {name} (Sales Team)"),
                ),
            ),
            SplitVariant(
                name="sales_other_submits",
                match=Match.OTHERWISE,
                submitter_take=Decimal("0.30"),
                shares=(
                    Share(Role.SALES_LEAD, Decimal("0.10"), Pool.REMAINING, "Sales split from {name}"),
                    Share(Role.SALES_MANAGER, Decimal("0.20"), Pool.REMAINING, "Sales split from {name}"),
                    ExecutiveShare(Pool.REMAINING, SEVENTY, "C-suite share from {name} (Sales Team)"),
                ),
            ),
        ),
    ),
    Team.STREAMER: TeamRule(
        team=Team.STREAMER,
        variants=(
            SplitVariant(
                name="streamer_team_submits",
                match=Match.ON_TARGET_TEAM,
                submitter_take=Decimal("0"),
                shares=(
                    Share(Role.STREAM_LEAD, Decimal("0.10"), Pool.TEAM_POT, "Streamer team pot from {name}"),
                    Share(Role.VIDEO_LEAD, Decimal("0.90"), Pool.TEAM_POT, "Streamer team pot from {name}"),
                    ExecutiveShare(Pool.AMOUNT, SEVENTY, "C-suite share from {name} (Streamer Team)"),
                ),
            ),
            SplitVariant(
                name="streamer_other_submits",
                match=Match.OTHERWISE,
                submitter_take=Decimal("0.30"),
                shares=(
                    Share(Role.STREAM_LEAD, Decimal("0.10"), Pool.REMAINING, "Streamer split from {name}"),
                    Share(Role.VIDEO_LEAD, Decimal("0.20"), Pool.REMAINING, "Streamer split from {name}"),
                    ExecutiveShare(Pool.REMAINING, SEVENTY, "C-suite share from {name} (Streamer Team)"),
                ),
            ),
        ),
    ),
    Team.CONTENT: TeamRule(
        team=Team.CONTENT,
        variants=(
            SplitVariant(
                name="content_team_submits",
                match=Match.ON_TARGET_TEAM,
                submitter_take=Decimal("0.30"),
                shares=(
                    ExecutiveShare(Pool.AMOUNT, SEVENTY, "C-suite share from {name} (Content Team)"),
                ),
            ),
            SplitVariant(
                name="content_other_submits",
                match=Match.OTHERWISE,
                submitter_take=Decimal("0.30"),
                shares=(
                    Share(Role.CONTENT_LEAD, Decimal("0.30"), Pool.REMAINING, "Content split from {name}"),
                    ExecutiveShare(Pool.REMAINING, SEVENTY, "C-suite share from {name} (Content Team)"),
                ),
            ),
        ),
    ),
    Team.C_SUITE: TeamRule(
        team=Team.C_SUITE,
        variants=(
            SplitVariant(
                name="executive_submits",
                match=Match.ON_TARGET_TEAM,
                submitter_take=SubmitterTake.EXECUTIVE_TIER,
                shares=(
                    ExecutiveShare(
                        Pool.AMOUNT, None, "C-suite split from {name}", exclude_submitter=True
                    ),
                ),
            ),
            SplitVariant(
                name="c_suite_other_submits",
                match=Match.OTHERWISE,
                submitter_take=Decimal("0.30"),
                shares=(
                    ExecutiveShare(Pool.AMOUNT, SEVENTY, "C-suite share from {name} (C-suite target)"),
                ),
            ),
        ),
    ),
}
