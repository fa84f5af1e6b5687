"""Money helpers for payout computation."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce an input amount to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places (cents), half-up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def split(amount: Decimal | int | float | str, fraction: Decimal | str) -> Decimal:
    """Return `fraction` of `amount`, rounded to cents.

    Every payout is computed independently from its own pool and rounded on
    its own. Remainders are never redistributed, so the lines of one event
    may drift from the event amount by up to half a cent per line.
    """
    return round_to_cents(to_decimal(amount) * to_decimal(fraction))
