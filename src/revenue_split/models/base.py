"""Declarative base and shared columns."""

from __future__ import annotations

import secrets
import time
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

_last_ns = 0


def new_id() -> str:
    """Record id that sorts in creation order within this process.

    A nanosecond clock prefix, bumped to stay strictly increasing, followed
    by random bits.
    """
    global _last_ns
    now = max(time.time_ns(), _last_ns + 1)
    _last_ns = now
    return f"{now:016x}{secrets.token_hex(8)}"


class Base(DeclarativeBase):
    """Base class for all ORM models.

    Money columns are fixed-point with two decimal places.
    """

    type_annotation_map = {
        datetime: DateTime(timezone=True),
        Decimal: Numeric(12, 2),
    }


class TimestampMixin:
    """Store-assigned creation timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
