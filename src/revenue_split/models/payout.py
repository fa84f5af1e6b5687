"""Payout line ("card") model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from revenue_split.models.base import Base, TimestampMixin, new_id


class PayoutLine(Base, TimestampMixin):
    """One beneficiary entitlement from one revenue event.

    Append-only: rows are created by the splitting engine and never updated
    or deleted by this service. Employee fields are snapshotted at creation.
    Rows written before period keys existed have `bi_week_key` NULL and are
    matched to periods through `bi_week_start`.
    """

    __tablename__ = "payout_line"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    employee_id: Mapped[str] = mapped_column(String(36), nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    job_title: Mapped[str] = mapped_column(String, nullable=False, default="")
    team: Mapped[str] = mapped_column(String, nullable=False, default="")
    for_team: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    revenue: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    take_home: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    bi_week_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
    bi_week_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
    bi_week_key: Mapped[str | None] = mapped_column(String(10), nullable=True)
    event_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    line_no: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("payout_line_bi_week_key_idx", "bi_week_key"),
        Index("payout_line_employee_idx", "employee_id"),
        Index("payout_line_event_idx", "event_id", "line_no"),
    )
