"""Employee roster model."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from revenue_split.models.base import Base, TimestampMixin, new_id
from revenue_split.splitting.types import EmployeeRecord, Role


class Employee(Base, TimestampMixin):
    """Employee record. Maintained outside this service; read as a snapshot."""

    __tablename__ = "employee"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String, nullable=False)
    job_title: Mapped[str] = mapped_column(String, nullable=False, default="")
    team: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str | None] = mapped_column(String, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # Directory order

    __table_args__ = (
        CheckConstraint(
            "team IN ('Sales Team', 'Streamer Team', 'Content Team', 'C-suite')",
            name="employee_team_check",
        ),
    )

    def to_record(self) -> EmployeeRecord:
        """Immutable snapshot used by the splitting engine."""
        return EmployeeRecord(
            id=self.id,
            name=self.name,
            job_title=self.job_title or "",
            team=self.team,
            role=Role(self.role) if self.role else None,
        )
