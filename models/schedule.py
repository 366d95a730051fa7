from __future__ import annotations
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db
from ._common import new_id, utcnow

class BranchSchedule(db.Model):
    """Филиал, работающий в один день недели. Одна строка на филиал во всей системе."""
    __tablename__ = "branch_schedules"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    branch_id: Mapped[str] = mapped_column(ForeignKey("branches.id", ondelete="CASCADE"), nullable=False)
    day_of_week: Mapped[str] = mapped_column(String(16), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("branch_id", name="uq_branch_schedule_branch"),
        Index("ix_branch_schedule_day", "day_of_week"),
    )
