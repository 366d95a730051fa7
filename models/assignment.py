from __future__ import annotations
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db
from ._common import new_id, utcnow

class WeeklyAssignment(db.Model):
    __tablename__ = "weekly_teacher_assignments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    teacher_id: Mapped[str] = mapped_column(ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False)
    branch_id: Mapped[str] = mapped_column(ForeignKey("branches.id", ondelete="CASCADE"), nullable=False)
    day_of_week: Mapped[str] = mapped_column(String(16), nullable=False)
    # ISO-дата воскресенья, открывающего неделю
    week_start_date: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("branch_id", "day_of_week", "week_start_date", name="uq_assignment_branch_slot"),
        UniqueConstraint("teacher_id", "day_of_week", "week_start_date", name="uq_assignment_teacher_day"),
        Index("ix_assignment_teacher", "teacher_id"),
    )
