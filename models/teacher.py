from __future__ import annotations
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db
from ._common import DAYS_OF_WEEK, new_id, utcnow

class Teacher(db.Model):
    __tablename__ = "teachers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    mobile: Mapped[str | None] = mapped_column(String(32))
    gender: Mapped[str] = mapped_column(String(16), nullable=False, default="male")
    description: Mapped[str | None] = mapped_column(Text)
    specialties: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    work_start: Mapped[str] = mapped_column(String(5), nullable=False, default="09:00")
    work_end: Mapped[str] = mapped_column(String(5), nullable=False, default="17:00")
    max_hours_per_day: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
    max_hours_per_week: Mapped[int] = mapped_column(Integer, nullable=False, default=40)
    available_days: Mapped[list] = mapped_column(JSON, nullable=False, default=lambda: list(DAYS_OF_WEEK[:5]))
    # денормализованный указатель на последнее назначение
    branch_id: Mapped[str | None] = mapped_column(ForeignKey("branches.id", ondelete="SET NULL"))
    assigned_day: Mapped[str | None] = mapped_column(String(16))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Teacher {self.name}>"
