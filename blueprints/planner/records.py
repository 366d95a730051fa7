# blueprints/planner/records.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable

from models import DAYS_OF_WEEK, Branch, BranchSchedule, Teacher, WeeklyAssignment


@dataclass
class BranchRow:
    id: str
    name: str
    color: str

    @classmethod
    def from_model(cls, m: Branch) -> "BranchRow":
        return cls(id=m.id, name=m.name, color=m.color)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}


@dataclass
class ScheduleRow:
    id: str
    branch_id: str
    day_of_week: str
    is_active: bool = True

    @classmethod
    def from_model(cls, m: BranchSchedule) -> "ScheduleRow":
        return cls(id=m.id, branch_id=m.branch_id, day_of_week=m.day_of_week, is_active=bool(m.is_active))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "branch_id": self.branch_id,
                "day_of_week": self.day_of_week, "is_active": self.is_active}


@dataclass
class AssignmentRow:
    id: str
    teacher_id: str
    branch_id: str
    day_of_week: str
    week_start_date: str

    @classmethod
    def from_model(cls, m: WeeklyAssignment) -> "AssignmentRow":
        return cls(id=m.id, teacher_id=m.teacher_id, branch_id=m.branch_id,
                   day_of_week=m.day_of_week, week_start_date=m.week_start_date)

    @property
    def slot_key(self) -> tuple[str, str, str]:
        return (self.branch_id, self.day_of_week, self.week_start_date)

    @property
    def teacher_day_key(self) -> tuple[str, str, str]:
        return (self.teacher_id, self.day_of_week, self.week_start_date)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "teacher_id": self.teacher_id, "branch_id": self.branch_id,
                "day_of_week": self.day_of_week, "week_start_date": self.week_start_date}


@dataclass
class TeacherRow:
    id: str
    name: str
    gender: str = "male"
    mobile: str | None = None
    description: str | None = None
    specialties: list[str] = field(default_factory=list)
    work_start: str = "09:00"
    work_end: str = "17:00"
    max_hours_per_day: int = 8
    max_hours_per_week: int = 40
    available_days: list[str] = field(default_factory=lambda: list(DAYS_OF_WEEK[:5]))
    branch_id: str | None = None
    assigned_day: str | None = None

    @classmethod
    def from_model(cls, m: Teacher) -> "TeacherRow":
        return cls(
            id=m.id, name=m.name, gender=m.gender, mobile=m.mobile, description=m.description,
            specialties=list(m.specialties or []),
            work_start=m.work_start, work_end=m.work_end,
            max_hours_per_day=m.max_hours_per_day, max_hours_per_week=m.max_hours_per_week,
            available_days=list(m.available_days or []),
            branch_id=m.branch_id, assigned_day=m.assigned_day,
        )

    def to_dict(self, assignments: Iterable[AssignmentRow] = ()) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "mobile": self.mobile,
            "gender": self.gender,
            "description": self.description,
            "specialties": list(self.specialties),
            "working_hours": {"start": self.work_start, "end": self.work_end},
            "max_hours_per_day": self.max_hours_per_day,
            "max_hours_per_week": self.max_hours_per_week,
            "available_days": list(self.available_days),
            "branch_id": self.branch_id,
            "assigned_day": self.assigned_day,
            "weekly_assignments": [
                {"branch_id": a.branch_id, "day_of_week": a.day_of_week, "week_start_date": a.week_start_date}
                for a in assignments
            ],
        }


ROW_TYPES = {
    Branch: BranchRow,
    BranchSchedule: ScheduleRow,
    Teacher: TeacherRow,
    WeeklyAssignment: AssignmentRow,
}
