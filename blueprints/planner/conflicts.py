# blueprints/planner/conflicts.py
from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, asdict

from errors import ValidationError
from models import DAYS_OF_WEEK
from .records import AssignmentRow, TeacherRow
from .roster import Roster
from .weeks import span_hours

log = logging.getLogger(__name__)


class ConflictType(str, enum.Enum):
    DOUBLE_BOOKING = "double_booking"
    AVAILABILITY = "availability"
    MAX_HOURS = "max_hours"


@dataclass
class ScheduleConflict:
    id: str
    type: str
    teacher_id: str
    slot_id: str
    description: str

    def to_dict(self) -> dict:
        return asdict(self)


def _conflict(kind: ConflictType, teacher: TeacherRow, slot: AssignmentRow, description: str,
              suffix: str = "") -> ScheduleConflict:
    cid = f"{kind.value}:{teacher.id}:{slot.id}" + (f":{suffix}" if suffix else "")
    return ScheduleConflict(id=cid, type=kind.value, teacher_id=teacher.id, slot_id=slot.id,
                            description=description)


def _rows_by_day(roster: Roster, teacher_id: str, week: str) -> dict[str, list[AssignmentRow]]:
    out: dict[str, list[AssignmentRow]] = {d: [] for d in DAYS_OF_WEEK}
    for a in roster.assignments_for_teacher(teacher_id):
        # строки по удалённым филиалам не считаем
        if a.week_start_date != week or a.branch_id not in roster.branches:
            continue
        if a.day_of_week in out:
            out[a.day_of_week].append(a)
    return out


def check_double_booking(teacher: TeacherRow, by_day: dict[str, list[AssignmentRow]]) -> list[ScheduleConflict]:
    errors = []
    for day, rows in by_day.items():
        for extra in rows[1:]:
            errors.append(_conflict(
                ConflictType.DOUBLE_BOOKING, teacher, extra,
                f"{teacher.name} holds {len(rows)} assignments on {day}",
            ))
    return errors


def check_availability(teacher: TeacherRow, by_day: dict[str, list[AssignmentRow]]) -> list[ScheduleConflict]:
    errors = []
    available = set(teacher.available_days or ())
    for day, rows in by_day.items():
        if day in available:
            continue
        for a in rows:
            errors.append(_conflict(
                ConflictType.AVAILABILITY, teacher, a,
                f"{teacher.name} is not available on {day}",
            ))
    return errors


def check_max_hours(teacher: TeacherRow, by_day: dict[str, list[AssignmentRow]]) -> list[ScheduleConflict]:
    """Каждый назначенный день стоит преподавателю длительность его рабочих часов."""
    try:
        per_slot = span_hours(teacher.work_start, teacher.work_end)
    except ValidationError:
        log.warning("teacher %s has unreadable working hours, skipping hour limits", teacher.id)
        return []
    errors = []
    week_total = 0.0
    week_flagged = False
    for day in DAYS_OF_WEEK:
        rows = by_day.get(day) or []
        if not rows:
            continue
        day_total = per_slot * len(rows)
        if day_total > teacher.max_hours_per_day:
            errors.append(_conflict(
                ConflictType.MAX_HOURS, teacher, rows[-1],
                f"{teacher.name} is booked {day_total:g}h on {day}, limit {teacher.max_hours_per_day}h",
                suffix="day",
            ))
        week_total += day_total
        if not week_flagged and week_total > teacher.max_hours_per_week:
            week_flagged = True
            errors.append(_conflict(
                ConflictType.MAX_HOURS, teacher, rows[-1],
                f"{teacher.name} reaches {week_total:g}h this week by {day}, "
                f"limit {teacher.max_hours_per_week}h",
                suffix="week",
            ))
    return errors


def detect_conflicts(roster: Roster, week: str) -> list[ScheduleConflict]:
    """Все перегрузки за неделю. Считаются на лету, не хранятся."""
    out: list[ScheduleConflict] = []
    for teacher in roster.sorted_teachers():
        by_day = _rows_by_day(roster, teacher.id, week)
        if not any(by_day.values()):
            continue
        out += check_double_booking(teacher, by_day)
        out += check_availability(teacher, by_day)
        out += check_max_hours(teacher, by_day)
    return out
