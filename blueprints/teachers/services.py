# blueprints/teachers/services.py
from __future__ import annotations
import logging

from errors import NotFound, ValidationError
from models import Teacher, WeeklyAssignment
from blueprints.planner.records import TeacherRow
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster
from .schemas import TeacherIn

log = logging.getLogger(__name__)

DUPLICATE_NAME = "A teacher with this name already exists"


def _check_name(roster: Roster, name: str, exclude_id: str | None = None) -> None:
    if roster.teacher_name_taken(name, exclude_id=exclude_id):
        raise ValidationError(DUPLICATE_NAME, details={"field": "name"})


def add_teacher(roster: Roster, data: TeacherIn, *, repo: Repository | None = None) -> TeacherRow:
    repo = repo or Repository()
    _check_name(roster, data.name)
    with repo.transaction():
        row = repo.insert(Teacher, **data.columns())
    roster.put_teacher(row)
    log.info("teacher added", extra={"event": "teacher.add", "teacher_id": row.id})
    return row


def update_teacher(roster: Roster, teacher_id: str, data: TeacherIn,
                   *, repo: Repository | None = None) -> TeacherRow:
    repo = repo or Repository()
    if teacher_id not in roster.teachers:
        raise NotFound(f"Teacher {teacher_id} not found")
    _check_name(roster, data.name, exclude_id=teacher_id)
    with repo.transaction():
        row = repo.update(Teacher, teacher_id, **data.columns())
    roster.put_teacher(row)
    log.info("teacher updated", extra={"event": "teacher.update", "teacher_id": row.id})
    return row


def remove_teacher(roster: Roster, teacher_id: str, *, repo: Repository | None = None) -> None:
    """Удаляет преподавателя вместе со всеми его строками журнала."""
    repo = repo or Repository()
    if teacher_id not in roster.teachers:
        raise NotFound(f"Teacher {teacher_id} not found")
    held = roster.assignments_for_teacher(teacher_id)
    with repo.transaction():
        for a in held:
            repo.delete(WeeklyAssignment, a.id)
        repo.delete(Teacher, teacher_id)
    for a in held:
        roster.drop_assignment(a.id)
    roster.drop_teacher(teacher_id)
    log.info("teacher removed", extra={"event": "teacher.remove", "teacher_id": teacher_id})
