# blueprints/assignments/services.py
"""Недельный журнал назначений преподавателей.

Строка журнала ставит одного преподавателя в один филиал на один день недели,
неделя начинается с воскресенья. Для каждой недели:

* в слоте (филиал, день) не больше одного преподавателя;
* у преподавателя не больше одного слота в день, в каком бы филиале ни было.

Проверки идут по загруженному Roster в фиксированном порядке (сначала слот,
потом преподаватель). Те же пары уникальны и в БД, поэтому проигравший гонку
получает то же нарушение правила, а не дубликат строки. Строки, оставшиеся
от удалённых преподавателей или филиалов, ничего не занимают и удаляются при
следующей записи в их слот.
"""
from __future__ import annotations
import logging
from datetime import date, datetime

from flask import current_app, has_app_context

from errors import ConstraintFailure, NotFound, RuleViolation, ValidationError
from models import Teacher, WeeklyAssignment
from blueprints.planner.records import AssignmentRow
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster
from blueprints.planner.weeks import normalize_day, week_start

log = logging.getLogger(__name__)


def slot_taken_message(day: str) -> str:
    return f"This branch is already assigned to a teacher for {day} in this week"


def teacher_booked_message(day: str) -> str:
    return f"This teacher is already assigned to a branch for {day}"


def _require_scheduled() -> bool:
    if has_app_context():
        return bool(current_app.config.get("PLANNER_REQUIRE_SCHEDULED_BRANCH", True))
    return True


def _raise_for_taken_slot(repo: Repository, teacher_id: str, branch_id: str, day: str, week: str) -> None:
    if repo.first(WeeklyAssignment, branch_id=branch_id, day_of_week=day, week_start_date=week):
        raise RuleViolation(slot_taken_message(day))
    if repo.first(WeeklyAssignment, teacher_id=teacher_id, day_of_week=day, week_start_date=week):
        raise RuleViolation(teacher_booked_message(day))


def assign_teacher(roster: Roster, teacher_id: str, branch_id: str, day: str,
                   reference: date | datetime | str, *, repo: Repository | None = None) -> AssignmentRow:
    repo = repo or Repository()
    day = normalize_day(day)
    teacher = roster.teachers.get(teacher_id)
    if teacher is None:
        raise ValidationError(f"Unknown teacher {teacher_id}", details={"field": "teacher_id"})
    if branch_id not in roster.branches:
        raise ValidationError(f"Unknown branch {branch_id}", details={"field": "branch_id"})

    week = week_start(reference)
    details = {"branch_id": branch_id, "teacher_id": teacher_id, "day_of_week": day, "week_start_date": week}

    stale = []
    taken = roster.assignment_for(branch_id, day, week)
    if taken is not None and roster.is_stale(taken):
        stale.append(taken)
        taken = None
    if taken is not None:
        log.info("slot already taken", extra={"event": "assignment.rejected", **details})
        raise RuleViolation(slot_taken_message(day), details={"assignment_id": taken.id})
    booked = []
    for a in roster.teacher_assignments_on(teacher_id, day, week):
        (stale if roster.is_stale(a) else booked).append(a)
    if booked:
        log.info("teacher already booked", extra={"event": "assignment.rejected", **details})
        raise RuleViolation(teacher_booked_message(day), details={"assignment_id": booked[0].id})

    if _require_scheduled():
        sched = roster.schedule_for_branch(branch_id)
        if sched is None or sched.day_of_week != day:
            raise RuleViolation(f"This branch is not scheduled to operate on {day}")

    try:
        with repo.transaction():
            for a in stale:
                repo.delete(WeeklyAssignment, a.id)
            row = repo.insert(WeeklyAssignment, teacher_id=teacher_id, branch_id=branch_id,
                              day_of_week=day, week_start_date=week)
            updated = repo.update(Teacher, teacher_id, branch_id=branch_id, assigned_day=day)
    except ConstraintFailure:
        # другой писатель успел между проверками и вставкой
        _raise_for_taken_slot(repo, teacher_id, branch_id, day, week)
        raise

    for a in stale:
        roster.drop_assignment(a.id)
    roster.put_assignment(row)
    roster.put_teacher(updated)
    if stale:
        log.info("stale ledger rows dropped", extra={"event": "assignment.cleanup", "removed": len(stale), **details})
    log.info("teacher assigned", extra={"event": "assignment.add", **details})
    return row


def unassign_slot(roster: Roster, teacher_id: str, branch_id: str, day: str,
                  reference: date | datetime | str, *, repo: Repository | None = None) -> None:
    """Удаляет единственную строку журнала, ставящую ``teacher_id`` в слот."""
    repo = repo or Repository()
    day = normalize_day(day)
    week = week_start(reference)
    row = roster.assignment_for(branch_id, day, week)
    if row is None or row.teacher_id != teacher_id:
        raise NotFound("No such assignment for this teacher, branch, day and week")

    teacher = roster.teachers.get(teacher_id)
    rest = [a for a in roster.assignments_for_teacher(teacher_id) if a.id != row.id]
    with repo.transaction():
        repo.delete(WeeklyAssignment, row.id)
        updated = None
        if teacher is not None and teacher.branch_id == branch_id and teacher.assigned_day == day:
            latest = rest[-1] if rest else None
            updated = repo.update(
                Teacher, teacher_id,
                branch_id=latest.branch_id if latest else None,
                assigned_day=latest.day_of_week if latest else None,
            )
    roster.drop_assignment(row.id)
    if updated is not None:
        roster.put_teacher(updated)
    log.info("teacher unassigned", extra={"event": "assignment.remove", "teacher_id": teacher_id,
                                          "branch_id": branch_id, "day_of_week": day, "week_start_date": week})


def unassign_teacher(roster: Roster, teacher_id: str, *, repo: Repository | None = None) -> int:
    """Удаляет все строки журнала преподавателя по всем филиалам, дням и неделям.

    Возвращает число удалённых строк.
    """
    repo = repo or Repository()
    if teacher_id not in roster.teachers:
        raise NotFound(f"Teacher {teacher_id} not found")
    held = roster.assignments_for_teacher(teacher_id)
    with repo.transaction():
        for a in held:
            repo.delete(WeeklyAssignment, a.id)
        updated = repo.update(Teacher, teacher_id, branch_id=None, assigned_day=None)
    for a in held:
        roster.drop_assignment(a.id)
    roster.put_teacher(updated)
    log.info("teacher fully unassigned", extra={"event": "assignment.clear", "teacher_id": teacher_id,
                                                "removed": len(held)})
    return len(held)


def assignment_for(roster: Roster, branch_id: str, day: str,
                   reference: date | datetime | str) -> AssignmentRow | None:
    return roster.assignment_for(branch_id, normalize_day(day), week_start(reference))


def assignments_for_teacher(roster: Roster, teacher_id: str) -> list[AssignmentRow]:
    return roster.assignments_for_teacher(teacher_id)
