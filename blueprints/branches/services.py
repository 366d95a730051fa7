# blueprints/branches/services.py
from __future__ import annotations
import logging

from errors import NotFound, RuleViolation, ValidationError
from models import Branch, Teacher, WeeklyAssignment
from blueprints.planner.records import BranchRow
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster

log = logging.getLogger(__name__)

DUPLICATE_NAME = "A branch with this name already exists"


def _check_name(roster: Roster, name: str, exclude_id: str | None = None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Branch name is required", details={"field": "name"})
    if roster.branch_name_taken(name, exclude_id=exclude_id):
        raise ValidationError(DUPLICATE_NAME, details={"field": "name"})
    return name


def add_branch(roster: Roster, name: str, color: str, *, repo: Repository | None = None) -> BranchRow:
    repo = repo or Repository()
    name = _check_name(roster, name)
    with repo.transaction():
        row = repo.insert(Branch, name=name, color=color)
    roster.put_branch(row)
    log.info("branch added", extra={"event": "branch.add", "branch_id": row.id})
    return row


def update_branch(roster: Roster, branch_id: str, name: str, color: str,
                  *, repo: Repository | None = None) -> BranchRow:
    repo = repo or Repository()
    if branch_id not in roster.branches:
        raise NotFound(f"Branch {branch_id} not found")
    name = _check_name(roster, name, exclude_id=branch_id)
    with repo.transaction():
        row = repo.update(Branch, branch_id, name=name, color=color)
    roster.put_branch(row)
    log.info("branch updated", extra={"event": "branch.update", "branch_id": row.id})
    return row


def remove_branch(roster: Roster, branch_id: str, *, repo: Repository | None = None) -> None:
    """Удаляет филиал, который не стоит в расписании ни на один день.

    В той же транзакции удаляются строки журнала по филиалу, а указатели
    преподавателей на него переводятся на их последнее оставшееся назначение.
    """
    repo = repo or Repository()
    branch = roster.branches.get(branch_id)
    if branch is None:
        raise NotFound(f"Branch {branch_id} not found")
    sched = roster.schedule_for_branch(branch_id)
    if sched is not None:
        raise RuleViolation(
            f"Branch {branch.name} is still scheduled on {sched.day_of_week}. "
            "Unassign it from the day before deleting it.",
            details={"schedule_id": sched.id},
        )
    held = roster.assignments_for_branch(branch_id)
    pointing = [t for t in roster.teachers.values() if t.branch_id == branch_id]
    released = []
    with repo.transaction():
        for a in held:
            repo.delete(WeeklyAssignment, a.id)
        for t in pointing:
            rest = [a for a in roster.assignments_for_teacher(t.id) if a.branch_id != branch_id]
            latest = rest[-1] if rest else None
            released.append(repo.update(
                Teacher, t.id,
                branch_id=latest.branch_id if latest else None,
                assigned_day=latest.day_of_week if latest else None,
            ))
        repo.delete(Branch, branch_id)
    for a in held:
        roster.drop_assignment(a.id)
    for t in released:
        roster.put_teacher(t)
    roster.drop_branch(branch_id)
    log.info("branch removed", extra={"event": "branch.remove", "branch_id": branch_id, "removed": len(held)})
