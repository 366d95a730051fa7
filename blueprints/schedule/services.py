# blueprints/schedule/services.py
from __future__ import annotations
import logging

from errors import NotFound, RuleViolation, ValidationError
from models import BranchSchedule
from blueprints.planner.records import BranchRow, ScheduleRow
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster
from blueprints.planner.weeks import normalize_day

log = logging.getLogger(__name__)

ALREADY_SCHEDULED = "This branch is already assigned to a day. Each branch can only be assigned once."


def assign_branch_to_day(roster: Roster, branch_id: str, day: str,
                         *, repo: Repository | None = None) -> ScheduleRow:
    repo = repo or Repository()
    day = normalize_day(day)
    if branch_id not in roster.branches:
        raise ValidationError(f"Unknown branch {branch_id}", details={"field": "branch_id"})
    # у филиала одно расписание, в какой бы день ни было
    existing = roster.schedule_for_branch(branch_id)
    if existing is not None:
        raise RuleViolation(ALREADY_SCHEDULED, details={"schedule_id": existing.id,
                                                        "day_of_week": existing.day_of_week})
    with repo.transaction():
        row = repo.insert(BranchSchedule, branch_id=branch_id, day_of_week=day, is_active=True)
    roster.put_schedule(row)
    log.info("branch scheduled", extra={"event": "schedule.assign", "branch_id": branch_id, "day": day})
    return row


def unassign_branch_schedule(roster: Roster, schedule_id: str, *, repo: Repository | None = None) -> None:
    """Удаляет строку расписания. Строки журнала по этому филиалу не трогаем."""
    repo = repo or Repository()
    if schedule_id not in roster.schedules:
        raise NotFound(f"Branch schedule {schedule_id} not found")
    with repo.transaction():
        repo.delete(BranchSchedule, schedule_id)
    roster.drop_schedule(schedule_id)
    log.info("branch unscheduled", extra={"event": "schedule.unassign", "schedule_id": schedule_id})


def schedules_for_day(roster: Roster, day: str) -> list[ScheduleRow]:
    return roster.schedules_for_day(normalize_day(day))


def branches_available_for_assignment(roster: Roster) -> list[BranchRow]:
    return [b for b in roster.sorted_branches() if roster.schedule_for_branch(b.id) is None]
