# blueprints/planner/roster.py
"""Проекция четырёх таблиц в памяти.

Roster грузится из репозитория упорядоченными полными чтениями, отвечает на
все запросы проверок по словарным индексам и меняется только после того, как
БД подтвердила запись.
"""
from __future__ import annotations
from collections import defaultdict
from typing import Iterable, TYPE_CHECKING

from .records import AssignmentRow, BranchRow, ScheduleRow, TeacherRow

if TYPE_CHECKING:
    from .repository import Repository


def _without(rows: list, row_id: str) -> list:
    return [r for r in rows if r.id != row_id]


class Roster:
    def __init__(self):
        self.branches: dict[str, BranchRow] = {}
        self.teachers: dict[str, TeacherRow] = {}
        self.schedules: dict[str, ScheduleRow] = {}
        self.assignments: dict[str, AssignmentRow] = {}

        self._branch_names: dict[str, str] = {}
        self._teacher_names: dict[str, str] = {}
        self._schedule_by_branch: dict[str, ScheduleRow] = {}
        self._schedules_by_day: dict[str, list[ScheduleRow]] = defaultdict(list)
        self._slot: dict[tuple[str, str, str], AssignmentRow] = {}
        self._teacher_day: dict[tuple[str, str, str], list[AssignmentRow]] = defaultdict(list)
        self._by_teacher: dict[str, list[AssignmentRow]] = defaultdict(list)
        self._by_day_week: dict[tuple[str, str], list[AssignmentRow]] = defaultdict(list)

    @classmethod
    def from_rows(cls, *, branches: Iterable[BranchRow] = (), schedules: Iterable[ScheduleRow] = (),
                  teachers: Iterable[TeacherRow] = (), assignments: Iterable[AssignmentRow] = ()) -> "Roster":
        roster = cls()
        for b in branches:
            roster.put_branch(b)
        for t in teachers:
            roster.put_teacher(t)
        for s in schedules:
            roster.put_schedule(s)
        for a in assignments:
            roster.put_assignment(a)
        return roster

    @classmethod
    def load(cls, repo: "Repository") -> "Roster":
        return cls.from_rows(
            branches=repo.list_branches(),
            schedules=repo.list_schedules(),
            teachers=repo.list_teachers(),
            assignments=repo.list_assignments(),
        )

    # ---------- филиалы ----------
    def put_branch(self, row: BranchRow) -> None:
        old = self.branches.get(row.id)
        if old is not None and self._branch_names.get(old.name.lower()) == old.id:
            del self._branch_names[old.name.lower()]
        self.branches[row.id] = row
        self._branch_names[row.name.lower()] = row.id

    def drop_branch(self, branch_id: str) -> None:
        row = self.branches.pop(branch_id, None)
        if row is not None and self._branch_names.get(row.name.lower()) == branch_id:
            del self._branch_names[row.name.lower()]

    def branch_name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        owner = self._branch_names.get(name.strip().lower())
        return owner is not None and owner != exclude_id

    def sorted_branches(self) -> list[BranchRow]:
        return sorted(self.branches.values(), key=lambda b: b.name)

    # ---------- преподаватели ----------
    def put_teacher(self, row: TeacherRow) -> None:
        old = self.teachers.get(row.id)
        if old is not None and self._teacher_names.get(old.name.lower()) == old.id:
            del self._teacher_names[old.name.lower()]
        self.teachers[row.id] = row
        self._teacher_names[row.name.lower()] = row.id

    def drop_teacher(self, teacher_id: str) -> None:
        row = self.teachers.pop(teacher_id, None)
        if row is not None and self._teacher_names.get(row.name.lower()) == teacher_id:
            del self._teacher_names[row.name.lower()]

    def teacher_name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        owner = self._teacher_names.get(name.strip().lower())
        return owner is not None and owner != exclude_id

    def sorted_teachers(self) -> list[TeacherRow]:
        return sorted(self.teachers.values(), key=lambda t: t.name)

    # ---------- расписание филиалов по дням ----------
    def put_schedule(self, row: ScheduleRow) -> None:
        self.drop_schedule(row.id)
        self.schedules[row.id] = row
        self._schedule_by_branch[row.branch_id] = row
        self._schedules_by_day[row.day_of_week].append(row)

    def drop_schedule(self, schedule_id: str) -> None:
        row = self.schedules.pop(schedule_id, None)
        if row is None:
            return
        if self._schedule_by_branch.get(row.branch_id) is row:
            del self._schedule_by_branch[row.branch_id]
        self._schedules_by_day[row.day_of_week] = _without(self._schedules_by_day[row.day_of_week], schedule_id)

    def schedule_for_branch(self, branch_id: str) -> ScheduleRow | None:
        return self._schedule_by_branch.get(branch_id)

    def schedules_for_day(self, day: str) -> list[ScheduleRow]:
        return list(self._schedules_by_day.get(day, ()))

    # ---------- недельный журнал назначений ----------
    def put_assignment(self, row: AssignmentRow) -> None:
        self.drop_assignment(row.id)
        self.assignments[row.id] = row
        self._slot[row.slot_key] = row
        self._teacher_day[row.teacher_day_key].append(row)
        self._by_teacher[row.teacher_id].append(row)
        self._by_day_week[(row.day_of_week, row.week_start_date)].append(row)

    def drop_assignment(self, assignment_id: str) -> None:
        row = self.assignments.pop(assignment_id, None)
        if row is None:
            return
        if self._slot.get(row.slot_key) is row:
            del self._slot[row.slot_key]
        self._teacher_day[row.teacher_day_key] = _without(self._teacher_day[row.teacher_day_key], row.id)
        self._by_teacher[row.teacher_id] = _without(self._by_teacher[row.teacher_id], row.id)
        key = (row.day_of_week, row.week_start_date)
        self._by_day_week[key] = _without(self._by_day_week[key], row.id)

    def assignment_for(self, branch_id: str, day: str, week: str) -> AssignmentRow | None:
        return self._slot.get((branch_id, day, week))

    def teacher_assignments_on(self, teacher_id: str, day: str, week: str) -> list[AssignmentRow]:
        return list(self._teacher_day.get((teacher_id, day, week), ()))

    def assignments_for_teacher(self, teacher_id: str) -> list[AssignmentRow]:
        return list(self._by_teacher.get(teacher_id, ()))

    def assignments_on(self, day: str, week: str) -> list[AssignmentRow]:
        return list(self._by_day_week.get((day, week), ()))

    def assignments_for_branch(self, branch_id: str) -> list[AssignmentRow]:
        return [a for a in self.assignments.values() if a.branch_id == branch_id]

    def is_stale(self, row: AssignmentRow) -> bool:
        # строка журнала ссылается на удалённого преподавателя или филиал
        return row.teacher_id not in self.teachers or row.branch_id not in self.branches

    def teacher_dict(self, teacher: TeacherRow) -> dict:
        return teacher.to_dict(self.assignments_for_teacher(teacher.id))
