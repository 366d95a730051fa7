# blueprints/planner/services.py
"""Модель чтения поверх филиалов, расписания по дням, преподавателей и журнала.

Все функции чистые: принимают загруженный Roster и возвращают простые
значения. Строки расписания и журнала, ссылающиеся на удалённые записи,
пропускаются без ошибок.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional

from errors import ValidationError
from models import DAYS_OF_WEEK
from .conflicts import detect_conflicts
from .records import BranchRow, TeacherRow
from .roster import Roster
from .weeks import current_week, day_name, normalize_day, week_start

SEARCH_TYPES = ("teacher", "branch", "day")


@dataclass
class GridRow:
    schedule_id: str
    day_of_week: str
    branch: BranchRow
    teacher: Optional[TeacherRow] = None
    assignment_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "schedule_id": self.schedule_id,
            "day_of_week": self.day_of_week,
            "branch": self.branch.to_dict(),
            "teacher": ({"id": self.teacher.id, "name": self.teacher.name} if self.teacher else None),
            "assignment_id": self.assignment_id,
        }


Grid = Dict[str, List[GridRow]]


def _rows_for_day(roster: Roster, day: str, week: str) -> List[GridRow]:
    rows = []
    for sched in roster.schedules_for_day(day):
        branch = roster.branches.get(sched.branch_id)
        if branch is None:
            continue
        a = roster.assignment_for(branch.id, day, week)
        teacher = roster.teachers.get(a.teacher_id) if a else None
        rows.append(GridRow(
            schedule_id=sched.id, day_of_week=day, branch=branch,
            teacher=teacher, assignment_id=(a.id if teacher else None),
        ))
    return rows


def schedule_grid(roster: Roster, week: str | date) -> Grid:
    """Все дни недели с понедельника: филиалы, работающие в этот день, и их преподаватель."""
    week = week_start(week)
    return {day: _rows_for_day(roster, day, week) for day in DAYS_OF_WEEK}


def available_branches_for_day(roster: Roster, day: str, week: str | date | None = None) -> List[BranchRow]:
    day = normalize_day(day)
    week = week_start(week) if week else current_week()
    claimed = {a.branch_id for a in roster.assignments_on(day, week) if not roster.is_stale(a)}
    scheduled = {s.branch_id for s in roster.schedules_for_day(day)}
    return [b for b in roster.sorted_branches() if b.id in scheduled and b.id not in claimed]


def available_teachers_for_day(roster: Roster, day: str, week: str | date, query: str = "") -> List[TeacherRow]:
    day = normalize_day(day)
    week = week_start(week)
    busy = {a.teacher_id for a in roster.assignments_on(day, week) if not roster.is_stale(a)}
    q = (query or "").strip().lower()
    return [t for t in roster.sorted_teachers() if t.id not in busy and q in t.name.lower()]


def search_grid(grid: Grid, query: str, search_type: str = "teacher") -> Grid:
    """Оставляет дни, где есть совпадение с ``query``. Строки и порядок дней не трогаем."""
    if search_type not in SEARCH_TYPES:
        raise ValidationError(f"Unknown search type {search_type!r}", details={"field": "type"})
    q = (query or "").strip().lower()
    if not q:
        return grid
    out: Grid = {}
    for day, rows in grid.items():
        if not rows:
            continue
        if search_type == "teacher":
            hit = any(r.teacher is not None and q in r.teacher.name.lower() for r in rows)
        elif search_type == "branch":
            hit = any(q in r.branch.name.lower() for r in rows)
        else:
            hit = q in day.lower()
        if hit:
            out[day] = rows
    return out


def grid_to_dict(grid: Grid) -> dict:
    return {day: [r.to_dict() for r in rows] for day, rows in grid.items()}


def overview(roster: Roster, week: str | date) -> dict:
    week = week_start(week)
    grid = schedule_grid(roster, week)
    rows = [r for day_rows in grid.values() for r in day_rows]
    return {
        "week_start_date": week,
        "branches": len(roster.branches),
        "teachers": len(roster.teachers),
        "scheduled_branches": len(rows),
        "assignments": sum(1 for r in rows if r.teacher is not None),
        "open_slots": sum(1 for r in rows if r.teacher is None),
        "conflicts": len(detect_conflicts(roster, week)),
    }


def month_calendar(roster: Roster, year: int, month: int) -> List[dict]:
    """42 ячейки (шесть недель с воскресенья), покрывающие ``month``."""
    if not 1 <= month <= 12:
        raise ValidationError("month must be 1..12", details={"field": "month"})
    try:
        first = date(year, month, 1)
        start = first - timedelta(days=(first.weekday() + 1) % 7)
        days = [start + timedelta(days=offset) for offset in range(42)]
    except (ValueError, OverflowError):
        # сетка выходит за пределы date (год 1 или 9999)
        raise ValidationError("year out of range", details={"field": "year"}) from None
    grids: Dict[str, Grid] = {}
    cells = []
    for d in days:
        week = week_start(d)
        if week not in grids:
            grids[week] = schedule_grid(roster, week)
        day = day_name(d)
        cells.append({
            "date": d.isoformat(),
            "in_month": d.month == month,
            "day_of_week": day,
            "rows": [r.to_dict() for r in grids[week][day]],
        })
    return cells
