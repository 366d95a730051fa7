from __future__ import annotations
import pytest

from errors import ValidationError
from blueprints.planner.records import AssignmentRow, BranchRow, ScheduleRow, TeacherRow
from blueprints.planner.roster import Roster
from blueprints.planner import services as svc
from blueprints.planner.conflicts import detect_conflicts

WEEK = "2024-06-02"
NEXT_WEEK = "2024-06-09"

def _roster(**extra) -> Roster:
    branches = [
        BranchRow(id="n", name="North Campus", color="#3366ff"),
        BranchRow(id="m", name="Main Street", color="#ff0000"),
        BranchRow(id="s", name="South Campus", color="#00ff00"),
    ]
    schedules = [
        ScheduleRow(id="s-n", branch_id="n", day_of_week="Monday"),
        ScheduleRow(id="s-m", branch_id="m", day_of_week="Monday"),
        ScheduleRow(id="s-s", branch_id="s", day_of_week="Saturday"),
    ]
    teachers = [
        TeacherRow(id="t1", name="Alice"),
        TeacherRow(id="t2", name="Bob"),
    ]
    return Roster.from_rows(
        branches=extra.get("branches", branches),
        schedules=extra.get("schedules", schedules),
        teachers=extra.get("teachers", teachers),
        assignments=extra.get("assignments", []),
    )

def test_grid_unassigned_week():
    roster = _roster(branches=[BranchRow(id="n", name="North Campus", color="#3366ff")],
                     schedules=[ScheduleRow(id="s-n", branch_id="n", day_of_week="Monday")])
    grid = svc.schedule_grid(roster, WEEK)
    assert list(grid) == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    assert len(grid["Monday"]) == 1
    assert grid["Monday"][0].branch.name == "North Campus"
    assert grid["Monday"][0].teacher is None
    assert all(grid[d] == [] for d in grid if d != "Monday")

def test_grid_pairs_teacher_for_that_week_only():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="t1", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
    ])
    grid = svc.schedule_grid(roster, "2024-06-05")   # any day of the week
    monday = grid["Monday"]
    assert [r.branch.id for r in monday] == ["n", "m"]  # schedule insertion order
    assert monday[0].teacher.name == "Alice"
    assert monday[0].assignment_id == "a1"
    assert monday[1].teacher is None
    assert svc.schedule_grid(roster, NEXT_WEEK)["Monday"][0].teacher is None

def test_grid_drops_dangling_branch():
    roster = _roster(schedules=[
        ScheduleRow(id="s-n", branch_id="n", day_of_week="Monday"),
        ScheduleRow(id="s-gone", branch_id="deleted", day_of_week="Monday"),
    ], assignments=[
        AssignmentRow(id="a1", teacher_id="t1", branch_id="deleted", day_of_week="Monday", week_start_date=WEEK),
    ])
    grid = svc.schedule_grid(roster, WEEK)
    assert [r.branch.id for r in grid["Monday"]] == ["n"]

def test_grid_ignores_dangling_teacher():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="ghost", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
    ])
    row = svc.schedule_grid(roster, WEEK)["Monday"][0]
    assert row.teacher is None and row.assignment_id is None

def test_available_branches_for_day():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="t1", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
    ])
    assert [b.id for b in svc.available_branches_for_day(roster, "Monday", WEEK)] == ["m"]
    # another week: both free, sorted by name
    assert [b.id for b in svc.available_branches_for_day(roster, "monday", NEXT_WEEK)] == ["m", "n"]
    assert svc.available_branches_for_day(roster, "Tuesday", WEEK) == []

def test_available_teachers_for_day():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="t1", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
    ])
    assert [t.id for t in svc.available_teachers_for_day(roster, "Monday", WEEK)] == ["t2"]
    assert [t.id for t in svc.available_teachers_for_day(roster, "Tuesday", WEEK)] == ["t1", "t2"]
    assert [t.id for t in svc.available_teachers_for_day(roster, "Tuesday", WEEK, query="BO")] == ["t2"]

def test_search_grid_by_type():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="t1", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
    ])
    grid = svc.schedule_grid(roster, WEEK)

    by_teacher = svc.search_grid(grid, "alice", "teacher")
    assert list(by_teacher) == ["Monday"]
    assert by_teacher["Monday"] is grid["Monday"]

    by_branch = svc.search_grid(grid, "south", "branch")
    assert list(by_branch) == ["Saturday"]

    by_day = svc.search_grid(grid, "DAY", "day")
    assert list(by_day) == ["Monday", "Saturday"]

    assert svc.search_grid(grid, "", "teacher") is grid
    assert svc.search_grid(grid, "nobody", "teacher") == {}

def test_search_grid_unknown_type():
    with pytest.raises(ValidationError):
        svc.search_grid({}, "x", "room")

def test_conflicts_taxonomy():
    teachers = [
        TeacherRow(id="a", name="Double", max_hours_per_day=24, max_hours_per_week=100),
        TeacherRow(id="b", name="Weekday Only"),
        TeacherRow(id="c", name="Part Timer", work_start="09:00", work_end="15:00", max_hours_per_week=10),
    ]
    branches = [BranchRow(id=x, name=x.upper(), color="c") for x in ("n", "m", "s", "x", "y")]
    assignments = [
        AssignmentRow(id="a1", teacher_id="a", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
        AssignmentRow(id="a2", teacher_id="a", branch_id="m", day_of_week="Monday", week_start_date=WEEK),
        AssignmentRow(id="b1", teacher_id="b", branch_id="s", day_of_week="Saturday", week_start_date=WEEK),
        AssignmentRow(id="c1", teacher_id="c", branch_id="x", day_of_week="Tuesday", week_start_date=WEEK),
        AssignmentRow(id="c2", teacher_id="c", branch_id="y", day_of_week="Wednesday", week_start_date=WEEK),
        # other week, not counted
        AssignmentRow(id="c3", teacher_id="c", branch_id="n", day_of_week="Thursday", week_start_date=NEXT_WEEK),
    ]
    roster = Roster.from_rows(branches=branches, teachers=teachers, assignments=assignments)
    found = {c.id: c for c in detect_conflicts(roster, WEEK)}

    assert set(found) == {
        "double_booking:a:a2",
        "availability:b:b1",
        "max_hours:c:c2:week",
    }
    assert found["double_booking:a:a2"].type == "double_booking"
    assert found["availability:b:b1"].slot_id == "b1"
    assert found["max_hours:c:c2:week"].teacher_id == "c"

def test_conflicts_daily_hours():
    teachers = [TeacherRow(id="d", name="Long Day", work_start="07:00", work_end="19:00", max_hours_per_day=8)]
    roster = Roster.from_rows(
        branches=[BranchRow(id="n", name="N", color="c")],
        teachers=teachers,
        assignments=[AssignmentRow(id="d1", teacher_id="d", branch_id="n",
                                   day_of_week="Monday", week_start_date=WEEK)],
    )
    kinds = [c.id for c in detect_conflicts(roster, WEEK)]
    assert kinds == ["max_hours:d:d1:day"]

def test_conflicts_skip_rows_on_deleted_branches():
    roster = Roster.from_rows(
        teachers=[TeacherRow(id="b", name="Weekday Only")],
        assignments=[AssignmentRow(id="b1", teacher_id="b", branch_id="gone",
                                   day_of_week="Sunday", week_start_date=WEEK)],
    )
    assert detect_conflicts(roster, WEEK) == []

def test_overview_counts():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="t1", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
    ])
    out = svc.overview(roster, WEEK)
    assert out == {
        "week_start_date": WEEK,
        "branches": 3,
        "teachers": 2,
        "scheduled_branches": 3,
        "assignments": 1,
        "open_slots": 2,
        "conflicts": 0,
    }

def test_month_calendar_cells():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="t1", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
    ])
    cells = svc.month_calendar(roster, 2024, 6)
    assert len(cells) == 42
    assert cells[0]["date"] == "2024-05-26" and cells[0]["in_month"] is False
    assert cells[6]["date"] == "2024-06-01" and cells[6]["day_of_week"] == "Saturday"
    assert cells[6]["in_month"] is True
    # Monday 2024-05-27 belongs to the previous week: nobody assigned
    assert cells[1]["rows"][0]["teacher"] is None
    # Monday 2024-06-03 is in WEEK
    assert cells[8]["date"] == "2024-06-03"
    assert cells[8]["rows"][0]["teacher"]["name"] == "Alice"
    assert cells[-1]["date"] == "2024-07-06"

def test_month_calendar_bad_month():
    with pytest.raises(ValidationError):
        svc.month_calendar(_roster(), 2024, 13)

def test_roster_indexes_follow_drops():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="t1", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
    ])
    roster.drop_assignment("a1")
    assert roster.assignment_for("n", "Monday", WEEK) is None
    assert roster.teacher_assignments_on("t1", "Monday", WEEK) == []
    assert roster.assignments_on("Monday", WEEK) == []
    roster.drop_schedule("s-n")
    assert roster.schedule_for_branch("n") is None
    assert [s.id for s in roster.schedules_for_day("Monday")] == ["s-m"]

def test_roster_name_index_tracks_renames():
    roster = _roster()
    assert roster.branch_name_taken("north campus")
    roster.put_branch(BranchRow(id="n", name="Northgate", color="#3366ff"))
    assert not roster.branch_name_taken("North Campus")
    assert roster.branch_name_taken("NORTHGATE")
    assert not roster.branch_name_taken("Northgate", exclude_id="n")

def test_month_calendar_outside_date_range():
    for year, month in ((1, 1), (9999, 12)):
        with pytest.raises(ValidationError):
            svc.month_calendar(_roster(), year, month)

def test_stale_rows_claim_nothing():
    roster = _roster(assignments=[
        AssignmentRow(id="a1", teacher_id="ghost", branch_id="n", day_of_week="Monday", week_start_date=WEEK),
        AssignmentRow(id="a2", teacher_id="t2", branch_id="deleted", day_of_week="Monday", week_start_date=WEEK),
    ])
    assert roster.is_stale(roster.assignments["a1"]) and roster.is_stale(roster.assignments["a2"])
    assert [b.id for b in svc.available_branches_for_day(roster, "Monday", WEEK)] == ["m", "n"]
    assert [t.id for t in svc.available_teachers_for_day(roster, "Monday", WEEK)] == ["t1", "t2"]
    assert svc.overview(roster, WEEK)["open_slots"] == 3
