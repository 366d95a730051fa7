from __future__ import annotations
import pytest
from pydantic import ValidationError as SchemaError

from app import create_app
from extensions import db
from errors import NotFound, ValidationError
from models import Teacher, WeeklyAssignment
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster
from blueprints.branches.services import add_branch
from blueprints.schedule.services import assign_branch_to_day
from blueprints.teachers import services as svc
from blueprints.teachers.schemas import TeacherIn
from blueprints.assignments.services import assign_teacher

@pytest.fixture()
def roster():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield Roster.load(Repository())
        db.session.remove()
        db.drop_all()

def test_defaults_and_round_trip(roster):
    t = svc.add_teacher(roster, TeacherIn(name="  Alice  ", specialties=["Art"]))
    assert t.name == "Alice"
    assert t.available_days == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
    assert (t.work_start, t.work_end) == ("09:00", "17:00")
    assert (t.max_hours_per_day, t.max_hours_per_week) == (8, 40)
    stored = db.session.get(Teacher, t.id)
    assert stored.specialties == ["Art"]

def test_duplicate_teacher_name(roster):
    svc.add_teacher(roster, TeacherIn(name="Alice"))
    with pytest.raises(ValidationError):
        svc.add_teacher(roster, TeacherIn(name="ALICE"))
    bob = svc.add_teacher(roster, TeacherIn(name="Bob"))
    with pytest.raises(ValidationError):
        svc.update_teacher(roster, bob.id, TeacherIn(name="alice"))
    out = svc.update_teacher(roster, bob.id, TeacherIn(name="Bobby", available_days=["saturday"]))
    assert out.name == "Bobby" and out.available_days == ["Saturday"]

def test_schema_rules():
    with pytest.raises(SchemaError):
        TeacherIn(name="X", working_hours={"start": "17:00", "end": "09:00"})
    with pytest.raises(SchemaError):
        TeacherIn(name="X", available_days=["Someday"])
    with pytest.raises(SchemaError):
        TeacherIn(name="X", max_hours_per_day=0)
    with pytest.raises(SchemaError):
        TeacherIn(name="X", gender="unknown")
    with pytest.raises(SchemaError):
        TeacherIn(name="   ")

def test_remove_teacher_drops_ledger_rows(roster):
    n = add_branch(roster, "North Campus", "#3366ff")
    assign_branch_to_day(roster, n.id, "Monday")
    t = svc.add_teacher(roster, TeacherIn(name="Alice"))
    assign_teacher(roster, t.id, n.id, "Monday", "2024-06-02")

    svc.remove_teacher(roster, t.id)
    assert t.id not in roster.teachers
    assert roster.assignment_for(n.id, "Monday", "2024-06-02") is None
    assert WeeklyAssignment.query.count() == 0
    with pytest.raises(NotFound):
        svc.remove_teacher(roster, t.id)
