"""
Идемпотентный сид.
Запуск:
  python seed.py --reset   # пересоздать БД и залить демо-данные
  python seed.py           # мягко дозаполнить недостающее
"""
from datetime import date
import argparse

from app import create_app
from extensions import db
from errors import RuleViolation
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster
from blueprints.planner.weeks import current_week
from blueprints.branches.services import add_branch
from blueprints.teachers.schemas import TeacherIn
from blueprints.teachers.services import add_teacher
from blueprints.schedule.services import assign_branch_to_day
from blueprints.assignments.services import assign_teacher

DEMO_BRANCHES = [
    ("North Campus", "bg-blue-100 text-blue-800", "Monday"),
    ("South Campus", "bg-green-100 text-green-800", "Tuesday"),
    ("Downtown", "bg-purple-100 text-purple-800", "Wednesday"),
    ("Riverside", "bg-yellow-100 text-yellow-800", "Monday"),
]

DEMO_TEACHERS = [
    {"name": "Alice Moreau", "gender": "female", "specialties": ["Mathematics", "Physics"]},
    {"name": "Bashir Haddad", "gender": "male", "specialties": ["English"],
     "working_hours": {"start": "08:00", "end": "14:00"}},
    {"name": "Chen Wei", "gender": "male", "specialties": ["Computer Science"],
     "available_days": ["Monday", "Wednesday", "Friday"]},
]

# преподаватель -> филиал на текущую неделю
DEMO_ASSIGNMENTS = [
    ("Alice Moreau", "North Campus"),
    ("Bashir Haddad", "South Campus"),
    ("Chen Wei", "Downtown"),
]


def seed_demo(today: date | None = None) -> dict:
    repo = Repository()
    roster = Roster.load(repo)
    created = {"branches": 0, "teachers": 0, "schedules": 0, "assignments": 0}

    by_name = {b.name: b for b in roster.branches.values()}
    for name, color, day in DEMO_BRANCHES:
        branch = by_name.get(name)
        if branch is None:
            branch = add_branch(roster, name, color, repo=repo)
            by_name[name] = branch
            created["branches"] += 1
        if roster.schedule_for_branch(branch.id) is None:
            assign_branch_to_day(roster, branch.id, day, repo=repo)
            created["schedules"] += 1

    teachers = {t.name: t for t in roster.teachers.values()}
    for data in DEMO_TEACHERS:
        if data["name"] not in teachers:
            teachers[data["name"]] = add_teacher(roster, TeacherIn.model_validate(data), repo=repo)
            created["teachers"] += 1

    week = current_week(today)
    for teacher_name, branch_name in DEMO_ASSIGNMENTS:
        branch = by_name[branch_name]
        day = roster.schedule_for_branch(branch.id).day_of_week
        try:
            assign_teacher(roster, teachers[teacher_name].id, branch.id, day, week, repo=repo)
            created["assignments"] += 1
        except RuleViolation:
            # уже назначено раньше
            continue
    return created


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--reset", action="store_true", help="drop all tables before seeding")
    args = parser.parse_args()

    app = create_app("dev")
    with app.app_context():
        if args.reset:
            db.drop_all()
        db.create_all()
        created = seed_demo()
        print("Seed done:", ", ".join(f"{k}={v}" for k, v in created.items()))


if __name__ == "__main__":
    main()
