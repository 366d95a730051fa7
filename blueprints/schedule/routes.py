# blueprints/schedule/routes.py
from __future__ import annotations
from flask import jsonify, request

from . import api_bp
from . import services as svc
from .schemas import BranchScheduleIn
from models import DAYS_OF_WEEK
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster


def _roster() -> Roster:
    return Roster.load(Repository())


@api_bp.get("/branch-schedules")
def list_schedules():
    roster = _roster()
    day = request.args.get("day")
    if day:
        rows = svc.schedules_for_day(roster, day)
    else:
        rows = [s for d in DAYS_OF_WEEK for s in roster.schedules_for_day(d)]
    return jsonify({"ok": True, "items": [s.to_dict() for s in rows]})


@api_bp.get("/branch-schedules/available-branches")
def available_branches():
    rows = svc.branches_available_for_assignment(_roster())
    return jsonify({"ok": True, "items": [b.to_dict() for b in rows]})


@api_bp.post("/branch-schedules")
def create_schedule():
    parsed = BranchScheduleIn.model_validate(request.get_json(silent=True) or {})
    row = svc.assign_branch_to_day(_roster(), parsed.branch_id, parsed.day_of_week)
    return jsonify({"ok": True, "item": row.to_dict()}), 201


@api_bp.delete("/branch-schedules/<schedule_id>")
def delete_schedule(schedule_id: str):
    svc.unassign_branch_schedule(_roster(), schedule_id)
    return "", 204
