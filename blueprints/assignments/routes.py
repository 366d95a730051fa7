# blueprints/assignments/routes.py
from __future__ import annotations
from flask import jsonify, request

from . import api_bp
from . import services as svc
from .schemas import AssignmentIn
from errors import ValidationError
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster
from blueprints.planner.weeks import current_week


def _roster() -> Roster:
    return Roster.load(Repository())


@api_bp.get("/assignments")
def list_assignments():
    roster = _roster()
    teacher_id = request.args.get("teacher_id")
    branch_id = request.args.get("branch_id")
    if teacher_id:
        rows = svc.assignments_for_teacher(roster, teacher_id)
        return jsonify({"ok": True, "items": [a.to_dict() for a in rows]})
    if branch_id:
        day = request.args.get("day")
        if not day:
            raise ValidationError("day is required with branch_id", details={"field": "day"})
        row = svc.assignment_for(roster, branch_id, day, request.args.get("week") or current_week())
        return jsonify({"ok": True, "item": row.to_dict() if row else None})
    return jsonify({"ok": True, "items": [a.to_dict() for a in roster.assignments.values()]})


@api_bp.post("/assignments")
def create_assignment():
    parsed = AssignmentIn.model_validate(request.get_json(silent=True) or {})
    row = svc.assign_teacher(_roster(), parsed.teacher_id, parsed.branch_id,
                             parsed.day_of_week, parsed.week)
    return jsonify({"ok": True, "item": row.to_dict()}), 201


@api_bp.delete("/assignments")
def delete_assignment():
    parsed = AssignmentIn.model_validate(request.get_json(silent=True) or {})
    svc.unassign_slot(_roster(), parsed.teacher_id, parsed.branch_id, parsed.day_of_week, parsed.week)
    return "", 204


@api_bp.delete("/teachers/<teacher_id>/assignments")
def clear_teacher_assignments(teacher_id: str):
    removed = svc.unassign_teacher(_roster(), teacher_id)
    return jsonify({"ok": True, "removed": removed})
