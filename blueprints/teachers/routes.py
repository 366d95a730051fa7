# blueprints/teachers/routes.py
from __future__ import annotations
from flask import jsonify, request

from . import api_bp
from . import services as svc
from .schemas import TeacherIn
from errors import NotFound
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster


def _roster() -> Roster:
    return Roster.load(Repository())


@api_bp.get("/teachers")
def list_teachers():
    roster = _roster()
    q = (request.args.get("q") or "").strip().lower()
    items = [roster.teacher_dict(t) for t in roster.sorted_teachers() if q in t.name.lower()]
    return jsonify({"ok": True, "items": items})


@api_bp.post("/teachers")
def create_teacher():
    parsed = TeacherIn.model_validate(request.get_json(silent=True) or {})
    roster = _roster()
    row = svc.add_teacher(roster, parsed)
    return jsonify({"ok": True, "item": roster.teacher_dict(row)}), 201


@api_bp.get("/teachers/<teacher_id>")
def get_teacher(teacher_id: str):
    roster = _roster()
    t = roster.teachers.get(teacher_id)
    if t is None:
        raise NotFound(f"Teacher {teacher_id} not found")
    return jsonify({"ok": True, "item": roster.teacher_dict(t)})


@api_bp.put("/teachers/<teacher_id>")
def update_teacher(teacher_id: str):
    parsed = TeacherIn.model_validate(request.get_json(silent=True) or {})
    roster = _roster()
    row = svc.update_teacher(roster, teacher_id, parsed)
    return jsonify({"ok": True, "item": roster.teacher_dict(row)})


@api_bp.delete("/teachers/<teacher_id>")
def delete_teacher(teacher_id: str):
    svc.remove_teacher(_roster(), teacher_id)
    return "", 204
