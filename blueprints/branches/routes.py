# blueprints/branches/routes.py
from __future__ import annotations
from flask import jsonify, request

from . import api_bp
from . import services as svc
from .schemas import BranchIn
from blueprints.planner.repository import Repository
from blueprints.planner.roster import Roster


def _roster() -> Roster:
    return Roster.load(Repository())


@api_bp.get("/branches")
def list_branches():
    roster = _roster()
    return jsonify({"ok": True, "items": [b.to_dict() for b in roster.sorted_branches()]})


@api_bp.post("/branches")
def create_branch():
    parsed = BranchIn.model_validate(request.get_json(silent=True) or {})
    row = svc.add_branch(_roster(), parsed.name, parsed.color)
    return jsonify({"ok": True, "item": row.to_dict()}), 201


@api_bp.put("/branches/<branch_id>")
def update_branch(branch_id: str):
    parsed = BranchIn.model_validate(request.get_json(silent=True) or {})
    row = svc.update_branch(_roster(), branch_id, parsed.name, parsed.color)
    return jsonify({"ok": True, "item": row.to_dict()})


@api_bp.delete("/branches/<branch_id>")
def delete_branch(branch_id: str):
    svc.remove_branch(_roster(), branch_id)
    return "", 204
