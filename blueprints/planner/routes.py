# blueprints/planner/routes.py
from __future__ import annotations
from datetime import date

from flask import jsonify, request

from . import api_bp
from . import services as svc
from .conflicts import detect_conflicts
from .repository import Repository
from .roster import Roster
from .weeks import current_week, week_start
from errors import ValidationError


def _roster() -> Roster:
    return Roster.load(Repository())


def _week() -> str:
    w = request.args.get("week")
    return week_start(w) if w else current_week()


def _day() -> str:
    day = request.args.get("day")
    if not day:
        raise ValidationError("day is required", details={"field": "day"})
    return day


@api_bp.get("/planner/grid")
def grid():
    week = _week()
    g = svc.schedule_grid(_roster(), week)
    q = request.args.get("q", "")
    if q:
        g = svc.search_grid(g, q, (request.args.get("type") or "teacher").lower())
    return jsonify({"ok": True, "week_start_date": week, "days": svc.grid_to_dict(g)})


@api_bp.get("/planner/available-branches")
def available_branches():
    rows = svc.available_branches_for_day(_roster(), _day(), _week())
    return jsonify({"ok": True, "items": [b.to_dict() for b in rows]})


@api_bp.get("/planner/available-teachers")
def available_teachers():
    roster = _roster()
    rows = svc.available_teachers_for_day(roster, _day(), _week(), request.args.get("q", ""))
    return jsonify({"ok": True, "items": [roster.teacher_dict(t) for t in rows]})


@api_bp.get("/planner/conflicts")
def conflicts():
    week = _week()
    items = detect_conflicts(_roster(), week)
    return jsonify({"ok": True, "week_start_date": week, "items": [c.to_dict() for c in items]})


@api_bp.get("/planner/overview")
def overview():
    return jsonify({"ok": True, **svc.overview(_roster(), _week())})


@api_bp.get("/planner/calendar")
def calendar():
    today = date.today()
    try:
        year = int(request.args.get("year", today.year))
        month = int(request.args.get("month", today.month))
    except ValueError:
        raise ValidationError("year and month must be integers") from None
    return jsonify({"ok": True, "year": year, "month": month,
                    "cells": svc.month_calendar(_roster(), year, month)})
