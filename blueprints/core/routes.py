from __future__ import annotations
import json, logging
from datetime import datetime, UTC

from flask import g, jsonify, request
from pydantic import ValidationError as SchemaError
from werkzeug.exceptions import HTTPException
from werkzeug.wrappers.response import Response

from errors import RotaError
from . import bp

log = logging.getLogger(__name__)

EXTRA_KEYS = (
    "event", "path", "method", "status", "duration_ms",
    "branch_id", "teacher_id", "schedule_id", "day", "day_of_week", "week_start_date", "removed",
)

class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

def _setup_structured_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    root = logging.getLogger()
    has_json = any(
        isinstance(h, logging.StreamHandler)
        and isinstance(getattr(h, "formatter", None), JSONFormatter)
        for h in root.handlers
    )
    if not has_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    root.setLevel(level)
    app.logger.setLevel(level)

def _pydantic_errors_safe(ve: SchemaError):
    errs = ve.errors(include_url=False)
    for e in errs:
        if "ctx" in e and isinstance(e["ctx"], dict):
            e["ctx"] = {k: str(v) for k, v in e["ctx"].items()}
    return errs

@bp.before_app_request
def _start_timer():
    g._req_start = datetime.now(UTC)

@bp.after_app_request
def _log_request(response: Response):
    start = getattr(g, "_req_start", None)
    duration_ms = None
    if start is not None:
        duration_ms = int((datetime.now(UTC) - start).total_seconds() * 1000)
    extra = {
        "event": "request",
        "path": request.path,
        "method": request.method,
        "status": response.status_code,
        "duration_ms": duration_ms,
    }
    log.info("request handled", extra=extra)
    return response

@bp.app_errorhandler(RotaError)
def _handle_rota_error(err: RotaError):
    # бизнес-ошибки отдаём как есть, с их статусом
    return jsonify({"ok": False, "error": err.to_dict()}), err.status

@bp.app_errorhandler(SchemaError)
def _handle_schema_error(err: SchemaError):
    return jsonify({"ok": False, "error": {
        "code": "VALIDATION_ERROR",
        "message": "Invalid request payload",
        "details": _pydantic_errors_safe(err),
    }}), 400

@bp.app_errorhandler(HTTPException)
def _handle_http_error(err: HTTPException):
    code = (err.name or "error").upper().replace(" ", "_")
    return jsonify({"ok": False, "error": {"code": code, "message": err.description}}), err.code

@bp.record_once
def _on_register(state):
    _setup_structured_logging(state.app)

@bp.get("/health")
def health():
    return jsonify({
        "status": "ok",
        "ts": datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z"),
    })
