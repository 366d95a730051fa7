from __future__ import annotations
import os
from flask import Flask
from config import config_map
from extensions import db, migrate
from sqlalchemy import inspect

def _seed_from_config(app):
    if not app.config.get("SEED_DEMO_DATA"):
        return
    with app.app_context():
        # таблицы может ещё не быть (alembic upgrade и т.п.)
        if not inspect(db.engine).has_table("branches"):
            return
        from seed import seed_demo  # локальный импорт, чтобы избежать циклов
        seed_demo()

def register_blueprints(app: Flask) -> None:
    from blueprints.core import bp as core_bp
    from blueprints.branches import api_bp as branches_api_bp
    from blueprints.teachers import api_bp as teachers_api_bp
    from blueprints.schedule import api_bp as schedule_api_bp
    from blueprints.assignments import api_bp as assignments_api_bp
    from blueprints.planner import api_bp as planner_api_bp

    # core без префикса → '/health' в корне
    app.register_blueprint(core_bp)
    app.register_blueprint(branches_api_bp, url_prefix="/api/v1")
    app.register_blueprint(teachers_api_bp, url_prefix="/api/v1")
    app.register_blueprint(schedule_api_bp, url_prefix="/api/v1")
    app.register_blueprint(assignments_api_bp, url_prefix="/api/v1")
    app.register_blueprint(planner_api_bp, url_prefix="/api/v1")

def create_app(config_name: str | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    cfg_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config_map[cfg_name])
    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass
    db.init_app(app)
    migrate.init_app(app, db)
    register_blueprints(app)
    _seed_from_config(app)
    return app
