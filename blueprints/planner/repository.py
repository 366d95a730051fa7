# blueprints/planner/repository.py
"""Хранилище: упорядоченные полные чтения таблиц и построчные записи."""
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import ConstraintFailure, NotFound, StorageFailure
from extensions import db
from models import Branch, BranchSchedule, Teacher, WeeklyAssignment
from .records import ROW_TYPES, AssignmentRow, BranchRow, ScheduleRow, TeacherRow

log = logging.getLogger(__name__)


class Repository:
    def __init__(self, session=None):
        self.session = session or db.session

    # ---------- чтение ----------
    def _list(self, model) -> list:
        row_type = ROW_TYPES[model]
        try:
            rows = self.session.query(model).order_by(model.created_at.asc(), model.id.asc()).all()
        except SQLAlchemyError as ex:
            self.session.rollback()
            log.exception("read of %s failed", model.__tablename__)
            raise StorageFailure(f"Could not read {model.__tablename__}") from ex
        return [row_type.from_model(r) for r in rows]

    def list_branches(self) -> list[BranchRow]:
        return self._list(Branch)

    def list_schedules(self) -> list[ScheduleRow]:
        return self._list(BranchSchedule)

    def list_teachers(self) -> list[TeacherRow]:
        return self._list(Teacher)

    def list_assignments(self) -> list[AssignmentRow]:
        return self._list(WeeklyAssignment)

    def first(self, model, **filters):
        """Свежий поиск одной строки в БД, мимо загруженного Roster."""
        try:
            m = self.session.query(model).filter_by(**filters).first()
        except SQLAlchemyError as ex:
            self.session.rollback()
            log.exception("lookup on %s failed", model.__tablename__)
            raise StorageFailure(f"Could not read {model.__tablename__}") from ex
        return ROW_TYPES[model].from_model(m) if m is not None else None

    # ---------- запись (до коммита транзакции) ----------
    @contextmanager
    def transaction(self) -> Iterator["Repository"]:
        try:
            yield self
            self.session.commit()
        except IntegrityError as ex:
            self.session.rollback()
            log.warning("constraint rejected write: %s", getattr(ex, "orig", ex))
            raise ConstraintFailure("The write conflicts with existing data") from ex
        except SQLAlchemyError as ex:
            self.session.rollback()
            log.exception("write failed")
            raise StorageFailure("The database write failed") from ex
        except Exception:
            self.session.rollback()
            raise

    def insert(self, model, **values: Any):
        m = model(**values)
        self.session.add(m)
        self.session.flush()
        return ROW_TYPES[model].from_model(m)

    def update(self, model, row_id: str, **values: Any):
        m = self.session.get(model, row_id)
        if m is None:
            raise NotFound(f"{model.__name__} {row_id} not found")
        for k, v in values.items():
            setattr(m, k, v)
        self.session.flush()
        return ROW_TYPES[model].from_model(m)

    def delete(self, model, row_id: str) -> None:
        m = self.session.get(model, row_id)
        if m is None:
            raise NotFound(f"{model.__name__} {row_id} not found")
        self.session.delete(m)
        self.session.flush()
