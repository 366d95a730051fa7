"""Классы ошибок, общие для всех команд.

Валидация и проверки правил идут до записи и ничего не оставляют после себя.
Ошибки хранилища случаются во время записи, репозиторий их откатывает.
"""
from __future__ import annotations
from typing import Any


class RotaError(Exception):
    code = "ERROR"
    status = 400

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(RotaError):
    """Кривой или дублирующий ввод."""
    code = "VALIDATION_ERROR"
    status = 400


class NotFound(RotaError):
    code = "NOT_FOUND"
    status = 404


class RuleViolation(RotaError):
    """Запись нарушила бы правило расписания."""
    code = "RULE_VIOLATION"
    status = 409


class StorageFailure(RotaError):
    """Не удался запрос к БД."""
    code = "STORAGE_FAILURE"
    status = 503


class ConstraintFailure(StorageFailure):
    # запись отклонило ограничение unique/foreign key
    code = "CONSTRAINT_FAILURE"
    status = 409
