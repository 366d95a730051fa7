"""Календарные хелперы: имена дней, недели с воскресенья, длительность рабочих часов."""
from __future__ import annotations
from datetime import date, datetime, timedelta

from errors import ValidationError
from models import DAYS_OF_WEEK

_DAY_LOOKUP = {d.lower(): d for d in DAYS_OF_WEEK}


def normalize_day(value: str | None) -> str:
    """'monday' / 'MONDAY' / 'Monday' -> 'Monday'."""
    day = _DAY_LOOKUP.get((value or "").strip().lower())
    if day is None:
        raise ValidationError(f"Unknown day of week: {value!r}", details={"field": "day_of_week"})
    return day


def to_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    try:
        # полная ISO-строка с временем → только календарный день
        return datetime.fromisoformat(s).date()
    except ValueError:
        raise ValidationError(f"Bad date: {value!r}", details={"field": "date"}) from None


def week_start(reference: date | datetime | str) -> str:
    """ISO-дата воскресенья, с которого начинается неделя ``reference``."""
    d = to_date(reference)
    # weekday(): Пн=0..Вс=6; неделя открывается воскресеньем
    start = d - timedelta(days=(d.weekday() + 1) % 7)
    return start.isoformat()


def current_week(today: date | None = None) -> str:
    return week_start(today or date.today())


def day_name(d: date) -> str:
    return DAYS_OF_WEEK[d.weekday()]


def parse_hhmm(value: str) -> int:
    """'09:30' -> минуты от полуночи."""
    try:
        h, m = str(value).split(":")
        hours, minutes = int(h), int(m)
    except ValueError:
        raise ValidationError(f"Bad time: {value!r}", details={"field": "working_hours"}) from None
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValidationError(f"Bad time: {value!r}", details={"field": "working_hours"})
    return hours * 60 + minutes


def span_hours(start: str, end: str) -> float:
    return max(0, parse_hhmm(end) - parse_hhmm(start)) / 60.0
