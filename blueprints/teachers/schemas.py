from __future__ import annotations
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from models import DAYS_OF_WEEK

_DAYS = {d.lower(): d for d in DAYS_OF_WEEK}
_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"

class WorkingHours(BaseModel):
    start: str = Field("09:00", pattern=_HHMM)
    end: str = Field("17:00", pattern=_HHMM)

    @model_validator(mode="after")
    def check_range(self):
        # HH:MM с ведущим нулём сравнивается как строка
        if self.end <= self.start:
            raise ValueError("end must be > start")
        return self

class TeacherIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    mobile: Optional[str] = Field(None, max_length=32)
    gender: Literal["male", "female", "other"] = "male"
    description: Optional[str] = None
    specialties: List[str] = Field(default_factory=list)
    working_hours: WorkingHours = Field(default_factory=WorkingHours)
    max_hours_per_day: int = Field(8, gt=0, le=24)
    max_hours_per_week: int = Field(40, gt=0, le=168)
    available_days: List[str] = Field(default_factory=lambda: list(DAYS_OF_WEEK[:5]))

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("available_days")
    @classmethod
    def known_days(cls, v: List[str]) -> List[str]:
        out = []
        for d in v:
            day = _DAYS.get(str(d).strip().lower())
            if day is None:
                raise ValueError(f"unknown day {d!r}")
            if day not in out:
                out.append(day)
        return out

    def columns(self) -> dict:
        return {
            "name": self.name,
            "mobile": self.mobile,
            "gender": self.gender,
            "description": self.description,
            "specialties": list(self.specialties),
            "work_start": self.working_hours.start,
            "work_end": self.working_hours.end,
            "max_hours_per_day": self.max_hours_per_day,
            "max_hours_per_week": self.max_hours_per_week,
            "available_days": list(self.available_days),
        }
