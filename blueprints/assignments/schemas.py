from __future__ import annotations
from datetime import date
from pydantic import BaseModel, Field

class AssignmentIn(BaseModel):
    teacher_id: str = Field(min_length=1)
    branch_id: str = Field(min_length=1)
    day_of_week: str = Field(min_length=1)
    # любая дата внутри нужной недели, сводится к её воскресенью
    week: date = Field(default_factory=date.today)
