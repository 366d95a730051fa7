from __future__ import annotations
from pydantic import BaseModel, Field

class BranchScheduleIn(BaseModel):
    branch_id: str = Field(min_length=1)
    day_of_week: str = Field(min_length=1)
