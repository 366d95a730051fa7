from __future__ import annotations
from pydantic import BaseModel, Field, field_validator

class BranchIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    color: str = Field(min_length=1, max_length=64)

    @field_validator("name", "color")
    @classmethod
    def strip_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v
