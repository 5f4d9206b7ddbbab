from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.api.schemas import CamelModel

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class TagCreate(CamelModel):
    name: str = Field(min_length=1, max_length=50)
    color: Optional[str] = Field(default=None, pattern=COLOR_PATTERN)


class TagUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    color: Optional[str] = Field(default=None, pattern=COLOR_PATTERN)

    @field_validator("name", "color")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class TagOut(CamelModel):
    id: int
    name: str
    color: str
    user_id: int
    created_at: Optional[datetime] = None
