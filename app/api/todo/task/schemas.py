from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.api.schemas import CamelModel
from app.api.todo.tag.schemas import TagOut
from app.core.enums import Priority

TaskStatus = Literal["all", "completed", "incomplete"]
SortField = Literal["createdAt", "dueDate", "priority"]
SortOrder = Literal["asc", "desc"]


class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = None
    tag_ids: Optional[list[int]] = None


class TaskUpdate(CamelModel):
    """Partial update: only fields the caller sent are applied.

    ``description`` and ``due_date`` may be sent as null to clear them.
    """
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None
    tag_ids: Optional[list[int]] = None

    @field_validator("title", "completed", "priority", "tag_ids")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class TaskFilters(BaseModel):
    status: TaskStatus = "all"
    search: Optional[str] = None
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"
    tag_ids: Optional[list[int]] = None


class TaskOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    priority: Priority
    due_date: Optional[datetime] = None
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tags: list[TagOut] = []


class TaskListOut(BaseModel):
    tasks: list[TaskOut]
    total: int
