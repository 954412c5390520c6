"""
Taskboard Schemas — pydantic models exchanged between actions, core and UI.

Read models are built from ORM rows (``from_attributes``); write models
validate raw form payloads, where every value arrives as a string.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ---------------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------------

class UserRead(BaseModel):
    """User data safe to return to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    email: str


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    task_id: int
    author_id: int
    author: UserRead
    created_at: datetime


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None
    assignee_id: Optional[int] = None
    assignee: Optional[UserRead] = None
    creator_id: int
    comments: List[CommentRead] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @property
    def assignee_name(self) -> Optional[str]:
        return self.assignee.name if self.assignee else None

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE


class TaskStats(BaseModel):
    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    overdue: int = 0


# ---------------------------------------------------------------------------
# Write models
# ---------------------------------------------------------------------------

def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class TaskCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None
    assignee_id: Optional[int] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("due_date", "assignee_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def blank_status(cls, v: Any) -> Any:
        return _blank_to_none(v) or TaskStatus.TODO

    @field_validator("priority", mode="before")
    @classmethod
    def blank_priority(cls, v: Any) -> Any:
        return _blank_to_none(v) or TaskPriority.MEDIUM


class TaskUpdate(TaskCreate):
    """Edit form payload. Same shape as create; every field is resubmitted."""
    pass


class ActionResult(BaseModel):
    """Outcome of a server action, shaped for form banners."""

    success: bool
    error: Optional[str] = None
    message: str = ""
    record_id: Optional[int] = None

    @classmethod
    def ok(cls, message: str = "", record_id: Optional[int] = None) -> "ActionResult":
        return cls(success=True, message=message, record_id=record_id)

    @classmethod
    def fail(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)
