"""Pydantic models for the task API."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field, StrictBool


class TaskStatus(str, Enum):
    """Stored task status enumeration."""

    PENDING = "To Do"
    DONE = "Done"


@dataclass(frozen=True)
class TaskRecord:
    """A row of the items table."""

    id: int
    name: str
    description: str
    status: TaskStatus
    due_date: date | datetime | None
    created_at: datetime | None = None


def _blank_to_none(value):
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


# "" from a cleared date input means "no due date".
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]


class TaskCreate(BaseModel):
    """Request model for creating a task."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    due_date: OptionalDate = None


class TaskUpdate(BaseModel):
    """Request model for replacing a task.

    Every field is rewritten; a missing due_date clears the stored one.
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    completed: StrictBool
    due_date: OptionalDate = None


class TaskResponse(BaseModel):
    """Wire representation of a task."""

    id: int
    name: str
    description: str
    completed: bool
    due_date: str


class TaskMutationResponse(TaskResponse):
    """Response model for create and update."""

    message: str


class TaskDeleteResponse(BaseModel):
    """Response model for delete."""

    id: int
    message: str
