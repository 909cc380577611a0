"""Models package."""

from .mapping import format_due_date, status_from_completed, to_wire
from .task import (
    TaskCreate,
    TaskDeleteResponse,
    TaskMutationResponse,
    TaskRecord,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)

__all__ = [
    "TaskStatus",
    "TaskRecord",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskMutationResponse",
    "TaskDeleteResponse",
    "format_due_date",
    "status_from_completed",
    "to_wire",
]
