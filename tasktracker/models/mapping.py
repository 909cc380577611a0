"""Translation between stored records and wire tasks."""

from datetime import date, datetime

from .task import TaskRecord, TaskResponse, TaskStatus


def format_due_date(value: date | datetime | None) -> str:
    """Format a due date as YYYY-MM-DD, or "" when absent."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def status_from_completed(completed: bool) -> TaskStatus:
    return TaskStatus.DONE if completed else TaskStatus.PENDING


def to_wire(record: TaskRecord) -> TaskResponse:
    """Map a stored record to its wire representation."""
    return TaskResponse(
        id=record.id,
        name=record.name,
        description=record.description,
        completed=record.status is TaskStatus.DONE,
        due_date=format_due_date(record.due_date),
    )
