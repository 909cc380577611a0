"""Item API router."""

import json
import logging
from datetime import date
from html import escape

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse

from ..db import TaskStore
from ..dependencies import require_store
from ..errors import NotFound
from ..models import (
    TaskCreate,
    TaskDeleteResponse,
    TaskMutationResponse,
    TaskRecord,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
    status_from_completed,
    to_wire,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/items", tags=["items"])


# =============================================================================
# Helper Functions
# =============================================================================


def _create(store: TaskStore, name: str, description: str, due_date: date | None) -> TaskResponse:
    task_id = store.create_task(name, description, due_date)
    logger.info("Task %s created", task_id)
    return to_wire(
        TaskRecord(
            id=task_id,
            name=name,
            description=description,
            status=TaskStatus.PENDING,
            due_date=due_date,
        )
    )


def _replace(
    store: TaskStore,
    task_id: int,
    name: str,
    description: str,
    completed: bool,
    due_date: date | None,
) -> TaskResponse:
    record = TaskRecord(
        id=task_id,
        name=name,
        description=description,
        status=status_from_completed(completed),
        due_date=due_date,
    )
    if not store.update_task(task_id, name, description, record.status, due_date):
        raise NotFound("Item not found for update")
    logger.info("Task %s updated (status=%s)", task_id, record.status.value)
    return to_wire(record)


def _delete(store: TaskStore, task_id: int) -> None:
    if not store.delete_task(task_id):
        raise NotFound("Item not found for deletion")
    logger.info("Task %s deleted", task_id)


def render_task_item(task: TaskResponse) -> str:
    """Render a single task as HTML, with its hidden edit form."""
    task_id = task.id
    name = escape(task.name)
    description = escape(task.description)
    due_date = escape(task.due_date)
    toggled = escape(
        json.dumps(
            {
                "name": task.name,
                "description": task.description,
                "due_date": task.due_date,
                "completed": not task.completed,
            }
        )
    )
    done_class = " completed" if task.completed else ""
    checked = " checked" if task.completed else ""
    completed = "true" if task.completed else "false"
    due_label = f'<span class="task-due">Due {due_date}</span>' if task.due_date else ""
    return f"""
    <li id="task-{task_id}" class="task-item{done_class}">
        <div class="task-view">
            <input
                type="checkbox"
                class="toggle"{checked}
                title="Toggle completion"
                hx-put="/items/{task_id}/htmx"
                hx-vals="{toggled}"
                hx-target="#task-{task_id}"
                hx-swap="outerHTML"
            >
            <div class="task-body">
                <span class="task-name">{name}</span>
                <span class="task-description">{description}</span>
                {due_label}
            </div>
            <button type="button" class="edit-btn" data-task="{task_id}">Edit</button>
            <button
                type="button"
                class="delete-btn"
                hx-delete="/items/{task_id}/htmx"
                hx-target="#task-{task_id}"
                hx-swap="outerHTML"
            >Delete</button>
        </div>
        <form
            class="task-edit"
            hidden
            hx-put="/items/{task_id}/htmx"
            hx-target="#task-{task_id}"
            hx-swap="outerHTML"
        >
            <input type="text" name="name" value="{name}" required>
            <input type="text" name="description" value="{description}" required>
            <input type="date" name="due_date" value="{due_date}">
            <input type="hidden" name="completed" value="{completed}">
            <button type="submit">Save</button>
            <button type="button" class="cancel-btn">Cancel</button>
        </form>
    </li>
    """


def render_task_list(tasks: list[TaskResponse]) -> str:
    """Render task list as HTML."""
    if not tasks:
        return '<li class="empty-message">No tasks yet</li>'
    return "".join(render_task_item(task) for task in tasks)


# =============================================================================
# HTMX Endpoints (HTML Fragments) - Must be defined BEFORE /{task_id} routes
# =============================================================================


@router.get("/htmx", response_class=HTMLResponse)
def list_tasks_htmx(store: TaskStore = Depends(require_store)):
    """Get all tasks as HTML fragment."""
    return render_task_list([to_wire(record) for record in store.list_tasks()])


@router.post("/htmx", response_class=HTMLResponse)
def create_task_htmx(
    name: str = Form(..., min_length=1, max_length=255),
    description: str = Form(..., min_length=1),
    due_date: date | None = Form(None),
    store: TaskStore = Depends(require_store),
):
    """Create a task and return HTML fragment."""
    return render_task_item(_create(store, name, description, due_date))


# =============================================================================
# REST API Endpoints (JSON)
# =============================================================================


@router.get("", response_model=list[TaskResponse])
def list_tasks(store: TaskStore = Depends(require_store)):
    """Get all tasks, newest first."""
    return [to_wire(record) for record in store.list_tasks()]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, store: TaskStore = Depends(require_store)):
    """Get a task by ID."""
    record = store.get_task(task_id)
    if record is None:
        raise NotFound()
    return to_wire(record)


@router.post("", response_model=TaskMutationResponse, status_code=status.HTTP_201_CREATED)
def create_task_endpoint(task_data: TaskCreate, store: TaskStore = Depends(require_store)):
    """Create a new task."""
    task = _create(store, task_data.name, task_data.description, task_data.due_date)
    return TaskMutationResponse(**task.model_dump(), message="Item created")


@router.put("/{task_id}", response_model=TaskMutationResponse)
def update_task_endpoint(
    task_id: int,
    task_data: TaskUpdate,
    store: TaskStore = Depends(require_store),
):
    """Replace a task's name, description, completion and due date."""
    task = _replace(
        store,
        task_id,
        task_data.name,
        task_data.description,
        task_data.completed,
        task_data.due_date,
    )
    return TaskMutationResponse(**task.model_dump(), message="Item updated")


@router.delete("/{task_id}", response_model=TaskDeleteResponse)
def delete_task_endpoint(task_id: int, store: TaskStore = Depends(require_store)):
    """Delete a task."""
    _delete(store, task_id)
    return TaskDeleteResponse(id=task_id, message="Item deleted")


# =============================================================================
# HTMX Endpoints with task_id (must be after static /htmx routes)
# =============================================================================


@router.put("/{task_id}/htmx", response_class=HTMLResponse)
def update_task_htmx(
    task_id: int,
    name: str = Form(..., min_length=1, max_length=255),
    description: str = Form(..., min_length=1),
    completed: bool = Form(...),
    due_date: date | None = Form(None),
    store: TaskStore = Depends(require_store),
):
    """Replace a task from the edit form or toggle and return HTML fragment."""
    return render_task_item(_replace(store, task_id, name, description, completed, due_date))


@router.delete("/{task_id}/htmx", response_class=HTMLResponse)
def delete_task_htmx(task_id: int, store: TaskStore = Depends(require_store)):
    """Delete a task and return empty."""
    _delete(store, task_id)
    return ""
