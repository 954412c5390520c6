"""
Task actions — queries and mutations behind the dashboard.

Every function runs under a RequestContext (see taskboard.actions.ServerActions)
and raises TaskboardSessionError when nobody is logged in. Mutations return
an ActionResult instead of raising.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional

from sqlalchemy import func

from taskboard.actions.base import returns_action_result
from taskboard.db.models import Task, User
from taskboard.db.session import session_scope
from taskboard.engine.context import require_request_context
from taskboard.engine.errors import TaskboardNotFoundError, TaskboardValidationError
from taskboard.engine.logging import log, log_task_event
from taskboard.schemas import (
    ActionResult,
    TaskCreate,
    TaskRead,
    TaskStats,
    TaskStatus,
    TaskUpdate,
)

logger = logging.getLogger("taskboard.actions.tasks")


def _get_task_or_raise(session, task_id: int, operation: str) -> Task:
    task = session.get(Task, task_id)
    if task is None:
        raise TaskboardNotFoundError(
            f"Task {task_id} not found",
            record_type="Task",
            record_id=task_id,
            operation=operation,
        )
    return task


def _check_assignee(session, assignee_id: Optional[int]) -> None:
    if assignee_id is not None and session.get(User, assignee_id) is None:
        raise TaskboardValidationError(
            "Assignee does not exist",
            validation_errors=[{"loc": ["assignee_id"], "msg": "Assignee does not exist"}],
        )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def list_tasks() -> List[TaskRead]:
    """All tasks, newest first, with assignee and comment thread loaded."""
    require_request_context()
    with session_scope() as session:
        tasks = session.query(Task).order_by(Task.created_at.desc(), Task.id.desc()).all()
        return [TaskRead.model_validate(t) for t in tasks]


def get_task_stats(today: Optional[date] = None) -> TaskStats:
    """Counts by status, plus open tasks whose due date has passed."""
    require_request_context()
    today = today or date.today()
    with session_scope() as session:
        counts = dict(
            session.query(Task.status, func.count(Task.id)).group_by(Task.status).all()
        )
        overdue = (
            session.query(func.count(Task.id))
            .filter(Task.due_date.isnot(None))
            .filter(Task.due_date < today)
            .filter(Task.status != TaskStatus.DONE.value)
            .scalar()
        )
    return TaskStats(
        total=sum(counts.values()),
        todo=counts.get("todo", 0),
        in_progress=counts.get("in_progress", 0),
        done=counts.get("done", 0),
        overdue=overdue or 0,
    )


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

@returns_action_result
def create_task(form: Mapping[str, Any]) -> ActionResult:
    """Create a task owned by the current user from a form payload."""
    ctx = require_request_context()
    data = TaskCreate.model_validate(dict(form))

    with session_scope() as session:
        _check_assignee(session, data.assignee_id)
        task = Task(
            name=data.name,
            description=data.description,
            status=data.status.value,
            priority=data.priority.value,
            due_date=data.due_date,
            assignee_id=data.assignee_id,
            creator_id=ctx.user_id,
        )
        session.add(task)
        session.flush()
        task_id = task.id

    log(log_task_event("task_created", task_id, ctx.user_id))
    logger.info(f"Task {task_id} created by user {ctx.user_id}")
    return ActionResult.ok("Task created successfully!", record_id=task_id)


@returns_action_result
def update_task(task_id: int, form: Mapping[str, Any]) -> ActionResult:
    """Apply the edit form. The creator never changes."""
    ctx = require_request_context()
    data = TaskUpdate.model_validate(dict(form))

    with session_scope() as session:
        task = _get_task_or_raise(session, task_id, "update")
        _check_assignee(session, data.assignee_id)
        new_values = {
            "name": data.name,
            "description": data.description,
            "status": data.status.value,
            "priority": data.priority.value,
            "due_date": data.due_date,
            "assignee_id": data.assignee_id,
        }
        changed = [k for k, v in new_values.items() if getattr(task, k) != v]
        for key in changed:
            setattr(task, key, new_values[key])

    log(log_task_event("task_updated", task_id, ctx.user_id, fields_changed=changed))
    return ActionResult.ok("Task updated successfully!", record_id=task_id)


@returns_action_result
def update_task_status(task_id: int, status: str) -> ActionResult:
    ctx = require_request_context()
    try:
        new_status = TaskStatus(status)
    except ValueError:
        raise TaskboardValidationError(f"Unknown status '{status}'") from None

    with session_scope() as session:
        task = _get_task_or_raise(session, task_id, "update")
        task.status = new_status.value

    log(log_task_event("task_status_updated", task_id, ctx.user_id, fields_changed=["status"]))
    return ActionResult.ok(record_id=task_id)


@returns_action_result
def delete_task(task_id: int) -> ActionResult:
    """Delete a task and, by cascade, its comments."""
    ctx = require_request_context()
    with session_scope() as session:
        task = _get_task_or_raise(session, task_id, "delete")
        session.delete(task)

    log(log_task_event("task_deleted", task_id, ctx.user_id))
    logger.info(f"Task {task_id} deleted by user {ctx.user_id}")
    return ActionResult.ok("Task deleted", record_id=task_id)
