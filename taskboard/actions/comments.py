"""Comment actions: add to a task, delete (author or task creator only)."""

from __future__ import annotations

import logging

from taskboard.actions.base import returns_action_result
from taskboard.core.task_comments import can_delete_comment
from taskboard.db.models import Comment, Task
from taskboard.db.session import session_scope
from taskboard.engine.context import require_request_context
from taskboard.engine.errors import (
    TaskboardNotFoundError,
    TaskboardSecurityError,
    TaskboardValidationError,
)
from taskboard.engine.logging import log, log_comment_event, log_security_event
from taskboard.schemas import ActionResult

logger = logging.getLogger("taskboard.actions.comments")

MAX_COMMENT_LENGTH = 5000


@returns_action_result
def add_comment(task_id: int, content: str) -> ActionResult:
    """
    Add a comment by the current user. Blank content is rejected; otherwise
    the content is stored exactly as submitted.
    """
    ctx = require_request_context()
    if content is None or not content.strip():
        raise TaskboardValidationError("Comment cannot be empty")
    if len(content) > MAX_COMMENT_LENGTH:
        raise TaskboardValidationError(
            f"Comment must be at most {MAX_COMMENT_LENGTH} characters"
        )

    with session_scope() as session:
        if session.get(Task, task_id) is None:
            raise TaskboardNotFoundError(
                f"Task {task_id} not found",
                record_type="Task",
                record_id=task_id,
                operation="comment",
            )
        comment = Comment(content=content, task_id=task_id, author_id=ctx.user_id)
        session.add(comment)
        session.flush()
        comment_id = comment.id

    log(log_comment_event("comment_added", comment_id, task_id, ctx.user_id))
    return ActionResult.ok("Comment added", record_id=comment_id)


@returns_action_result
def delete_comment(comment_id: int) -> ActionResult:
    """Delete a comment. Only its author or the task's creator may do so."""
    ctx = require_request_context()

    with session_scope() as session:
        comment = session.get(Comment, comment_id)
        if comment is None:
            raise TaskboardNotFoundError(
                f"Comment {comment_id} not found",
                record_type="Comment",
                record_id=comment_id,
                operation="delete",
            )
        task_id = comment.task_id
        if not can_delete_comment(ctx.user_id, comment.author_id, comment.task.creator_id):
            log(log_security_event(
                "comments", "delete_comment", ctx.user_id,
                target_id=comment_id,
                reason="not the author or task creator",
            ))
            logger.warning(f"User {ctx.user_id} denied deleting comment {comment_id}")
            raise TaskboardSecurityError(
                "You can only delete your own comments or comments on your tasks",
                user_id=ctx.user_id,
                action="delete_comment",
            )
        session.delete(comment)

    log(log_comment_event("comment_deleted", comment_id, task_id, ctx.user_id))
    return ActionResult.ok("Comment deleted", record_id=comment_id)
