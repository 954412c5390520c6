"""
Taskboard server actions.

The functions in ``users``, ``tasks`` and ``comments`` are synchronous and
read the caller from the RequestContext. ServerActions is the async facade
used by the UI: it resolves a session token into a context and runs each
call in a worker thread so the event loop never blocks on the database.

Usage:
    actions = ServerActions(session_token)
    result = await actions.update_task_status(task_id, "done")
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Mapping, Optional, TypeVar

from taskboard.actions import comments, tasks, users
from taskboard.engine.context import request_context
from taskboard.engine.security import get_auth_service
from taskboard.schemas import ActionResult, TaskRead, TaskStats, UserRead

logger = logging.getLogger("taskboard.actions")

T = TypeVar("T")


class ServerActions:
    """Async adapter over the action functions, bound to one session token."""

    def __init__(self, session_token: Optional[str]):
        self.session_token = session_token

    def _invoke(self, fn: Callable[..., T], *args: Any) -> T:
        ctx = get_auth_service().validate_session(self.session_token)
        with request_context(ctx):
            return fn(*args)

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(self._invoke, fn, *args)

    # -- users --------------------------------------------------------------

    async def get_current_user(self) -> Optional[UserRead]:
        return await self._run(users.get_current_user)

    async def get_all_users(self) -> List[UserRead]:
        return await self._run(users.get_all_users)

    # -- tasks --------------------------------------------------------------

    async def list_tasks(self) -> List[TaskRead]:
        return await self._run(tasks.list_tasks)

    async def get_task_stats(self) -> TaskStats:
        return await self._run(tasks.get_task_stats)

    async def create_task(self, form: Mapping[str, Any]) -> ActionResult:
        return await self._run(tasks.create_task, form)

    async def update_task(self, task_id: int, form: Mapping[str, Any]) -> ActionResult:
        return await self._run(tasks.update_task, task_id, form)

    async def update_task_status(self, task_id: int, new_status: str) -> ActionResult:
        return await self._run(tasks.update_task_status, task_id, new_status)

    async def delete_task(self, task_id: int) -> ActionResult:
        return await self._run(tasks.delete_task, task_id)

    # -- comments -----------------------------------------------------------

    async def add_comment(self, task_id: int, content: str) -> ActionResult:
        return await self._run(comments.add_comment, task_id, content)

    async def delete_comment(self, comment_id: int) -> ActionResult:
        return await self._run(comments.delete_comment, comment_id)


__all__ = ["ServerActions", "comments", "tasks", "users"]
