"""
Ports used by the view logic in taskboard.core.

The views depend on this Protocol rather than on the server actions, so the
same logic runs against taskboard.actions.ServerActions in the app and
against AsyncMock fakes in tests.
"""

from __future__ import annotations

from typing import Awaitable, Optional, Protocol

from taskboard.schemas import ActionResult, UserRead


class TaskMutations(Protocol):
    """Asynchronous mutation endpoints and the current-user accessor."""

    def update_task_status(self, task_id: int, new_status: str) -> Awaitable[ActionResult]: ...

    def delete_task(self, task_id: int) -> Awaitable[ActionResult]: ...

    def add_comment(self, task_id: int, content: str) -> Awaitable[ActionResult]: ...

    def delete_comment(self, comment_id: int) -> Awaitable[ActionResult]: ...

    def get_current_user(self) -> Awaitable[Optional[UserRead]]: ...
