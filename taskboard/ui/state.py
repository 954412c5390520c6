"""
Taskboard UI — Reflex state.

Provides:
- AuthState: login/signup/logout, session cookie, guarded current-user load
- TaskListState: dashboard data, wraps a core TaskListView
- CreateTaskState / EditTaskState: task form submission and banners

The view logic lives in taskboard.core; these states only translate it into
plain vars for the components and refresh from the server after mutations.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import asdict
from typing import Any, Awaitable, Dict, List, Optional

import reflex as rx

from taskboard.actions import ServerActions, users
from taskboard.core.display import format_date_for_display, format_date_for_input
from taskboard.core.forms import FormState
from taskboard.core.task_list import CurrentUserResult, TaskListView, load_current_user
from taskboard.engine.config import get_config
from taskboard.engine.errors import TaskboardError, TaskboardSessionError
from taskboard.schemas import TaskRead

logger = logging.getLogger("taskboard.ui.state")

SESSION_COOKIE = "taskboard_session"
UNASSIGNED = "unassigned"


async def _started(coro: Awaitable[Any]) -> "asyncio.Future[Any]":
    """Schedule *coro* and let it run up to its first suspension point."""
    task = asyncio.ensure_future(coro)
    await asyncio.sleep(0)
    return task


def _form_payload(form_data: Dict[str, Any]) -> Dict[str, Any]:
    """Raw rx.form data → TaskCreate/TaskUpdate payload."""
    payload = dict(form_data)
    if payload.get("assignee_id") in (None, UNASSIGNED):
        payload["assignee_id"] = ""
    return payload


class AuthState(rx.State):
    """Session cookie and the logged-in user's identity."""

    session_token: str = rx.Cookie("", name=SESSION_COOKIE, max_age=7 * 24 * 3600)
    user_id: int = 0
    user_name: str = ""
    user_email: str = ""

    auth_error: str = ""
    is_loading: bool = False

    @rx.var
    def display_name(self) -> str:
        return self.user_name or self.user_email

    def actions(self) -> ServerActions:
        return ServerActions(self.session_token or None)

    async def login(self, form_data: dict):
        """Handle login form submission."""
        email = form_data.get("email", "").strip()
        password = form_data.get("password", "")
        if not email or not password:
            self.auth_error = "Email and password are required"
            return

        self.is_loading = True
        self.auth_error = ""
        yield
        try:
            token = await asyncio.to_thread(users.log_in, email, password)
        except TaskboardSessionError as e:
            self.auth_error = e.message
            self.is_loading = False
            return

        self.session_token = token
        self.is_loading = False
        yield rx.redirect("/")

    async def signup(self, form_data: dict):
        """Create the account, then log straight in."""
        name = form_data.get("name", "").strip() or None
        email = form_data.get("email", "").strip()
        password = form_data.get("password", "")

        self.is_loading = True
        self.auth_error = ""
        yield
        result = await asyncio.to_thread(users.sign_up, name, email, password)
        if not result.success:
            self.auth_error = result.error or "Sign up failed"
            self.is_loading = False
            return

        try:
            self.session_token = await asyncio.to_thread(users.log_in, email, password)
        except TaskboardSessionError as e:
            self.auth_error = e.message
            self.is_loading = False
            return
        self.is_loading = False
        yield rx.redirect("/")

    async def logout(self):
        if self.session_token:
            await asyncio.to_thread(users.log_out, self.session_token)
        self.session_token = ""
        self.user_id = 0
        self.user_name = ""
        self.user_email = ""
        return rx.redirect("/login")

    async def _load_user(self, actions: ServerActions) -> CurrentUserResult:
        """Fetch the current user once. Failures are logged, never raised."""
        result = await load_current_user(actions.get_current_user)
        if result.user is not None:
            self.user_id = result.user.id
            self.user_name = result.user.name or ""
            self.user_email = result.user.email
        return result


class TaskListState(AuthState):
    """Dashboard task list. The TaskListView is kept in a backend var."""

    tasks: List[Dict[str, Any]] = []
    comments: Dict[str, List[Dict[str, Any]]] = {}
    drafts: Dict[str, str] = {}
    has_current_user: bool = False
    stats: Dict[str, int] = {}
    assignee_options: List[Dict[str, str]] = []
    load_error: str = ""

    _view: Optional[TaskListView] = None

    def _format_date(self):
        return functools.partial(
            format_date_for_display, fmt=get_config().ui.display_date_format
        )

    async def load(self):
        """on_mount: one current-user load (auth redirect + view), then the first fetch."""
        actions = self.actions()
        current = await self._load_user(actions)
        if current.is_anonymous:
            return rx.redirect("/login")

        try:
            tasks = await actions.list_tasks()
        except TaskboardError as e:
            logger.error(f"Failed to load tasks: {e!r}")
            self.load_error = "Could not load tasks"
            return None

        self._view = TaskListView(tasks, actions, format_date=self._format_date())
        await self._view.mount(current)
        await self._load_aux(actions)
        self.load_error = ""
        self._sync()
        return None

    async def refresh(self) -> None:
        """Replace the confirmed snapshot with a fresh server read."""
        if self._view is None:
            return
        actions = self.actions()
        try:
            tasks = await actions.list_tasks()
        except TaskboardError as e:
            logger.error(f"Failed to refresh tasks: {e!r}")
            return
        self._view.replace_confirmed(tasks)
        await self._load_aux(actions)
        self._sync()

    async def _load_aux(self, actions: ServerActions) -> None:
        stats = await actions.get_task_stats()
        self.stats = stats.model_dump()
        people = await actions.get_all_users()
        self.assignee_options = [
            {"value": str(u.id), "label": u.name or u.email} for u in people
        ]

    def _sync(self) -> None:
        view = self._view
        if view is None:
            return
        rows: List[Dict[str, Any]] = []
        comments: Dict[str, List[Dict[str, Any]]] = {}
        drafts: Dict[str, str] = {}
        for row in view.rows():
            key = str(row.id)
            thread = view.comments_view(row.id)
            task = view.overlay.get(row.id)
            data = asdict(row)
            data.update(
                key=key,
                comments_heading=thread.heading,
                comments_empty=thread.is_empty,
                comment_submit_label=thread.submit_label,
                comment_submit_disabled=thread.submit_disabled,
                comments_pending=thread.pending,
                due_input=format_date_for_input(task.due_date),
                assignee_value=str(task.assignee_id) if task.assignee_id else UNASSIGNED,
            )
            rows.append(data)
            comments[key] = [asdict(c) for c in thread.rows()]
            drafts[key] = thread.draft
        self.tasks = rows
        self.comments = comments
        self.drafts = drafts
        self.has_current_user = view.current_user_id is not None

    # -- optimistic task mutations -------------------------------------------

    async def toggle_status(self, task_id: int):
        task: Optional[TaskRead] = self._view.overlay.get(task_id) if self._view else None
        if task is None:
            return
        pending = self._view.toggle_status(task)
        self._sync()
        yield
        await pending
        await self.refresh()

    async def delete_task(self, task_id: int):
        if self._view is None:
            return
        pending = self._view.delete_task(task_id)
        self._sync()
        yield
        await pending
        await self.refresh()

    # -- panels -------------------------------------------------------------

    def open_edit_dialog(self, task_id: int):
        if self._view is not None:
            self._view.open_edit_dialog(task_id)
            self._sync()

    def set_dialog_open(self, task_id: int, is_open: bool):
        if self._view is not None:
            self._view.set_dialog_open(task_id, is_open)
            self._sync()

    def set_dropdown_open(self, task_id: int, is_open: bool):
        if self._view is not None:
            self._view.set_dropdown_open(task_id, is_open)
            self._sync()

    # -- comments -----------------------------------------------------------

    def set_draft(self, task_id: int, text: str):
        thread = self._view.comments_view(task_id) if self._view else None
        if thread is not None:
            thread.set_draft(text)
            self._sync()

    async def add_comment(self, task_id: int):
        thread = self._view.comments_view(task_id) if self._view else None
        if thread is None or not thread.draft.strip():
            return
        submission = await _started(thread.add_comment())
        self._sync()
        yield
        result = await submission
        if result is not None and result.success:
            await self.refresh()
        else:
            self._sync()

    async def delete_comment(self, task_id: int, comment_id: int):
        thread = self._view.comments_view(task_id) if self._view else None
        if thread is None:
            return
        deletion = await _started(thread.delete_comment(comment_id))
        self._sync()
        yield
        await deletion
        await self.refresh()


class CreateTaskState(AuthState):
    """New-task dialog."""

    dialog_open: bool = False
    is_pending: bool = False
    submit_label: str = "Create Task"
    banner_kind: str = ""
    banner_text: str = ""

    def set_dialog_open(self, is_open: bool):
        self.dialog_open = is_open
        if is_open:
            self.banner_kind = ""
            self.banner_text = ""

    def _close(self) -> None:
        self.dialog_open = False

    def _mirror(self, form: FormState) -> None:
        self.is_pending = form.pending
        self.submit_label = form.submit_label
        banner = form.banner()
        self.banner_kind = banner.kind if banner else ""
        self.banner_text = banner.text if banner else ""

    async def submit(self, form_data: dict):
        form = FormState("Create Task", "Creating...", on_finish=self._close)
        payload = _form_payload(form_data)
        actions = self.actions()
        submission = await _started(form.submit(lambda: actions.create_task(payload)))
        self._mirror(form)
        yield
        result = await submission
        self._mirror(form)
        if result.success:
            list_state = await self.get_state(TaskListState)
            await list_state.refresh()


class EditTaskState(AuthState):
    """Edit form inside a task's dialog. One banner, for the task last submitted."""

    pending_task_id: int = 0
    submit_label: str = "Save Changes"
    banner_task_id: int = 0
    banner_kind: str = ""
    banner_text: str = ""

    async def submit(self, task_id: int, form_data: dict):
        list_state = await self.get_state(TaskListState)

        def close_dialog() -> None:
            if list_state._view is not None:
                list_state._view.close_edit_dialog(task_id)

        form = FormState("Save Changes", "Saving...", on_finish=close_dialog)
        payload = _form_payload(form_data)
        actions = self.actions()
        submission = await _started(form.submit(lambda: actions.update_task(task_id, payload)))
        self.pending_task_id = task_id
        self.submit_label = form.submit_label
        self.banner_task_id = 0
        yield
        await submission
        self.pending_task_id = 0
        self.submit_label = form.submit_label
        banner = form.banner()
        self.banner_task_id = task_id
        self.banner_kind = banner.kind if banner else ""
        self.banner_text = banner.text if banner else ""
        await list_state.refresh()
