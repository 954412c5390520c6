"""
Task list view logic.

Holds the optimistic overlay, the per-task dialog and dropdown flags and the
current user. Mutation methods apply the local change synchronously and hand
back an awaitable for the server call, so the host can render the optimistic
state before awaiting it.

Example (inside a Reflex event handler):

    pending = view.toggle_status(task)
    yield                      # render the flipped status
    await pending
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

from taskboard.core.display import format_date_for_display, initials
from taskboard.core.optimistic import OptimisticOverlay, TaskAction, toggled_status
from taskboard.core.ports import TaskMutations
from taskboard.core.task_comments import TaskCommentsView
from taskboard.schemas import ActionResult, TaskRead, TaskStatus, UserRead

logger = logging.getLogger("taskboard.core.task_list")

UNASSIGNED_LABEL = "Unassigned"


class PanelState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class PanelFlags:
    """Open/closed state of one kind of panel, per task id."""

    def __init__(self):
        self._states: Dict[int, PanelState] = {}

    def state(self, task_id: int) -> PanelState:
        return self._states.get(task_id, PanelState.CLOSED)

    def is_open(self, task_id: int) -> bool:
        return self.state(task_id) == PanelState.OPEN

    def set(self, task_id: int, is_open: bool) -> None:
        self._states[task_id] = PanelState.OPEN if is_open else PanelState.CLOSED

    def open(self, task_id: int) -> None:
        self.set(task_id, True)

    def close(self, task_id: int) -> None:
        self.set(task_id, False)

    def open_ids(self) -> List[int]:
        return [tid for tid, state in self._states.items() if state == PanelState.OPEN]


@dataclass(frozen=True)
class CurrentUserResult:
    """Outcome of the current-user load: a user, anonymous, or an error."""
    user: Optional[UserRead] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user is not None else None

    @property
    def is_anonymous(self) -> bool:
        """The fetch succeeded and nobody is logged in."""
        return self.ok and self.user is None


async def load_current_user(
    fetch: Callable[[], Awaitable[Optional[UserRead]]],
) -> CurrentUserResult:
    """Await *fetch*. A failure is logged and reported as anonymous."""
    try:
        user = await fetch()
    except Exception as e:
        logger.error(f"Failed to load current user: {e}")
        return CurrentUserResult(error=str(e) or e.__class__.__name__)
    return CurrentUserResult(user=user)


@dataclass(frozen=True)
class TaskRow:
    """One rendered task card."""
    id: int
    badge: str
    name: str
    description: str
    status: str
    status_label: str
    priority: str
    is_done: bool
    assignee_name: str
    assignee_initials: str
    has_assignee: bool
    due_label: str
    comment_count: int
    creator_id: int
    dialog_open: bool
    dropdown_open: bool


class TaskListView:
    """Interactive task list over a confirmed snapshot."""

    def __init__(
        self,
        tasks: Iterable[TaskRead],
        mutations: TaskMutations,
        format_date: Callable[..., str] = format_date_for_display,
    ):
        self._overlay = OptimisticOverlay(tasks)
        self._mutations = mutations
        self._format_date = format_date
        self._comment_views: Dict[int, TaskCommentsView] = {}
        self.dialogs = PanelFlags()
        self.dropdowns = PanelFlags()
        self.current_user: CurrentUserResult = CurrentUserResult()
        self.user_loaded = False

    # -- state --------------------------------------------------------------

    @property
    def tasks(self) -> List[TaskRead]:
        """Optimistic projection, in confirmed order."""
        return self._overlay.tasks

    @property
    def confirmed(self) -> List[TaskRead]:
        return self._overlay.confirmed

    @property
    def overlay(self) -> OptimisticOverlay:
        return self._overlay

    @property
    def current_user_id(self) -> Optional[int]:
        return self.current_user.user_id

    async def mount(self, loaded: Optional[CurrentUserResult] = None) -> CurrentUserResult:
        """
        Load the current user once. Later calls return the cached result.

        A host that already ran load_current_user passes its result as
        *loaded* so the user is not fetched a second time.
        """
        if not self.user_loaded:
            if loaded is None:
                loaded = await load_current_user(self._mutations.get_current_user)
            self.current_user = loaded
            self.user_loaded = True
            for view in self._comment_views.values():
                view.current_user_id = self.current_user_id
        return self.current_user

    def replace_confirmed(self, tasks: Iterable[TaskRead]) -> None:
        """Install a fresh server snapshot. Comment drafts survive."""
        self._overlay.replace_confirmed(tasks)
        by_id = {t.id: t for t in self._overlay.confirmed}
        for task_id in list(self._comment_views):
            task = by_id.get(task_id)
            if task is None:
                del self._comment_views[task_id]
            else:
                self._comment_views[task_id].replace_comments(task.comments)

    # -- optimistic mutations -------------------------------------------------

    def toggle_status(self, task: TaskRead) -> Awaitable[Optional[ActionResult]]:
        """Flip done/todo locally, then send the opposite of the confirmed status."""
        confirmed = self._overlay.confirmed_task(task.id) or task
        new_status = toggled_status(confirmed.status)
        ticket = self._overlay.dispatch(TaskAction.toggle(task.id))
        return self._settle_after(
            ticket,
            self._mutations.update_task_status(task.id, new_status.value),
            f"update status of task {task.id}",
        )

    def delete_task(self, task_id: int) -> Awaitable[Optional[ActionResult]]:
        """Remove the task locally, then send the delete."""
        ticket = self._overlay.dispatch(TaskAction.delete(task_id))
        self.dialogs.close(task_id)
        self.dropdowns.close(task_id)
        return self._settle_after(
            ticket,
            self._mutations.delete_task(task_id),
            f"delete task {task_id}",
        )

    async def _settle_after(
        self,
        ticket: int,
        call: Awaitable[ActionResult],
        description: str,
    ) -> Optional[ActionResult]:
        try:
            result = await call
        except Exception as e:
            logger.error(f"Failed to {description}: {e}")
            return None
        finally:
            self._overlay.settle(ticket)
        if not result.success:
            logger.warning(f"Failed to {description}: {result.error}")
        return result

    # -- panels -------------------------------------------------------------

    def open_edit_dialog(self, task_id: int) -> None:
        self.dropdowns.close(task_id)
        self.dialogs.open(task_id)

    def close_edit_dialog(self, task_id: int) -> None:
        self.dialogs.close(task_id)

    def set_dialog_open(self, task_id: int, is_open: bool) -> None:
        if is_open:
            self.open_edit_dialog(task_id)
        else:
            self.close_edit_dialog(task_id)

    def set_dropdown_open(self, task_id: int, is_open: bool) -> None:
        self.dropdowns.set(task_id, is_open)

    # -- rendering ----------------------------------------------------------

    def comments_view(self, task_id: int) -> Optional[TaskCommentsView]:
        """Comment thread for a visible task, created on first use."""
        task = self._overlay.get(task_id)
        if task is None:
            return None
        view = self._comment_views.get(task_id)
        if view is None:
            view = TaskCommentsView(
                task_id=task.id,
                comments=task.comments,
                current_user_id=self.current_user_id,
                task_creator_id=task.creator_id,
                mutations=self._mutations,
                format_date=self._format_date,
            )
            self._comment_views[task_id] = view
        return view

    def rows(self) -> List[TaskRow]:
        return [self._row(t) for t in self._overlay.tasks]

    def _row(self, task: TaskRead) -> TaskRow:
        assignee = task.assignee
        return TaskRow(
            id=task.id,
            badge=f"TASK-{task.id}",
            name=task.name,
            description=task.description,
            status=task.status.value,
            status_label=task.status.label,
            priority=task.priority.value,
            is_done=task.status == TaskStatus.DONE,
            assignee_name=(assignee.name or assignee.email) if assignee else UNASSIGNED_LABEL,
            assignee_initials=initials(assignee.name) if assignee else "",
            has_assignee=assignee is not None,
            due_label=self._format_date(task.due_date) if task.due_date else "",
            comment_count=len(task.comments),
            creator_id=task.creator_id,
            dialog_open=self.dialogs.is_open(task.id),
            dropdown_open=self.dropdowns.is_open(task.id),
        )
