"""
Optimistic overlay for the task list.

The visible list is always ``project(confirmed, actions)``: the last
confirmed snapshot with every queued local action replayed on top. Nothing
is mutated in place, so the projection can be recomputed at any time.

Action lifecycle:
    dispatch()          → action queued, projection updated synchronously
    settle()            → mutation finished (success or not); still applied
    replace_confirmed() → new snapshot; settled toggles are dropped, in-flight
                          actions and all deletes keep applying
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from taskboard.schemas import TaskRead, TaskStatus


class ActionKind(str, Enum):
    DELETE = "delete"
    TOGGLE = "toggle"


@dataclass(frozen=True)
class TaskAction:
    kind: ActionKind
    task_id: int

    @classmethod
    def delete(cls, task_id: int) -> "TaskAction":
        return cls(ActionKind.DELETE, task_id)

    @classmethod
    def toggle(cls, task_id: int) -> "TaskAction":
        return cls(ActionKind.TOGGLE, task_id)


def toggled_status(status: TaskStatus) -> TaskStatus:
    """done → todo; anything else → done."""
    return TaskStatus.TODO if status == TaskStatus.DONE else TaskStatus.DONE


def apply_action(tasks: Sequence[TaskRead], action: TaskAction) -> List[TaskRead]:
    """Reducer: the task list after a single action."""
    if action.kind == ActionKind.DELETE:
        return [t for t in tasks if t.id != action.task_id]
    if action.kind == ActionKind.TOGGLE:
        return [
            t.model_copy(update={"status": toggled_status(t.status)}) if t.id == action.task_id else t
            for t in tasks
        ]
    return list(tasks)


def project(confirmed: Sequence[TaskRead], actions: Iterable[TaskAction]) -> List[TaskRead]:
    """Replay *actions* in order over *confirmed*."""
    return functools.reduce(apply_action, actions, list(confirmed))


@dataclass
class _Queued:
    ticket: int
    action: TaskAction
    settled: bool = False


class OptimisticOverlay:
    """Confirmed task snapshot plus the queue of local actions."""

    def __init__(self, confirmed: Iterable[TaskRead] = ()):
        self._confirmed: List[TaskRead] = list(confirmed)
        self._queue: List[_Queued] = []
        self._last_ticket = 0
        self._tasks: List[TaskRead] = list(self._confirmed)

    @property
    def confirmed(self) -> List[TaskRead]:
        return list(self._confirmed)

    @property
    def tasks(self) -> List[TaskRead]:
        """The optimistic projection."""
        return list(self._tasks)

    @property
    def in_flight(self) -> List[TaskAction]:
        return [q.action for q in self._queue if not q.settled]

    @property
    def actions(self) -> List[TaskAction]:
        return [q.action for q in self._queue]

    def confirmed_task(self, task_id: int) -> Optional[TaskRead]:
        return next((t for t in self._confirmed if t.id == task_id), None)

    def get(self, task_id: int) -> Optional[TaskRead]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def dispatch(self, action: TaskAction) -> int:
        """Queue an action and apply it. Returns a ticket for settle()."""
        self._last_ticket += 1
        ticket = self._last_ticket
        self._queue.append(_Queued(ticket, action))
        self._tasks = apply_action(self._tasks, action)
        return ticket

    def settle(self, ticket: int) -> None:
        for queued in self._queue:
            if queued.ticket == ticket:
                queued.settled = True
                return

    def replace_confirmed(self, confirmed: Iterable[TaskRead]) -> None:
        """Install a fresh snapshot from the server and recompute."""
        self._confirmed = list(confirmed)
        self._queue = [
            q for q in self._queue
            if not q.settled or q.action.kind == ActionKind.DELETE
        ]
        self._tasks = project(self._confirmed, self.actions)
