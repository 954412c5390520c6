"""Submit state for the create and edit task forms."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from taskboard.schemas import ActionResult

logger = logging.getLogger("taskboard.core.forms")

GENERIC_ERROR = "Something went wrong. Please try again."


@dataclass(frozen=True)
class Banner:
    kind: str  # "error" | "success"
    text: str

    @property
    def color_scheme(self) -> str:
        return "red" if self.kind == "error" else "green"

    def __iter__(self):
        return iter((self.kind, self.text))


class FormState:
    """
    Pending flag plus the last ActionResult of a form.

    Example:
        form = FormState("Create Task", "Creating...", on_finish=close_dialog)
        await form.submit(lambda: actions.create_task(payload))
        form.banner()   # ("success", "Task created successfully!")
    """

    def __init__(
        self,
        idle_label: str,
        busy_label: str,
        on_finish: Optional[Callable[[], None]] = None,
    ):
        self.idle_label = idle_label
        self.busy_label = busy_label
        self.on_finish = on_finish
        self.pending = False
        self.result: Optional[ActionResult] = None

    @property
    def submit_label(self) -> str:
        return self.busy_label if self.pending else self.idle_label

    @property
    def submit_disabled(self) -> bool:
        return self.pending

    def banner(self) -> Optional[Banner]:
        if self.result is None:
            return None
        if self.result.error:
            return Banner("error", self.result.error)
        if self.result.success and self.result.message:
            return Banner("success", self.result.message)
        return None

    def reset(self) -> None:
        self.pending = False
        self.result = None

    async def submit(self, action: Callable[[], Awaitable[ActionResult]]) -> ActionResult:
        self.pending = True
        try:
            result = await action()
        except Exception as e:
            logger.error(f"Form submission failed: {e}")
            result = ActionResult.fail(GENERIC_ERROR)
        finally:
            self.pending = False

        self.result = result
        if result.success and self.on_finish is not None:
            self.on_finish()
        return result
