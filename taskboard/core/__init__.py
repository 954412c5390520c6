"""
Framework-free view logic for the dashboard: the optimistic task list, the
comment thread, form submit state and display helpers. The Reflex states in
taskboard.ui wrap these objects.
"""

from taskboard.core.display import (
    format_date_for_display,
    format_date_for_input,
    initials,
    parse_date_string,
)
from taskboard.core.forms import Banner, FormState
from taskboard.core.optimistic import (
    ActionKind,
    OptimisticOverlay,
    TaskAction,
    apply_action,
    project,
    toggled_status,
)
from taskboard.core.ports import TaskMutations
from taskboard.core.task_comments import CommentRow, TaskCommentsView, can_delete_comment
from taskboard.core.task_list import (
    CurrentUserResult,
    PanelFlags,
    PanelState,
    TaskListView,
    TaskRow,
    load_current_user,
)

__all__ = [
    "ActionKind",
    "Banner",
    "CommentRow",
    "CurrentUserResult",
    "FormState",
    "OptimisticOverlay",
    "PanelFlags",
    "PanelState",
    "TaskAction",
    "TaskCommentsView",
    "TaskListView",
    "TaskMutations",
    "TaskRow",
    "apply_action",
    "can_delete_comment",
    "format_date_for_display",
    "format_date_for_input",
    "initials",
    "load_current_user",
    "parse_date_string",
    "project",
    "toggled_status",
]
