"""
Taskboard UI — Dashboard Page

Route: /
"""

import reflex as rx

from taskboard.ui.components.layout import error_callout, page_layout
from taskboard.ui.components.task_forms import create_task_dialog
from taskboard.ui.components.task_list import task_list
from taskboard.ui.state import TaskListState


def dashboard_page() -> rx.Component:
    """Stats row, 'New Task' dialog and the task list."""
    return page_layout(
        rx.vstack(
            rx.hstack(
                rx.vstack(
                    rx.heading("Tasks", size="6"),
                    rx.text(f"Welcome back, {TaskListState.display_name}", color="gray"),
                    spacing="1",
                ),
                rx.spacer(),
                create_task_dialog(),
                width="100%",
                align="center",
            ),
            rx.grid(
                _stat_card("Total", "total", "list"),
                _stat_card("To Do", "todo", "circle"),
                _stat_card("In Progress", "in_progress", "loader"),
                _stat_card("Done", "done", "circle-check"),
                _stat_card("Overdue", "overdue", "clock"),
                columns="5",
                spacing="4",
                width="100%",
            ),
            error_callout(TaskListState.load_error),
            rx.divider(),
            task_list(),
            spacing="5",
            width="100%",
        ),
        on_mount=TaskListState.load,
    )


def _stat_card(title: str, key: str, icon: str) -> rx.Component:
    return rx.card(
        rx.hstack(
            rx.icon(icon, size=18, color="gray"),
            rx.vstack(
                rx.text(title, size="2", color="gray"),
                rx.text(TaskListState.stats[key], weight="bold", size="5"),
                spacing="0",
            ),
            spacing="3",
            align="center",
        ),
    )
