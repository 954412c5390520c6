"""
Taskboard UI — Task list: one card per task with a status toggle, an actions
dropdown and a dialog holding the edit form and comment thread.
"""

import reflex as rx

from taskboard.ui.components.task_comments import comments_section
from taskboard.ui.components.task_forms import edit_task_form
from taskboard.ui.state import TaskListState


def task_list() -> rx.Component:
    return rx.cond(
        TaskListState.tasks.length() > 0,
        rx.vstack(
            rx.foreach(TaskListState.tasks, _task_card),
            spacing="3",
            width="100%",
        ),
        rx.center(
            rx.text("No tasks yet. Create one to get started.", color="gray"),
            padding="8",
            width="100%",
        ),
    )


def _task_card(task: rx.Var) -> rx.Component:
    return rx.card(
        rx.hstack(
            rx.checkbox(
                checked=task["is_done"],
                on_change=lambda _checked: TaskListState.toggle_status(task["id"]),
            ),
            rx.vstack(
                rx.hstack(
                    rx.badge(task["badge"], variant="outline", color_scheme="gray"),
                    rx.text(
                        task["name"],
                        weight="bold",
                        text_decoration=rx.cond(task["is_done"], "line-through", "none"),
                        color=rx.cond(task["is_done"], "gray", "inherit"),
                    ),
                    spacing="2",
                    align="center",
                ),
                rx.hstack(
                    rx.badge(task["status_label"], color_scheme=_status_color(task["status"])),
                    rx.badge(task["priority"], color_scheme=_priority_color(task["priority"])),
                    rx.cond(
                        task["due_label"] != "",
                        rx.hstack(
                            rx.icon("calendar", size=12),
                            rx.text(task["due_label"], size="1", color="gray"),
                            spacing="1",
                            align="center",
                        ),
                    ),
                    rx.cond(
                        task["comment_count"] > 0,
                        rx.hstack(
                            rx.icon("message-square", size=12),
                            rx.text(task["comment_count"], size="1", color="gray"),
                            spacing="1",
                            align="center",
                        ),
                    ),
                    spacing="2",
                    align="center",
                ),
                spacing="1",
                flex="1",
            ),
            _assignee(task),
            _actions_menu(task),
            _task_dialog(task),
            spacing="3",
            align="center",
            width="100%",
        ),
        width="100%",
    )


def _assignee(task: rx.Var) -> rx.Component:
    return rx.tooltip(
        rx.cond(
            task["has_assignee"],
            rx.avatar(fallback=task["assignee_initials"], size="2", radius="full"),
            rx.avatar(fallback="?", size="2", radius="full", color_scheme="gray"),
        ),
        content=task["assignee_name"],
    )


def _actions_menu(task: rx.Var) -> rx.Component:
    return rx.dropdown_menu.root(
        rx.dropdown_menu.trigger(
            rx.icon_button(rx.icon("ellipsis", size=16), variant="ghost", size="1"),
        ),
        rx.dropdown_menu.content(
            rx.dropdown_menu.item(
                "Edit",
                on_click=TaskListState.open_edit_dialog(task["id"]),
            ),
            rx.dropdown_menu.separator(),
            rx.dropdown_menu.item(
                "Delete",
                color="red",
                on_click=TaskListState.delete_task(task["id"]),
            ),
        ),
        open=task["dropdown_open"],
        on_open_change=lambda is_open: TaskListState.set_dropdown_open(task["id"], is_open),
    )


def _task_dialog(task: rx.Var) -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(task["name"]),
            rx.dialog.description(task["badge"], size="1", color="gray"),
            rx.vstack(
                edit_task_form(task),
                rx.divider(),
                comments_section(task),
                spacing="4",
                width="100%",
                padding_top="3",
            ),
            max_width="640px",
        ),
        open=task["dialog_open"],
        on_open_change=lambda is_open: TaskListState.set_dialog_open(task["id"], is_open),
    )


def _status_color(status: rx.Var) -> rx.Var:
    return rx.match(status, ("done", "green"), ("in_progress", "blue"), "gray")


def _priority_color(priority: rx.Var) -> rx.Var:
    return rx.match(priority, ("high", "red"), ("medium", "orange"), "gray")
