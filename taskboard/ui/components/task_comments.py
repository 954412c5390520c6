"""
Taskboard UI — Comment thread shown inside a task's dialog.
"""

import reflex as rx

from taskboard.core.task_comments import EMPTY_THREAD_MESSAGE
from taskboard.ui.state import TaskListState


def comments_section(task: rx.Var) -> rx.Component:
    """Heading, comment list and (for logged-in users) the add form."""
    return rx.vstack(
        rx.heading(task["comments_heading"], size="3"),
        rx.cond(
            task["comments_empty"],
            rx.text(EMPTY_THREAD_MESSAGE, size="2", color="gray"),
            rx.vstack(
                rx.foreach(
                    TaskListState.comments[task["key"]],
                    lambda comment: _comment_item(task, comment),
                ),
                spacing="3",
                width="100%",
            ),
        ),
        rx.cond(
            TaskListState.has_current_user,
            _add_comment_form(task),
        ),
        spacing="3",
        width="100%",
    )


def _comment_item(task: rx.Var, comment: rx.Var) -> rx.Component:
    return rx.hstack(
        rx.avatar(fallback=comment["author_initials"], size="2", radius="full"),
        rx.vstack(
            rx.hstack(
                rx.text(comment["author_name"], size="2", weight="bold"),
                rx.text(comment["created_label"], size="1", color="gray"),
                spacing="2",
                align="center",
            ),
            rx.text(comment["content"], size="2", white_space="pre-wrap"),
            spacing="1",
            flex="1",
        ),
        rx.cond(
            comment["can_delete"],
            rx.icon_button(
                rx.icon("trash-2", size=14),
                size="1",
                variant="ghost",
                color_scheme="red",
                disabled=task["comments_pending"],
                on_click=TaskListState.delete_comment(task["id"], comment["id"]),
            ),
        ),
        spacing="3",
        width="100%",
        align="start",
    )


def _add_comment_form(task: rx.Var) -> rx.Component:
    return rx.vstack(
        rx.text_area(
            placeholder="Add a comment...",
            value=TaskListState.drafts[task["key"]],
            on_change=lambda text: TaskListState.set_draft(task["id"], text),
            width="100%",
            rows="3",
        ),
        rx.hstack(
            rx.spacer(),
            rx.button(
                task["comment_submit_label"],
                size="2",
                disabled=task["comment_submit_disabled"],
                on_click=TaskListState.add_comment(task["id"]),
            ),
            width="100%",
        ),
        spacing="2",
        width="100%",
    )
