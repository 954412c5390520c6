"""
Taskboard UI — Create and edit task forms.

Both forms post the same fields; the select for "assignee_id" uses the
"unassigned" sentinel, mapped back to an empty value by the state.
"""

import reflex as rx

from taskboard.ui.state import UNASSIGNED, CreateTaskState, EditTaskState, TaskListState

STATUS_OPTIONS = [("todo", "To Do"), ("in_progress", "In Progress"), ("done", "Done")]
PRIORITY_OPTIONS = [("low", "Low"), ("medium", "Medium"), ("high", "High")]


def create_task_dialog() -> rx.Component:
    """'New Task' button plus its dialog."""
    return rx.dialog.root(
        rx.dialog.trigger(rx.button(rx.icon("plus", size=16), "New Task", size="2")),
        rx.dialog.content(
            rx.dialog.title("Create New Task"),
            rx.form(
                rx.vstack(
                    _banner(CreateTaskState.banner_kind, CreateTaskState.banner_text),
                    *_task_fields(),
                    rx.hstack(
                        rx.dialog.close(rx.button("Cancel", variant="outline", type="button")),
                        rx.button(
                            CreateTaskState.submit_label,
                            type="submit",
                            disabled=CreateTaskState.is_pending,
                        ),
                        spacing="3",
                        justify="end",
                        width="100%",
                    ),
                    spacing="3",
                    width="100%",
                ),
                on_submit=CreateTaskState.submit,
                reset_on_submit=False,
            ),
        ),
        open=CreateTaskState.dialog_open,
        on_open_change=CreateTaskState.set_dialog_open,
    )


def edit_task_form(task: rx.Var) -> rx.Component:
    """Edit form prefilled from a task row."""
    return rx.form(
        rx.vstack(
            rx.cond(
                EditTaskState.banner_task_id == task["id"],
                _banner(EditTaskState.banner_kind, EditTaskState.banner_text),
            ),
            *_task_fields(task),
            rx.hstack(
                rx.spacer(),
                rx.button(
                    rx.cond(
                        EditTaskState.pending_task_id == task["id"],
                        EditTaskState.submit_label,
                        "Save Changes",
                    ),
                    type="submit",
                    disabled=EditTaskState.pending_task_id == task["id"],
                ),
                width="100%",
            ),
            spacing="3",
            width="100%",
        ),
        on_submit=lambda data: EditTaskState.submit(task["id"], data),
        reset_on_submit=False,
        width="100%",
    )


def _task_fields(task=None) -> list:
    def default(field: str, fallback: str):
        return task[field] if task is not None else fallback

    return [
        _field("Name", rx.input(name="name", required=True, default_value=default("name", ""))),
        _field(
            "Description",
            rx.text_area(name="description", rows="3", default_value=default("description", "")),
        ),
        rx.hstack(
            _field("Status", _select("status", STATUS_OPTIONS, default("status", "todo"))),
            _field("Priority", _select("priority", PRIORITY_OPTIONS, default("priority", "medium"))),
            spacing="3",
            width="100%",
        ),
        rx.hstack(
            _field(
                "Due Date",
                rx.input(name="due_date", type="date", default_value=default("due_input", "")),
            ),
            _field("Assignee", _assignee_select(default("assignee_value", UNASSIGNED))),
            spacing="3",
            width="100%",
        ),
    ]


def _field(label: str, control: rx.Component) -> rx.Component:
    return rx.vstack(
        rx.text(label, size="2", weight="bold"),
        control,
        spacing="1",
        width="100%",
    )


def _select(name: str, options: list, default_value) -> rx.Component:
    return rx.select.root(
        rx.select.trigger(width="100%"),
        rx.select.content(
            *[rx.select.item(label, value=value) for value, label in options],
        ),
        name=name,
        default_value=default_value,
    )


def _assignee_select(default_value) -> rx.Component:
    return rx.select.root(
        rx.select.trigger(placeholder="Unassigned", width="100%"),
        rx.select.content(
            rx.select.item("Unassigned", value=UNASSIGNED),
            rx.foreach(
                TaskListState.assignee_options,
                lambda option: rx.select.item(option["label"], value=option["value"]),
            ),
        ),
        name="assignee_id",
        default_value=default_value,
    )


def _banner(kind, text) -> rx.Component:
    return rx.cond(
        text != "",
        rx.cond(
            kind == "error",
            rx.callout(text, icon="triangle_alert", color_scheme="red", size="1"),
            rx.callout(text, icon="circle_check", color_scheme="green", size="1"),
        ),
    )
