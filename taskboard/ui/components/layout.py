"""
Taskboard UI — Layout component (header + content).
"""

import reflex as rx

from taskboard.ui.state import AuthState


def page_layout(content: rx.Component, **props) -> rx.Component:
    """Wrap content in the app layout with a top header."""
    return rx.box(
        _header(),
        rx.divider(),
        rx.container(content, size="4", padding_y="6"),
        width="100%",
        min_height="100vh",
        **props,
    )


def _header() -> rx.Component:
    return rx.hstack(
        rx.hstack(
            rx.icon("list-checks", size=20),
            rx.heading("Taskboard", size="4"),
            spacing="2",
            align="center",
        ),
        rx.spacer(),
        rx.text(AuthState.display_name, size="2", color="gray"),
        rx.button(
            "Logout",
            size="1",
            variant="ghost",
            on_click=AuthState.logout,
        ),
        padding="3",
        width="100%",
        align="center",
    )


def auth_card(title: str, subtitle: str, form: rx.Component, footer: rx.Component) -> rx.Component:
    """Centered card used by the login and signup pages."""
    return rx.center(
        rx.card(
            rx.vstack(
                rx.heading(title, size="6", text_align="center"),
                rx.text(subtitle, color="gray", text_align="center"),
                rx.divider(),
                form,
                footer,
                spacing="4",
                width="100%",
                padding="6",
            ),
            width="400px",
        ),
        min_height="100vh",
    )


def error_callout(message) -> rx.Component:
    return rx.cond(
        message != "",
        rx.callout(message, icon="triangle_alert", color_scheme="red", size="1"),
    )
