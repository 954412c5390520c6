"""
Taskboard UI — Login Page

Route: /login
"""

import reflex as rx

from taskboard.ui.components.layout import auth_card, error_callout
from taskboard.ui.state import AuthState


def login_page() -> rx.Component:
    return auth_card(
        "Taskboard",
        "Sign in to your account",
        rx.form(
            rx.vstack(
                rx.text("Email", size="2", weight="bold"),
                rx.input(placeholder="you@example.com", name="email", type="email", required=True, size="3"),
                rx.text("Password", size="2", weight="bold"),
                rx.input(placeholder="••••••••", name="password", type="password", required=True, size="3"),
                error_callout(AuthState.auth_error),
                rx.button(
                    "Sign In",
                    type="submit",
                    size="3",
                    width="100%",
                    loading=AuthState.is_loading,
                ),
                spacing="3",
                width="100%",
            ),
            on_submit=AuthState.login,
            width="100%",
        ),
        rx.text(
            "No account? ",
            rx.link("Sign up", href="/signup"),
            size="2",
            text_align="center",
        ),
    )
