"""
Taskboard UI — Signup Page

Route: /signup
"""

import reflex as rx

from taskboard.ui.components.layout import auth_card, error_callout
from taskboard.ui.state import AuthState


def signup_page() -> rx.Component:
    return auth_card(
        "Create an account",
        "Start tracking tasks with your team",
        rx.form(
            rx.vstack(
                rx.text("Name", size="2", weight="bold"),
                rx.input(placeholder="Jane Smith", name="name", size="3"),
                rx.text("Email", size="2", weight="bold"),
                rx.input(placeholder="you@example.com", name="email", type="email", required=True, size="3"),
                rx.text("Password", size="2", weight="bold"),
                rx.input(name="password", type="password", required=True, size="3"),
                error_callout(AuthState.auth_error),
                rx.button(
                    "Sign Up",
                    type="submit",
                    size="3",
                    width="100%",
                    loading=AuthState.is_loading,
                ),
                spacing="3",
                width="100%",
            ),
            on_submit=AuthState.signup,
            width="100%",
        ),
        rx.text(
            "Already have an account? ",
            rx.link("Sign in", href="/login"),
            size="2",
            text_align="center",
        ),
    )
