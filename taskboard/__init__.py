"""
Taskboard — team task management.

Users sign up, log in, create tasks, assign them to teammates, comment on
them and track status/priority from a dashboard.

Layout:
    engine/   config, errors, structured logging, auth/session context
    db/       SQLAlchemy models and session management
    actions/  server-side mutations and queries
    core/     framework-free view logic (optimistic task list, comments, forms)
    ui/       Reflex state, components and pages
"""

__version__ = "1.0.0"
__all__ = ["engine", "db", "actions", "core", "ui"]
