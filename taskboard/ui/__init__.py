"""
Taskboard UI — Reflex states, components and pages.

Pages:
    /login, /signup   authentication
    /                 dashboard (stats, new task dialog, task list)
"""
