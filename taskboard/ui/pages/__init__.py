"""Taskboard page functions registered by taskboard.taskboard."""
