"""Taskboard Engine — config, errors, structured logging, auth and request context."""
