"""Reusable Reflex components for the Taskboard pages."""
