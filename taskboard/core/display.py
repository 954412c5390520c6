"""
Display helpers shared by the task list and comment thread: avatar initials
and date formatting for labels and form inputs.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

PLACEHOLDER_INITIALS = "??"
DISPLAY_DATE_FORMAT = "%b %d, %Y"

DateLike = Union[date, datetime, str]


def initials(name: Optional[str]) -> str:
    """
    Avatar initials: first character of each whitespace-separated word,
    upper-cased. ``"Jane Smith"`` → ``"JS"``; no name → ``"??"``.
    """
    if not name or not name.strip():
        return PLACEHOLDER_INITIALS
    return "".join(word[0] for word in name.split()).upper()


def parse_date_string(value: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` form value into a calendar date.

    Raises:
        ValueError: The string is not an ISO calendar date.
    """
    return date.fromisoformat(value.strip())


def format_date_for_input(value: Optional[DateLike]) -> str:
    """``date(2024, 1, 15)`` → ``"2024-01-15"``, for ``<input type="date">``."""
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        value = _coerce(value)
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_date_for_display(value: Optional[DateLike], fmt: str = DISPLAY_DATE_FORMAT) -> str:
    """``date(2024, 1, 15)`` → ``"Jan 15, 2024"``. Empty string for None."""
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        value = _coerce(value)
    return value.strftime(fmt)


def _coerce(value: str) -> Union[date, datetime]:
    value = value.strip()
    if "T" in value or " " in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parse_date_string(value)
