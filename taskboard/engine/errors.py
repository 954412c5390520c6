"""
Taskboard Error Hierarchy — Structured exceptions raised by server actions.

Every error carries a free-form context dict that serializes to JSON so it
can be written to the structured event log unchanged.

Hierarchy:
    TaskboardError
    ├── TaskboardSecurityError    — Not allowed to perform the action
    ├── TaskboardSessionError     — Missing/expired session, bad credentials
    ├── TaskboardValidationError  — Form payload failed validation
    ├── TaskboardRecordError      — Create/update/delete failed in the DB
    ├── TaskboardNotFoundError    — Referenced task/comment/user missing
    └── TaskboardConfigError      — Invalid taskboard.yaml
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class TaskboardError(Exception):
    """Base error for all Taskboard failures."""

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.error_type: str = self.__class__.__name__
        self.user_id: Optional[int] = context.get("user_id")
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to a JSON-compatible dict for logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "user_id": self.user_id,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items() if k != "user_id"
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.user_id is not None:
            parts.append(f"user_id={self.user_id}")
        return " | ".join(parts)


class TaskboardSecurityError(TaskboardError):
    """
    The current user may not perform the action.
    Includes the action name that was denied.
    """

    def __init__(self, message: str, **context: Any):
        self.action: Optional[str] = context.get("action")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["action"] = self.action
        return d


class TaskboardSessionError(TaskboardError):
    """Session missing or expired, or login credentials rejected."""
    pass


class TaskboardValidationError(TaskboardError):
    """
    Input validation failed. ``validation_errors`` holds field-level details
    as produced by pydantic (``[{"loc": [...], "msg": ...}, ...]``).
    """

    def __init__(self, message: str, **context: Any):
        self.validation_errors: List[Dict[str, Any]] = context.get("validation_errors") or []
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["validation_errors"] = self.validation_errors
        return d

    @property
    def first_error(self) -> str:
        """Human readable message for the first failing field."""
        if not self.validation_errors:
            return self.message
        err = self.validation_errors[0]
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", self.message)
        return f"{loc}: {msg}" if loc else msg


class TaskboardRecordError(TaskboardError):
    """A database operation on a record failed."""

    def __init__(self, message: str, **context: Any):
        self.record_type: Optional[str] = context.get("record_type")
        self.record_id: Optional[int] = context.get("record_id")
        self.operation: Optional[str] = context.get("operation")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["record_type"] = self.record_type
        d["record_id"] = self.record_id
        d["operation"] = self.operation
        return d


class TaskboardNotFoundError(TaskboardRecordError):
    """The referenced record does not exist."""
    pass


class TaskboardConfigError(TaskboardError):
    """Configuration error — invalid taskboard.yaml."""
    pass
