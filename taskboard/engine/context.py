"""
Taskboard Request Context — who is making the current call.

A RequestContext is built from a validated session and carried through the
server actions via a ContextVar, so actions never take the user as a
parameter.

Usage:
    from taskboard.engine.context import (
        RequestContext,
        set_request_context,
        require_request_context,
    )
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from taskboard.engine.errors import TaskboardSessionError

current_request_context: ContextVar[Optional["RequestContext"]] = ContextVar(
    "request_context", default=None
)


@dataclass
class RequestContext:
    """Per-request identity, populated from the session cookie."""

    user_id: int
    name: Optional[str]
    email: str
    session_id: Optional[str] = None
    request_id: str = field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "request_id": self.request_id,
        }


def set_request_context(ctx: Optional[RequestContext]):
    """Set the context for the current thread/task. Returns a reset token."""
    return current_request_context.set(ctx)


def get_request_context() -> Optional[RequestContext]:
    return current_request_context.get()


def require_request_context() -> RequestContext:
    """Get the request context or raise if nobody is logged in."""
    ctx = get_request_context()
    if ctx is None:
        raise TaskboardSessionError("Not authenticated")
    return ctx


def clear_request_context() -> None:
    current_request_context.set(None)


@contextmanager
def request_context(ctx: Optional[RequestContext]) -> Iterator[Optional[RequestContext]]:
    """Run a block as *ctx*, restoring the previous context afterwards."""
    token = current_request_context.set(ctx)
    try:
        yield ctx
    finally:
        current_request_context.reset(token)
