"""User and session actions: sign up, log in/out, current user lookup."""

from __future__ import annotations

import logging
from typing import List, Optional

from taskboard.actions.base import returns_action_result
from taskboard.db.models import User
from taskboard.db.session import session_scope
from taskboard.engine.context import get_request_context, require_request_context
from taskboard.engine.security import get_auth_service
from taskboard.schemas import ActionResult, UserRead

logger = logging.getLogger("taskboard.actions.users")


@returns_action_result
def sign_up(name: Optional[str], email: str, password: str) -> ActionResult:
    """Create an account. The caller logs in separately."""
    user = get_auth_service().sign_up(name, email, password)
    return ActionResult.ok("Account created", record_id=user.id)


def log_in(email: str, password: str) -> str:
    """
    Returns:
        A session token.

    Raises:
        TaskboardSessionError: Invalid credentials.
    """
    return get_auth_service().log_in(email, password)


def log_out(token: Optional[str]) -> bool:
    return get_auth_service().log_out(token)


def get_current_user() -> Optional[UserRead]:
    """Returns the logged-in user, or None for anonymous callers."""
    ctx = get_request_context()
    if ctx is None:
        return None
    with session_scope() as session:
        user = session.get(User, ctx.user_id)
        return UserRead.model_validate(user) if user is not None else None


def get_all_users() -> List[UserRead]:
    """All users, for the assignee picker. Requires a logged-in caller."""
    require_request_context()
    with session_scope() as session:
        users = session.query(User).order_by(User.name, User.email).all()
        return [UserRead.model_validate(u) for u in users]
