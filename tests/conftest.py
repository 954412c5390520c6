"""
Taskboard Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskboard.schemas import ActionResult, CommentRead, TaskRead, UserRead


# ---------------------------------------------------------------------------
# Global singletons: config, auth service, request context
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset global singletons between tests."""
    import taskboard.engine.config as cfg_mod
    import taskboard.engine.security as sec_mod
    from taskboard.engine.context import clear_request_context

    cfg_mod._config = None
    sec_mod._auth_service = None
    clear_request_context()
    yield
    clear_request_context()
    sec_mod._auth_service = None


@pytest.fixture
def tmp_dir(tmp_path):
    """Provide a clean temp directory."""
    return tmp_path


# ---------------------------------------------------------------------------
# Database: fresh in-memory SQLite per test
# ---------------------------------------------------------------------------

@pytest.fixture
def db():
    """Initialise an in-memory database with all tables."""
    from taskboard.db.session import close_all_sessions, init_db

    factory = init_db("sqlite:///:memory:", create_tables=True)
    yield factory
    close_all_sessions()


@pytest.fixture
def auth_service(db):
    """AuthService with a cheap bcrypt cost, installed as the singleton."""
    from taskboard.db.session import get_session
    from taskboard.engine.security import AuthService, set_auth_service

    service = AuthService(db_session_factory=get_session, bcrypt_rounds=4)
    set_auth_service(service)
    yield service
    set_auth_service(None)


@pytest.fixture
def alice(auth_service):
    return auth_service.sign_up("Alice Adams", "alice@example.com", "password123")


@pytest.fixture
def bob(auth_service):
    return auth_service.sign_up("Bob Brown", "bob@example.com", "password123")


@pytest.fixture
def as_user():
    """
    Run actions as a given user:

        with as_user(alice):
            create_task({...})
    """
    from taskboard.engine.context import RequestContext, request_context

    def _as(user):
        return request_context(RequestContext(user_id=user.id, name=user.name, email=user.email))

    return _as


@pytest.fixture
def logged_in(alice, as_user):
    """Request context for alice for the duration of the test."""
    with as_user(alice) as ctx:
        yield ctx


# ---------------------------------------------------------------------------
# View-model builders and mutation fakes
# ---------------------------------------------------------------------------

JANE = UserRead(id=2, name="Jane Smith", email="jane@example.com")
CARL = UserRead(id=3, name="Carl Creator", email="carl@example.com")


def _comment(
    comment_id: int,
    author: UserRead = JANE,
    task_id: int = 1,
    content: str = "Looks good",
) -> CommentRead:
    return CommentRead(
        id=comment_id,
        content=content,
        task_id=task_id,
        author_id=author.id,
        author=author,
        created_at=datetime(2024, 1, 15, 12, 0, 0),
    )


def _task(
    task_id: int = 1,
    status: str = "todo",
    creator_id: int = 3,
    assignee: Optional[UserRead] = None,
    comments: Optional[List[CommentRead]] = None,
    **extra,
) -> TaskRead:
    return TaskRead(
        id=task_id,
        name=extra.pop("name", f"Task {task_id}"),
        status=status,
        creator_id=creator_id,
        assignee_id=assignee.id if assignee else None,
        assignee=assignee,
        comments=comments or [],
        **extra,
    )


@pytest.fixture
def mutations():
    """AsyncMock implementation of the TaskMutations protocol."""
    fake = MagicMock()
    fake.update_task_status = AsyncMock(return_value=ActionResult.ok())
    fake.delete_task = AsyncMock(return_value=ActionResult.ok())
    fake.add_comment = AsyncMock(return_value=ActionResult.ok("Comment added", record_id=10))
    fake.delete_comment = AsyncMock(return_value=ActionResult.ok())
    fake.get_current_user = AsyncMock(return_value=JANE)
    return fake


@pytest.fixture
def jane():
    return JANE


@pytest.fixture
def carl():
    return CARL


@pytest.fixture
def make_task():
    """Build a TaskRead: make_task(1, status="done", comments=[...])."""
    return _task


@pytest.fixture
def make_comment():
    """Build a CommentRead: make_comment(5, author=jane)."""
    return _comment
