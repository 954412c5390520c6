"""
Taskboard Security — Password hashing and DB-backed session authentication.

Flow:
1. User signs up → bcrypt hash stored on the users row
2. User logs in → a sessions row is created, its token goes into a cookie
3. Each request → token lookup → RequestContext
4. Logout/expiry → sessions row deleted
"""

from __future__ import annotations

import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import bcrypt
from sqlalchemy.orm import Session as DBSession

from taskboard.db.base import utcnow
from taskboard.db.models import Session, User
from taskboard.engine.context import RequestContext
from taskboard.engine.errors import TaskboardSessionError, TaskboardValidationError
from taskboard.engine.logging import log, log_auth_event

logger = logging.getLogger("taskboard.engine.security")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# ---------------------------------------------------------------------------
# Password Utilities
# ---------------------------------------------------------------------------

def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def generate_session_token() -> str:
    return secrets.token_urlsafe(32)


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Authentication Service
# ---------------------------------------------------------------------------

class AuthService:
    """
    Sign-up, login and session validation against the sessions table.

    Args:
        db_session_factory: Callable returning a new SQLAlchemy session.
        session_timeout: Session lifetime in seconds.
        password_min_length: Minimum accepted password length on sign-up.
        bcrypt_rounds: Cost factor for new password hashes.
    """

    def __init__(
        self,
        db_session_factory: Callable[[], DBSession],
        session_timeout: int = 60 * 60 * 24 * 7,
        password_min_length: int = 8,
        bcrypt_rounds: int = 12,
    ):
        self._db_session_factory = db_session_factory
        self._session_timeout = session_timeout
        self._password_min_length = password_min_length
        self._bcrypt_rounds = bcrypt_rounds

    def sign_up(self, name: Optional[str], email: str, password: str) -> User:
        """
        Create a user account.

        Raises:
            TaskboardValidationError: Bad email, short password, or email taken.
        """
        email = (email or "").strip().lower()
        name = (name or "").strip() or None

        if not EMAIL_RE.match(email):
            raise TaskboardValidationError("A valid email address is required", email=email)
        if len(password or "") < self._password_min_length:
            raise TaskboardValidationError(
                f"Password must be at least {self._password_min_length} characters",
                email=email,
            )

        session = self._db_session_factory()
        try:
            if session.query(User).filter_by(email=email).first() is not None:
                log(log_auth_event("signup", email, success=False, failure_reason="email_taken"))
                raise TaskboardValidationError("An account with this email already exists", email=email)

            user = User(
                name=name,
                email=email,
                password_hash=hash_password(password, rounds=self._bcrypt_rounds),
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            log(log_auth_event("signup", email, user_id=user.id))
            logger.info(f"User signed up: {email} (id={user.id})")
            return user
        finally:
            session.close()

    def log_in(self, email: str, password: str) -> str:
        """
        Verify credentials and open a session.

        Returns:
            The session token to store in the client cookie.

        Raises:
            TaskboardSessionError: Unknown email or wrong password.
        """
        email = (email or "").strip().lower()
        session = self._db_session_factory()
        try:
            user = session.query(User).filter_by(email=email).first()
            if user is None:
                log(log_auth_event("login", email, success=False, failure_reason="unknown_email"))
                raise TaskboardSessionError("Invalid email or password")

            if not verify_password(password or "", user.password_hash):
                log(log_auth_event("login", email, user_id=user.id, success=False,
                                   failure_reason="invalid_password"))
                raise TaskboardSessionError("Invalid email or password", user_id=user.id)

            token = generate_session_token()
            session.add(Session(
                token=token,
                user_id=user.id,
                expires_at=utcnow() + timedelta(seconds=self._session_timeout),
            ))
            session.commit()
            log(log_auth_event("login", email, user_id=user.id))
            logger.info(f"User '{email}' logged in (session: {token[:8]}...)")
            return token
        finally:
            session.close()

    def validate_session(self, token: Optional[str]) -> Optional[RequestContext]:
        """
        Resolve a session token.

        Returns:
            RequestContext if the session exists and has not expired, None
            otherwise. Expired rows are deleted on the way.
        """
        if not token:
            return None

        session = self._db_session_factory()
        try:
            row = session.query(Session).filter_by(token=token).first()
            if row is None:
                return None
            if _as_aware(row.expires_at) <= utcnow():
                session.delete(row)
                session.commit()
                logger.info(f"Session expired: {token[:8]}...")
                return None

            user = row.user
            return RequestContext(
                user_id=user.id,
                name=user.name,
                email=user.email,
                session_id=token,
            )
        finally:
            session.close()

    def log_out(self, token: Optional[str]) -> bool:
        """Destroy a session. Returns False when no such session existed."""
        if not token:
            return False
        session = self._db_session_factory()
        try:
            row = session.query(Session).filter_by(token=token).first()
            if row is None:
                return False
            user_id = row.user_id
            session.delete(row)
            session.commit()
            log(log_auth_event("logout", None, user_id=user_id))
            return True
        finally:
            session.close()


# ---------------------------------------------------------------------------
# Service singleton
# ---------------------------------------------------------------------------

_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Return the process-wide AuthService, built from config on first use."""
    global _auth_service
    if _auth_service is None:
        from taskboard.db.session import get_session
        from taskboard.engine.config import get_config

        security = get_config().security
        _auth_service = AuthService(
            db_session_factory=get_session,
            session_timeout=security.session_timeout,
            password_min_length=security.password_min_length,
            bcrypt_rounds=security.bcrypt_rounds,
        )
    return _auth_service


def set_auth_service(service: Optional[AuthService]) -> None:
    global _auth_service
    _auth_service = service
