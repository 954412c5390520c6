from taskboard.db.base import Base, TimestampMixin, utcnow
from taskboard.db.models import Comment, Session, Task, User, TASK_PRIORITIES, TASK_STATUSES
from taskboard.db.session import close_all_sessions, get_engine, get_session, init_db, session_scope
