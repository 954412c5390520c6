"""
Taskboard — Main Reflex application entry point.

Boot sequence:
    1. _init_platform()  — config, structured logging, DB engine
    2. Create rx.App() and register the pages
"""

import logging

import reflex as rx

from taskboard.ui.pages.dashboard import dashboard_page
from taskboard.ui.pages.login import login_page
from taskboard.ui.pages.signup import signup_page

logger = logging.getLogger("taskboard.startup")

# Guard: only initialize once, even if the module is re-imported
_platform_initialized = False


def _init_platform() -> None:
    """Load config, start the log queue, create the DB engine."""
    global _platform_initialized
    if _platform_initialized:
        return
    _platform_initialized = True

    try:
        from taskboard.db.session import init_db
        from taskboard.engine.config import load_config
        from taskboard.engine.logging import init_logging, log, log_system_event

        config = load_config()
        queue = config.logging.async_queue
        init_logging(
            log_dir=config.logging.directory,
            flush_interval_ms=queue.flush_interval_ms,
            flush_batch_size=queue.flush_batch_size,
            max_queue_size=queue.max_queue_size,
            level=config.logging.level,
        )

        db = config.database
        init_db(
            db.url,
            create_tables=db.is_sqlite,
            echo=db.echo,
            pool_size=db.pool_size,
            max_overflow=db.max_overflow,
            pool_timeout=db.pool_timeout,
            pool_recycle=db.pool_recycle,
            pool_pre_ping=db.pool_pre_ping,
        )

        log(log_system_event("startup", details={"environment": config.environment}))
        logger.info("Taskboard initialized successfully")

    except Exception as e:
        logger.error(f"Failed to initialize Taskboard: {e}", exc_info=True)


_init_platform()

app = rx.App()

app.add_page(dashboard_page, route="/", title="Taskboard")
app.add_page(login_page, route="/login", title="Taskboard — Sign In")
app.add_page(signup_page, route="/signup", title="Taskboard — Sign Up")
