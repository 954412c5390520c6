"""
Shared plumbing for server actions: error → ActionResult conversion and
ORM → schema helpers.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from taskboard.engine.errors import (
    TaskboardError,
    TaskboardSessionError,
    TaskboardValidationError,
)
from taskboard.schemas import ActionResult

logger = logging.getLogger("taskboard.actions")

F = TypeVar("F", bound=Callable[..., ActionResult])


def returns_action_result(fn: F) -> F:
    """
    Turn Taskboard and pydantic errors raised by a mutation into a failed
    ActionResult. TaskboardSessionError (nobody logged in) and anything
    else propagate.
    """

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> ActionResult:
        try:
            return fn(*args, **kwargs)
        except ValidationError as e:
            err = TaskboardValidationError("Invalid input", validation_errors=e.errors())
            logger.info(f"{fn.__name__} rejected: {err.first_error}")
            return ActionResult.fail(err.first_error)
        except TaskboardValidationError as e:
            logger.info(f"{fn.__name__} rejected: {e.first_error}")
            return ActionResult.fail(e.first_error)
        except TaskboardSessionError:
            raise
        except TaskboardError as e:
            logger.warning(f"{fn.__name__} failed: {e!r}")
            return ActionResult.fail(e.message)

    return wrapper  # type: ignore[return-value]
