"""
Comment thread view logic.

The thread is a snapshot handed in by the host page. Adding a comment clears
the draft only on success; deleting a comment does not touch the snapshot,
the row goes away when the host replaces the comments after its next fetch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from taskboard.core.display import format_date_for_display, initials
from taskboard.core.ports import TaskMutations
from taskboard.schemas import ActionResult, CommentRead

logger = logging.getLogger("taskboard.core.comments")

EMPTY_THREAD_MESSAGE = "No comments yet. Be the first to comment!"
ADD_LABEL = "Add Comment"
ADDING_LABEL = "Adding..."


def can_delete_comment(
    current_user_id: Optional[int],
    author_id: int,
    task_creator_id: int,
) -> bool:
    """
    A comment may be deleted by its author or by the creator of its task.
    Nobody may delete anything while the current user is unknown.
    """
    if current_user_id is None:
        return False
    return current_user_id == author_id or current_user_id == task_creator_id


@dataclass(frozen=True)
class CommentRow:
    """One rendered comment."""
    id: int
    author_name: str
    author_initials: str
    created_label: str
    content: str
    can_delete: bool


class TaskCommentsView:
    """Comment thread for a single task."""

    def __init__(
        self,
        task_id: int,
        comments: Iterable[CommentRead],
        current_user_id: Optional[int],
        task_creator_id: int,
        mutations: TaskMutations,
        format_date: Callable[..., str] = format_date_for_display,
    ):
        self.task_id = task_id
        self.current_user_id = current_user_id
        self.task_creator_id = task_creator_id
        self.draft = ""
        self._comments: List[CommentRead] = list(comments)
        self._mutations = mutations
        self._format_date = format_date
        self._pending = 0

    @property
    def comments(self) -> List[CommentRead]:
        return list(self._comments)

    @property
    def heading(self) -> str:
        return f"Comments ({len(self._comments)})"

    @property
    def is_empty(self) -> bool:
        return not self._comments

    @property
    def pending(self) -> bool:
        return self._pending > 0

    @property
    def show_add_form(self) -> bool:
        return self.current_user_id is not None

    @property
    def submit_label(self) -> str:
        return ADDING_LABEL if self.pending else ADD_LABEL

    @property
    def submit_disabled(self) -> bool:
        return self.pending or not self.draft.strip()

    def set_draft(self, text: str) -> None:
        self.draft = text

    def can_delete(self, comment: CommentRead) -> bool:
        return can_delete_comment(self.current_user_id, comment.author_id, self.task_creator_id)

    def replace_comments(
        self,
        comments: Iterable[CommentRead],
        current_user_id: Optional[int] = None,
    ) -> None:
        """Install a fresh snapshot. The draft is kept."""
        self._comments = list(comments)
        if current_user_id is not None:
            self.current_user_id = current_user_id

    def rows(self) -> List[CommentRow]:
        return [
            CommentRow(
                id=c.id,
                author_name=c.author.name or c.author.email,
                author_initials=initials(c.author.name),
                created_label=self._format_date(c.created_at),
                content=c.content,
                can_delete=self.can_delete(c),
            )
            for c in self._comments
        ]

    async def add_comment(self, content: Optional[str] = None) -> Optional[ActionResult]:
        """
        Submit *content* (the current draft by default).

        Returns:
            The mutation result, or None when nothing was sent because the
            text was blank or the call raised.
        """
        text = self.draft if content is None else content
        if not text.strip():
            return None

        self._pending += 1
        try:
            result = await self._mutations.add_comment(self.task_id, text)
        except Exception as e:
            logger.error(f"Adding comment to task {self.task_id} failed: {e}")
            return None
        finally:
            self._pending -= 1

        if result.success:
            self.draft = ""
        else:
            logger.debug(f"Comment on task {self.task_id} rejected: {result.error}")
        return result

    async def delete_comment(self, comment_id: int) -> Optional[ActionResult]:
        self._pending += 1
        try:
            return await self._mutations.delete_comment(comment_id)
        except Exception as e:
            logger.error(f"Deleting comment {comment_id} failed: {e}")
            return None
        finally:
            self._pending -= 1
