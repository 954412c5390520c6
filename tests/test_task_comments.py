"""Unit tests for taskboard.core.task_comments — authorization rule and comment thread view."""

import asyncio

import pytest
from unittest.mock import AsyncMock

from taskboard.core.task_comments import (
    ADD_LABEL,
    ADDING_LABEL,
    EMPTY_THREAD_MESSAGE,
    TaskCommentsView,
    can_delete_comment,
)
from taskboard.schemas import ActionResult


class TestCanDeleteComment:
    def test_author_may_delete(self):
        assert can_delete_comment(current_user_id=2, author_id=2, task_creator_id=3) is True

    def test_task_creator_may_delete(self):
        assert can_delete_comment(current_user_id=3, author_id=2, task_creator_id=3) is True

    def test_other_user_may_not(self):
        assert can_delete_comment(current_user_id=4, author_id=2, task_creator_id=3) is False

    def test_unknown_user_may_not(self):
        assert can_delete_comment(current_user_id=None, author_id=2, task_creator_id=3) is False

    def test_zero_is_a_known_id(self):
        assert can_delete_comment(current_user_id=0, author_id=0, task_creator_id=3) is True

    @pytest.mark.parametrize("current,author,creator,expected", [
        (1, 1, 1, True),
        (1, 2, 1, True),
        (1, 1, 2, True),
        (1, 2, 3, False),
        (None, None, None, False),
    ])
    def test_allow_rule_union(self, current, author, creator, expected):
        assert can_delete_comment(current, author, creator) is expected


def _view(comments, mutations, current_user_id=2, task_creator_id=3, task_id=5):
    return TaskCommentsView(
        task_id=task_id,
        comments=comments,
        current_user_id=current_user_id,
        task_creator_id=task_creator_id,
        mutations=mutations,
    )


class TestCanDelete:
    def test_author_match(self, make_comment, jane, mutations):
        comment = make_comment(1, author=jane)  # author id 2
        assert _view([comment], mutations, current_user_id=2).can_delete(comment) is True

    def test_creator_match(self, make_comment, jane, mutations):
        comment = make_comment(1, author=jane)
        assert _view([comment], mutations, current_user_id=3).can_delete(comment) is True

    def test_no_match(self, make_comment, jane, mutations):
        comment = make_comment(1, author=jane)
        assert _view([comment], mutations, current_user_id=4).can_delete(comment) is False

    def test_anonymous(self, make_comment, jane, mutations):
        comment = make_comment(1, author=jane)
        assert _view([comment], mutations, current_user_id=None).can_delete(comment) is False

    def test_rows_carry_flag(self, make_comment, jane, carl, mutations):
        comments = [make_comment(1, author=jane), make_comment(2, author=carl)]
        rows = _view(comments, mutations, current_user_id=2, task_creator_id=9).rows()
        assert [r.can_delete for r in rows] == [True, False]


class TestAddComment:
    @pytest.mark.asyncio
    async def test_whitespace_is_noop(self, mutations):
        view = _view([], mutations)
        view.set_draft("  ")
        assert await view.add_comment() is None
        mutations.add_comment.assert_not_called()
        assert view.draft == "  "

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t "])
    async def test_blank_content_never_calls_mutation(self, mutations, content):
        view = _view([], mutations)
        await view.add_comment(content)
        mutations.add_comment.assert_not_called()

    @pytest.mark.asyncio
    async def test_sends_untrimmed_content(self, mutations):
        view = _view([], mutations, task_id=5)
        view.set_draft("  hello  ")
        await view.add_comment()
        mutations.add_comment.assert_awaited_once_with(5, "  hello  ")

    @pytest.mark.asyncio
    async def test_success_clears_draft(self, mutations):
        view = _view([], mutations)
        view.set_draft("hello")
        result = await view.add_comment()
        assert result.success
        assert view.draft == ""

    @pytest.mark.asyncio
    async def test_failure_keeps_draft(self, mutations):
        mutations.add_comment = AsyncMock(return_value=ActionResult.fail("Task 5 not found"))
        view = _view([], mutations)
        view.set_draft("hello")
        result = await view.add_comment()
        assert result.success is False
        assert view.draft == "hello"

    @pytest.mark.asyncio
    async def test_exception_keeps_draft(self, mutations):
        mutations.add_comment = AsyncMock(side_effect=RuntimeError("offline"))
        view = _view([], mutations)
        view.set_draft("hello")
        assert await view.add_comment() is None
        assert view.draft == "hello"
        assert view.pending is False

    @pytest.mark.asyncio
    async def test_pending_label_while_in_flight(self, mutations):
        gate = asyncio.Event()

        async def slow_add(task_id, content):
            await gate.wait()
            return ActionResult.ok()

        mutations.add_comment = AsyncMock(side_effect=slow_add)
        view = _view([], mutations)
        view.set_draft("hello")
        assert view.submit_label == ADD_LABEL

        pending = asyncio.ensure_future(view.add_comment())
        await asyncio.sleep(0)
        assert view.pending is True
        assert view.submit_label == ADDING_LABEL
        assert view.submit_disabled is True

        gate.set()
        await pending
        assert view.submit_label == ADD_LABEL

    def test_submit_disabled_for_blank_draft(self, mutations):
        view = _view([], mutations)
        assert view.submit_disabled is True
        view.set_draft("x")
        assert view.submit_disabled is False


class TestDeleteComment:
    @pytest.mark.asyncio
    async def test_calls_mutation_unconditionally(self, make_comment, carl, mutations):
        comment = make_comment(1, author=carl)
        view = _view([comment], mutations, current_user_id=4, task_creator_id=9)
        await view.delete_comment(1)
        mutations.delete_comment.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_comment_stays_until_refresh(self, make_comment, mutations):
        view = _view([make_comment(1), make_comment(2)], mutations)
        await view.delete_comment(1)
        assert [c.id for c in view.comments] == [1, 2]

        view.replace_comments([make_comment(2)])
        assert [c.id for c in view.comments] == [2]

    @pytest.mark.asyncio
    async def test_pending_while_delete_in_flight(self, make_comment, mutations):
        gate = asyncio.Event()

        async def slow_delete(comment_id):
            await gate.wait()
            return ActionResult.ok()

        mutations.delete_comment = AsyncMock(side_effect=slow_delete)
        view = _view([make_comment(1)], mutations)
        view.set_draft("reply")

        deletion = asyncio.ensure_future(view.delete_comment(1))
        await asyncio.sleep(0)
        assert view.pending is True
        assert view.submit_disabled is True

        gate.set()
        await deletion
        assert view.pending is False
        assert view.submit_disabled is False

    @pytest.mark.asyncio
    async def test_failure_is_silent(self, make_comment, mutations):
        mutations.delete_comment = AsyncMock(side_effect=RuntimeError("500"))
        view = _view([make_comment(1)], mutations)
        assert await view.delete_comment(1) is None
        assert view.pending is False


class TestRendering:
    def test_heading_counts_comments(self, make_comment, mutations):
        view = _view([make_comment(1), make_comment(2)], mutations)
        assert view.heading == "Comments (2)"

    def test_empty_thread(self, mutations):
        view = _view([], mutations)
        assert view.is_empty
        assert view.heading == "Comments (0)"
        assert EMPTY_THREAD_MESSAGE == "No comments yet. Be the first to comment!"

    def test_add_form_hidden_without_user(self, make_comment, mutations):
        view = _view([make_comment(1)], mutations, current_user_id=None)
        assert view.show_add_form is False
        assert len(view.rows()) == 1

    def test_add_form_shown_with_user(self, mutations):
        assert _view([], mutations, current_user_id=2).show_add_form is True

    def test_row_fields(self, make_comment, jane, mutations):
        [row] = _view([make_comment(1, author=jane, content="Ship it")], mutations).rows()
        assert row.author_name == "Jane Smith"
        assert row.author_initials == "JS"
        assert row.created_label == "Jan 15, 2024"
        assert row.content == "Ship it"

    def test_nameless_author(self, make_comment, mutations):
        from taskboard.schemas import UserRead

        anon = UserRead(id=8, name=None, email="anon@example.com")
        [row] = _view([make_comment(1, author=anon)], mutations).rows()
        assert row.author_initials == "??"
        assert row.author_name == "anon@example.com"

    def test_replace_keeps_draft(self, make_comment, mutations):
        view = _view([], mutations)
        view.set_draft("typing")
        view.replace_comments([make_comment(1)])
        assert view.draft == "typing"
        assert view.heading == "Comments (1)"
