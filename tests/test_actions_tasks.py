"""Tests for taskboard.actions.tasks and taskboard.actions.users against SQLite."""

from datetime import date

import pytest

from taskboard.actions import tasks, users
from taskboard.engine.errors import TaskboardSessionError
from taskboard.schemas import TaskPriority, TaskStatus


def _create(**form):
    form.setdefault("name", "Write report")
    result = tasks.create_task(form)
    assert result.success, result.error
    return result.record_id


def _get(task_id):
    return next(t for t in tasks.list_tasks() if t.id == task_id)


class TestCreateTask:
    def test_creates_with_defaults(self, logged_in):
        result = tasks.create_task({"name": "  Write report  "})
        assert result.success is True
        assert result.message == "Task created successfully!"

        task = _get(result.record_id)
        assert task.name == "Write report"
        assert task.status == TaskStatus.TODO
        assert task.priority == TaskPriority.MEDIUM
        assert task.creator_id == logged_in.user_id
        assert task.assignee is None
        assert task.comments == []

    def test_form_strings(self, logged_in, bob):
        task_id = _create(
            name="Ship",
            description="Release 1.0",
            status="in_progress",
            priority="high",
            due_date="2024-03-01",
            assignee_id=str(bob.id),
        )
        task = _get(task_id)
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.priority == TaskPriority.HIGH
        assert task.due_date == date(2024, 3, 1)
        assert task.assignee.name == "Bob Brown"

    def test_blank_optionals(self, logged_in):
        task = _get(_create(due_date="", assignee_id="", status="", priority=""))
        assert task.due_date is None
        assert task.assignee_id is None
        assert task.status == TaskStatus.TODO

    def test_missing_name(self, logged_in):
        result = tasks.create_task({"name": "   "})
        assert result.success is False
        assert result.error.startswith("name:")

    def test_unknown_assignee(self, logged_in):
        result = tasks.create_task({"name": "x", "assignee_id": "999"})
        assert result.success is False
        assert "Assignee does not exist" in result.error

    def test_requires_login(self, db):
        with pytest.raises(TaskboardSessionError):
            tasks.create_task({"name": "x"})

    @pytest.mark.parametrize("call", [
        lambda: tasks.update_task(1, {"name": "x"}),
        lambda: tasks.update_task_status(1, "done"),
        lambda: tasks.delete_task(1),
    ])
    def test_mutations_raise_without_login(self, db, call):
        with pytest.raises(TaskboardSessionError, match="Not authenticated"):
            call()


class TestUpdateTask:
    def test_updates_fields(self, logged_in):
        task_id = _create(name="Old")
        result = tasks.update_task(task_id, {"name": "New", "status": "done", "priority": "low"})
        assert result.success is True
        assert result.message == "Task updated successfully!"
        task = _get(task_id)
        assert (task.name, task.status, task.priority) == ("New", TaskStatus.DONE, TaskPriority.LOW)

    def test_creator_unchanged(self, alice, bob, as_user):
        with as_user(alice):
            task_id = _create()
        with as_user(bob):
            assert tasks.update_task(task_id, {"name": "Renamed"}).success
            assert _get(task_id).creator_id == alice.id

    def test_not_found(self, logged_in):
        result = tasks.update_task(404, {"name": "x"})
        assert result.success is False
        assert result.error == "Task 404 not found"


class TestUpdateTaskStatus:
    def test_sets_status(self, logged_in):
        task_id = _create()
        assert tasks.update_task_status(task_id, "done").success
        assert _get(task_id).status == TaskStatus.DONE

    def test_unknown_status(self, logged_in):
        task_id = _create()
        result = tasks.update_task_status(task_id, "archived")
        assert result.success is False
        assert result.error == "Unknown status 'archived'"

    def test_missing_task(self, logged_in):
        assert tasks.update_task_status(7, "done").error == "Task 7 not found"


class TestDeleteTask:
    def test_deletes_with_comments(self, logged_in):
        from taskboard.actions import comments

        task_id = _create()
        comments.add_comment(task_id, "first")
        result = tasks.delete_task(task_id)
        assert result.success is True
        assert result.message == "Task deleted"
        assert tasks.list_tasks() == []

    def test_missing_task(self, logged_in):
        result = tasks.delete_task(12)
        assert result.success is False


class TestQueries:
    def test_list_newest_first(self, logged_in):
        first = _create(name="First")
        second = _create(name="Second")
        assert [t.id for t in tasks.list_tasks()] == [second, first]

    def test_list_requires_login(self, db):
        with pytest.raises(TaskboardSessionError):
            tasks.list_tasks()

    def test_stats(self, logged_in):
        _create(status="todo", due_date="2024-01-01")
        _create(status="in_progress", due_date="2024-12-31")
        _create(status="done", due_date="2024-01-01")
        stats = tasks.get_task_stats(today=date(2024, 6, 1))
        assert stats.total == 3
        assert (stats.todo, stats.in_progress, stats.done) == (1, 1, 1)
        assert stats.overdue == 1

    def test_stats_empty(self, logged_in):
        stats = tasks.get_task_stats()
        assert stats.total == 0
        assert stats.overdue == 0


class TestUserQueries:
    def test_current_user(self, logged_in, alice):
        user = users.get_current_user()
        assert user.id == alice.id
        assert user.name == "Alice Adams"

    def test_current_user_anonymous(self, db):
        assert users.get_current_user() is None

    def test_all_users_sorted(self, alice, bob, as_user):
        with as_user(bob):
            assert [u.email for u in users.get_all_users()] == [
                "alice@example.com",
                "bob@example.com",
            ]

    def test_sign_up_action(self, auth_service):
        result = users.sign_up("Dana", "dana@example.com", "password123")
        assert result.success is True
        result = users.sign_up("Dana", "dana@example.com", "password123")
        assert result.success is False
        assert result.error == "An account with this email already exists"
