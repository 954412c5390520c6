"""Unit tests for taskboard.engine.errors — Error hierarchy & serialization."""

import json

import pytest

from taskboard.engine.errors import (
    TaskboardConfigError,
    TaskboardError,
    TaskboardNotFoundError,
    TaskboardRecordError,
    TaskboardSecurityError,
    TaskboardSessionError,
    TaskboardValidationError,
)


class TestTaskboardError:
    """Base error class tests."""

    def test_basic_creation(self):
        err = TaskboardError("something broke")
        assert err.message == "something broke"
        assert str(err) == "something broke"
        assert err.error_type == "TaskboardError"
        assert err.user_id is None

    def test_context_and_user(self):
        err = TaskboardError("fail", user_id=7, task_id=3)
        assert err.user_id == 7
        assert err.context["task_id"] == 3

    def test_to_dict(self):
        d = TaskboardError("fail", user_id=7, task_id=3).to_dict()
        assert d["error_type"] == "TaskboardError"
        assert d["user_id"] == 7
        assert d["context"] == {"task_id": "3"}
        assert "timestamp" in d

    def test_to_json(self):
        parsed = json.loads(TaskboardError("fail").to_json())
        assert parsed["message"] == "fail"

    def test_repr(self):
        assert repr(TaskboardError("fail", user_id=1)) == "TaskboardError: fail | user_id=1"


class TestSubclasses:
    @pytest.mark.parametrize("cls", [
        TaskboardSecurityError,
        TaskboardSessionError,
        TaskboardValidationError,
        TaskboardRecordError,
        TaskboardNotFoundError,
        TaskboardConfigError,
    ])
    def test_all_inherit_base(self, cls):
        assert issubclass(cls, TaskboardError)

    def test_not_found_is_record_error(self):
        assert issubclass(TaskboardNotFoundError, TaskboardRecordError)

    def test_security_action(self):
        err = TaskboardSecurityError("denied", action="delete_comment", user_id=4)
        assert err.action == "delete_comment"
        assert err.to_dict()["action"] == "delete_comment"

    def test_record_fields(self):
        err = TaskboardNotFoundError("gone", record_type="Task", record_id=9, operation="delete")
        d = err.to_dict()
        assert (d["record_type"], d["record_id"], d["operation"]) == ("Task", 9, "delete")


class TestValidationError:
    def test_first_error_without_details(self):
        assert TaskboardValidationError("Comment cannot be empty").first_error == "Comment cannot be empty"

    def test_first_error_with_location(self):
        err = TaskboardValidationError(
            "Invalid input",
            validation_errors=[{"loc": ("name",), "msg": "String should have at least 1 character"}],
        )
        assert err.first_error == "name: String should have at least 1 character"

    def test_first_error_without_location(self):
        err = TaskboardValidationError("Invalid input", validation_errors=[{"msg": "bad"}])
        assert err.first_error == "bad"

    def test_to_dict_includes_details(self):
        err = TaskboardValidationError("x", validation_errors=[{"loc": ["a"], "msg": "m"}])
        assert err.to_dict()["validation_errors"] == [{"loc": ["a"], "msg": "m"}]
