"""Unit tests for taskboard.core.forms — FormState submit lifecycle and banners."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from taskboard.core.forms import GENERIC_ERROR, FormState
from taskboard.schemas import ActionResult


def _create_form(on_finish=None):
    return FormState("Create Task", "Creating...", on_finish=on_finish)


class TestFormState:
    def test_initial_state(self):
        form = _create_form()
        assert form.pending is False
        assert form.submit_label == "Create Task"
        assert form.banner() is None

    @pytest.mark.asyncio
    async def test_busy_label_while_pending(self):
        gate = asyncio.Event()
        form = _create_form()

        async def action():
            await gate.wait()
            return ActionResult.ok("Task created successfully!")

        pending = asyncio.ensure_future(form.submit(action))
        await asyncio.sleep(0)
        assert form.pending is True
        assert form.submit_label == "Creating..."
        assert form.submit_disabled is True

        gate.set()
        await pending
        assert form.submit_label == "Create Task"

    @pytest.mark.asyncio
    async def test_success_banner_and_callback(self):
        on_finish = MagicMock()
        form = _create_form(on_finish)
        await form.submit(AsyncMock(return_value=ActionResult.ok("Task created successfully!")))
        assert tuple(form.banner()) == ("success", "Task created successfully!")
        assert form.banner().color_scheme == "green"
        on_finish.assert_called_once()

    @pytest.mark.asyncio
    async def test_error_banner_no_callback(self):
        on_finish = MagicMock()
        form = _create_form(on_finish)
        await form.submit(AsyncMock(return_value=ActionResult.fail("Name is required")))
        kind, text = form.banner()
        assert kind == "error"
        assert text == "Name is required"
        assert form.banner().color_scheme == "red"
        on_finish.assert_not_called()

    @pytest.mark.asyncio
    async def test_exception_becomes_error_banner(self):
        form = _create_form()
        result = await form.submit(AsyncMock(side_effect=RuntimeError("db down")))
        assert result.success is False
        assert form.banner().text == GENERIC_ERROR
        assert form.pending is False

    @pytest.mark.asyncio
    async def test_success_without_message_has_no_banner(self):
        form = FormState("Save Changes", "Saving...")
        await form.submit(AsyncMock(return_value=ActionResult.ok()))
        assert form.banner() is None

    @pytest.mark.asyncio
    async def test_reset(self):
        form = _create_form()
        await form.submit(AsyncMock(return_value=ActionResult.fail("x")))
        form.reset()
        assert form.banner() is None
