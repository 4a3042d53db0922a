"""Tests for background task management."""

import asyncio

import pytest

from src.core.tasks import TaskManager, TaskResult


async def _add(a, b):
    await asyncio.sleep(0)
    return a + b


async def _fail():
    raise RuntimeError("boom")


class TestTaskResult:
    """TaskResult helpers."""

    def test_duration_none_without_timestamps(self):
        assert TaskResult(task_name="t", success=True).duration_seconds is None


class TestTaskManager:
    """Scheduling and tracking coroutines."""

    @pytest.mark.asyncio
    async def test_submit_returns_task_result(self):
        manager = TaskManager()
        task = manager.submit("add", _add, 2, 3)
        result = await task
        assert result.success is True
        assert result.result == 5
        assert result.duration_seconds is not None
        assert manager.last_result("add") is result

    @pytest.mark.asyncio
    async def test_failure_is_captured(self):
        manager = TaskManager()
        result = await manager.submit("fail", _fail)
        assert result.success is False
        assert isinstance(result.error, RuntimeError)

    @pytest.mark.asyncio
    async def test_callback_receives_result(self):
        manager = TaskManager()
        seen = []
        await manager.submit("add", _add, 1, 1, callback=seen.append)
        assert len(seen) == 1
        assert seen[0].result == 2

    @pytest.mark.asyncio
    async def test_is_running_and_get(self):
        manager = TaskManager()
        gate = asyncio.Event()
        task = manager.submit("wait", gate.wait)
        assert manager.get("wait") is task
        assert manager.is_running("wait")
        assert manager.pending_count == 1
        gate.set()
        await manager.drain()
        assert not manager.is_running("wait")
        assert manager.pending_count == 0

    @pytest.mark.asyncio
    async def test_drain_waits_for_tasks_scheduled_meanwhile(self):
        manager = TaskManager()
        finished = []

        async def second():
            finished.append("second")

        async def first():
            await asyncio.sleep(0)
            manager.submit("second", second)
            finished.append("first")

        manager.submit("first", first)
        await manager.drain()
        assert finished == ["first", "second"]

    @pytest.mark.asyncio
    async def test_shutdown_cancels_outstanding(self):
        manager = TaskManager()
        gate = asyncio.Event()
        task = manager.submit("wait", gate.wait)
        await asyncio.sleep(0)
        await manager.shutdown()
        assert task.cancelled()
        assert manager.get("wait") is None

    def test_unknown_task_lookups(self):
        manager = TaskManager()
        assert manager.get("nope") is None
        assert manager.is_running("nope") is False
        assert manager.last_result("nope") is None
