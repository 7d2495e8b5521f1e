"""Pytest configuration and fixtures for tracker-mcp tests."""

from datetime import datetime, timedelta

import pytest

from tracker_mcp import set_registry
from tracker_mcp.core.registry import TaskRegistry
from tracker_mcp.models.task import Epic, Subtask, Task

T0 = datetime(2025, 3, 1, 9, 0)


@pytest.fixture
def registry():
    """An empty in-memory registry."""
    return TaskRegistry()


@pytest.fixture
def tool_registry():
    """An empty registry installed as the one the MCP tools use."""
    reg = TaskRegistry()
    set_registry(reg)
    yield reg
    set_registry(None)


@pytest.fixture
def make_task():
    """Factory for tasks starting ``offset`` minutes after 09:00."""

    def _make(title="Task", offset=None, minutes=0, **kwargs):
        start = T0 + timedelta(minutes=offset) if offset is not None else None
        return Task(title=title, start_time=start, duration=timedelta(minutes=minutes), **kwargs)

    return _make


@pytest.fixture
def make_subtask():
    """Factory for subtasks starting ``offset`` minutes after 09:00."""

    def _make(epic_id, title="Subtask", offset=None, minutes=0, **kwargs):
        start = T0 + timedelta(minutes=offset) if offset is not None else None
        return Subtask(
            title=title,
            epic_id=epic_id,
            start_time=start,
            duration=timedelta(minutes=minutes),
            **kwargs,
        )

    return _make


@pytest.fixture
def populated(registry, make_task, make_subtask):
    """A registry with one timed task, one untimed task, and an epic with two subtasks.

    Returns (registry, ids) where ids maps names to assigned ids.
    """
    ids = {}
    ids["task"] = registry.add_task(make_task("Standup", offset=0, minutes=15))
    ids["untimed"] = registry.add_task(make_task("Read book"))
    ids["epic"] = registry.add_epic(Epic(title="Release"))
    ids["sub1"] = registry.add_subtask(make_subtask(ids["epic"], "Changelog", offset=60, minutes=30))
    ids["sub2"] = registry.add_subtask(make_subtask(ids["epic"], "Deploy", offset=120, minutes=60))
    return registry, ids
