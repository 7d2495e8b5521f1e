"""Builders that turn tool inputs into item models."""

from tracker_mcp.models.inputs import (
    AddEpicInput,
    AddSubtaskInput,
    AddTaskInput,
    UpdateEpicInput,
    UpdateSubtaskInput,
    UpdateTaskInput,
)
from tracker_mcp.models.task import Epic, Subtask, Task


def _parse_task_input(params: AddTaskInput | UpdateTaskInput) -> Task:
    """
    Build a Task from tool input.

    Add inputs produce an id-less task; update inputs carry the id to replace.
    """
    return Task(
        id=getattr(params, "task_id", None),
        title=params.title,
        description=params.description,
        status=params.status,
        start_time=params.start_time,
        duration=params.duration,
    )


def _parse_subtask_input(params: AddSubtaskInput | UpdateSubtaskInput) -> Subtask:
    """Build a Subtask from tool input. Raises InvalidReferenceError for self-owned subtasks."""
    return Subtask(
        id=getattr(params, "subtask_id", None),
        epic_id=params.epic_id,
        title=params.title,
        description=params.description,
        status=params.status,
        start_time=params.start_time,
        duration=params.duration,
    )


def _parse_epic_input(params: AddEpicInput | UpdateEpicInput) -> Epic:
    return Epic(
        id=getattr(params, "epic_id", None),
        title=params.title,
        description=params.description,
    )
