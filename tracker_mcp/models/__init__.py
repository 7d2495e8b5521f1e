"""Pydantic models for Tracker MCP."""

from tracker_mcp.models.inputs import (
    AddEpicInput,
    AddSubtaskInput,
    AddTaskInput,
    ClearInput,
    EpicSubtasksInput,
    GetItemInput,
    HistoryInput,
    ItemFieldsInput,
    ListItemsInput,
    PrioritizedInput,
    RemoveItemInput,
    UpdateEpicInput,
    UpdateSubtaskInput,
    UpdateTaskInput,
)
from tracker_mcp.models.snapshot import RegistrySnapshot
from tracker_mcp.models.task import AnyItem, Epic, ScheduledItem, Subtask, Task, TrackedItem, parse_item

__all__ = [
    # Item models
    "TrackedItem",
    "ScheduledItem",
    "Task",
    "Epic",
    "Subtask",
    "AnyItem",
    "parse_item",
    "RegistrySnapshot",
    # Tool input models
    "ItemFieldsInput",
    "AddTaskInput",
    "UpdateTaskInput",
    "AddSubtaskInput",
    "UpdateSubtaskInput",
    "AddEpicInput",
    "UpdateEpicInput",
    "EpicSubtasksInput",
    "GetItemInput",
    "RemoveItemInput",
    "ListItemsInput",
    "HistoryInput",
    "PrioritizedInput",
    "ClearInput",
]
