"""
MCP server for a personal task tracker.

Tracks standalone tasks, epics and the subtasks they own. Epic status and
timing are derived from subtasks, scheduled items may not overlap, a
time-ordered schedule is kept for every timed item, and recently viewed
items are remembered in a bounded history.
"""

# Re-export enums
from tracker_mcp.enums import ClearScope, ResponseFormat, TaskStatus, TaskType

# Re-export errors
from tracker_mcp.errors import (
    EntityNotFoundError,
    InvalidReferenceError,
    PersistenceError,
    TimeConflictError,
    TrackerError,
)

# Re-export the consistency engine
from tracker_mcp.core import (
    EpicSchedule,
    HistoryManager,
    TaskRegistry,
    derive_status,
    find_conflicts,
    overlaps,
    recompute,
)

# Re-export models
from tracker_mcp.models import (
    AddEpicInput,
    AddSubtaskInput,
    AddTaskInput,
    ClearInput,
    Epic,
    EpicSubtasksInput,
    GetItemInput,
    HistoryInput,
    ListItemsInput,
    PrioritizedInput,
    RegistrySnapshot,
    RemoveItemInput,
    Subtask,
    Task,
    TrackedItem,
    UpdateEpicInput,
    UpdateSubtaskInput,
    UpdateTaskInput,
    parse_item,
)

# Re-export MCP server instance and registry access
from tracker_mcp.server import get_registry, mcp, set_registry
from tracker_mcp.storage import FileBackedTaskRegistry

# Re-export tools
from tracker_mcp.tools import (
    tracker_add_epic,
    tracker_add_subtask,
    tracker_add_task,
    tracker_clear,
    tracker_epic_subtasks,
    tracker_get_epic,
    tracker_get_subtask,
    tracker_get_task,
    tracker_history,
    tracker_list_epics,
    tracker_list_subtasks,
    tracker_list_tasks,
    tracker_prioritized,
    tracker_remove_epic,
    tracker_remove_subtask,
    tracker_remove_task,
    tracker_update_epic,
    tracker_update_subtask,
    tracker_update_task,
)

# Re-export utilities (including private functions used by tests)
from tracker_mcp.utils import (
    _format_error,
    _format_item_concise,
    _format_item_markdown,
    _format_items_concise,
    _format_items_markdown,
)

__all__ = [
    # Enums
    "ResponseFormat",
    "TaskStatus",
    "TaskType",
    "ClearScope",
    # Errors
    "TrackerError",
    "EntityNotFoundError",
    "InvalidReferenceError",
    "TimeConflictError",
    "PersistenceError",
    # Engine
    "overlaps",
    "find_conflicts",
    "EpicSchedule",
    "derive_status",
    "recompute",
    "HistoryManager",
    "TaskRegistry",
    "FileBackedTaskRegistry",
    # Item models
    "TrackedItem",
    "Task",
    "Epic",
    "Subtask",
    "parse_item",
    "RegistrySnapshot",
    # Input models
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
    # Utility functions
    "_format_error",
    "_format_item_concise",
    "_format_item_markdown",
    "_format_items_concise",
    "_format_items_markdown",
    # Tools
    "tracker_add_task",
    "tracker_get_task",
    "tracker_update_task",
    "tracker_remove_task",
    "tracker_list_tasks",
    "tracker_add_epic",
    "tracker_get_epic",
    "tracker_update_epic",
    "tracker_remove_epic",
    "tracker_list_epics",
    "tracker_epic_subtasks",
    "tracker_add_subtask",
    "tracker_get_subtask",
    "tracker_update_subtask",
    "tracker_remove_subtask",
    "tracker_list_subtasks",
    "tracker_history",
    "tracker_prioritized",
    "tracker_clear",
    # MCP server
    "mcp",
    "get_registry",
    "set_registry",
]
