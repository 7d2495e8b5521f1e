"""Enums for Tracker MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per item, for chaining
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class TaskStatus(str, Enum):
    """Lifecycle status shared by tasks, subtasks and epics."""

    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskType(str, Enum):
    """Kind of tracked item; the discriminator of the item union."""

    TASK = "TASK"
    EPIC = "EPIC"
    SUBTASK = "SUBTASK"


class ClearScope(str, Enum):
    """Which collections a bulk clear empties."""

    TASKS = "tasks"
    SUBTASKS = "subtasks"
    EPICS = "epics"
    ALL = "all"
