"""MCP tool definitions for the tracker."""

# Import all tools to register them with the MCP server
from tracker_mcp.tools.epics import (
    tracker_add_epic,
    tracker_epic_subtasks,
    tracker_get_epic,
    tracker_list_epics,
    tracker_remove_epic,
    tracker_update_epic,
)
from tracker_mcp.tools.subtasks import (
    tracker_add_subtask,
    tracker_get_subtask,
    tracker_list_subtasks,
    tracker_remove_subtask,
    tracker_update_subtask,
)
from tracker_mcp.tools.tasks import (
    tracker_add_task,
    tracker_get_task,
    tracker_list_tasks,
    tracker_remove_task,
    tracker_update_task,
)
from tracker_mcp.tools.views import tracker_clear, tracker_history, tracker_prioritized

__all__ = [
    # Task tools
    "tracker_add_task",
    "tracker_get_task",
    "tracker_update_task",
    "tracker_remove_task",
    "tracker_list_tasks",
    # Epic tools
    "tracker_add_epic",
    "tracker_get_epic",
    "tracker_update_epic",
    "tracker_remove_epic",
    "tracker_list_epics",
    "tracker_epic_subtasks",
    # Subtask tools
    "tracker_add_subtask",
    "tracker_get_subtask",
    "tracker_update_subtask",
    "tracker_remove_subtask",
    "tracker_list_subtasks",
    # View tools
    "tracker_history",
    "tracker_prioritized",
    "tracker_clear",
]
