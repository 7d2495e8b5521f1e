"""MCP tools for standalone tasks."""

from mcp.types import ToolAnnotations

from tracker_mcp.errors import TrackerError
from tracker_mcp.models.inputs import (
    AddTaskInput,
    GetItemInput,
    ListItemsInput,
    RemoveItemInput,
    UpdateTaskInput,
)
from tracker_mcp.server import get_registry, mcp
from tracker_mcp.utils.formatters import _format_error, _format_item, _format_items, _select_items
from tracker_mcp.utils.parsers import _parse_task_input


@mcp.tool(
    name="tracker_add_task",
    annotations=ToolAnnotations(
        title="Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def tracker_add_task(params: AddTaskInput) -> str:
    """
    Create a standalone task.

    USE THIS WHEN:
    - Tracking a single piece of work that does not belong to an epic

    DO NOT USE WHEN:
    - The work is part of an epic → use tracker_add_subtask instead
    - Grouping work → use tracker_add_epic instead

    SCHEDULING: Timed tasks may not overlap any other scheduled task or
    subtask. A task ending exactly when another starts is fine. Overlaps are
    rejected with a time_conflict error and nothing is created.

    Args:
        params: AddTaskInput with title and optional description, status, start_time, duration_minutes

    Returns:
        Confirmation message with the new task ID

    Examples:
        - Simple task: params with title="Buy groceries"
        - Scheduled task: params with title="Standup", start_time="2025-03-01T09:00", duration_minutes=15
    """
    try:
        task_id = get_registry().add_task(_parse_task_input(params))
    except TrackerError as e:
        return _format_error(e)
    return f"Task created successfully.\nCreated task {task_id}."


@mcp.tool(
    name="tracker_get_task",
    annotations=ToolAnnotations(
        title="Get Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_get_task(params: GetItemInput) -> str:
    """
    Retrieve one task by ID. The task is recorded in the view history.

    Args:
        params: GetItemInput with item_id and response_format

    Returns:
        Task details (markdown, concise or JSON)
    """
    try:
        task = get_registry().get_task(params.item_id)
    except TrackerError as e:
        return _format_error(e)
    return _format_item(task, params.response_format)


@mcp.tool(
    name="tracker_update_task",
    annotations=ToolAnnotations(
        title="Update Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_update_task(params: UpdateTaskInput) -> str:
    """
    Replace a task's fields. Omitted optional fields are reset to their defaults.

    Args:
        params: UpdateTaskInput with task_id and the full set of task fields

    Returns:
        Confirmation message, or an error (not_found, time_conflict)
    """
    try:
        get_registry().update_task(_parse_task_input(params))
    except TrackerError as e:
        return _format_error(e)
    return f"Task {params.task_id} updated successfully."


@mcp.tool(
    name="tracker_remove_task",
    annotations=ToolAnnotations(
        title="Remove Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def tracker_remove_task(params: RemoveItemInput) -> str:
    """
    Delete a task. It also leaves the schedule and the view history.

    Args:
        params: RemoveItemInput with item_id

    Returns:
        Confirmation message
    """
    try:
        get_registry().remove_task(params.item_id)
    except TrackerError as e:
        return _format_error(e)
    return f"Task {params.item_id} removed."


@mcp.tool(
    name="tracker_list_tasks",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_list_tasks(params: ListItemsInput) -> str:
    """
    List standalone tasks in creation order. Listing does not touch the history.

    Args:
        params: ListItemsInput with optional status filter, limit and response_format

    Returns:
        Formatted list of tasks
    """
    tasks, total = _select_items(get_registry().get_all_tasks(), params.status, params.limit)

    title = "Tasks"
    if params.status is not None:
        title += f" ({params.status.value})"
    return _format_items(tasks, params.response_format, title, total=total)
