"""MCP tools for subtasks."""

from mcp.types import ToolAnnotations

from tracker_mcp.errors import TrackerError
from tracker_mcp.models.inputs import (
    AddSubtaskInput,
    GetItemInput,
    ListItemsInput,
    RemoveItemInput,
    UpdateSubtaskInput,
)
from tracker_mcp.server import get_registry, mcp
from tracker_mcp.utils.formatters import _format_error, _format_item, _format_items, _select_items
from tracker_mcp.utils.parsers import _parse_subtask_input


@mcp.tool(
    name="tracker_add_subtask",
    annotations=ToolAnnotations(
        title="Add Subtask",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def tracker_add_subtask(params: AddSubtaskInput) -> str:
    """
    Create a subtask inside an existing epic.

    The owning epic's status and time window are recomputed immediately.
    Timed subtasks follow the same no-overlap rule as tasks.

    Args:
        params: AddSubtaskInput with epic_id, title and optional description, status, start_time, duration_minutes

    Returns:
        Confirmation message with the new subtask ID and the epic's status

    Examples:
        - params with epic_id=1, title="Write changelog"
        - params with epic_id=1, title="Deploy", start_time="2025-03-01T14:00", duration_minutes=60
    """
    registry = get_registry()
    try:
        subtask_id = registry.add_subtask(_parse_subtask_input(params))
    except TrackerError as e:
        return _format_error(e)
    status = next((e.status.value for e in registry.get_all_epics() if e.id == params.epic_id), "?")
    return (
        f"Subtask created successfully.\n"
        f"Created subtask {subtask_id} in epic {params.epic_id} (epic status: {status})."
    )


@mcp.tool(
    name="tracker_get_subtask",
    annotations=ToolAnnotations(
        title="Get Subtask",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_get_subtask(params: GetItemInput) -> str:
    """
    Retrieve one subtask by ID. The subtask is recorded in the view history.

    Args:
        params: GetItemInput with item_id and response_format

    Returns:
        Subtask details (markdown, concise or JSON)
    """
    try:
        subtask = get_registry().get_subtask(params.item_id)
    except TrackerError as e:
        return _format_error(e)
    return _format_item(subtask, params.response_format)


@mcp.tool(
    name="tracker_update_subtask",
    annotations=ToolAnnotations(
        title="Update Subtask",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_update_subtask(params: UpdateSubtaskInput) -> str:
    """
    Replace a subtask's fields. Changing epic_id moves it to that epic.

    Args:
        params: UpdateSubtaskInput with subtask_id, epic_id and the full set of fields

    Returns:
        Confirmation message, or an error (not_found, time_conflict, invalid_reference)
    """
    try:
        get_registry().update_subtask(_parse_subtask_input(params))
    except TrackerError as e:
        return _format_error(e)
    return f"Subtask {params.subtask_id} updated successfully."


@mcp.tool(
    name="tracker_remove_subtask",
    annotations=ToolAnnotations(
        title="Remove Subtask",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def tracker_remove_subtask(params: RemoveItemInput) -> str:
    """
    Delete a subtask and re-derive its epic.

    Args:
        params: RemoveItemInput with item_id

    Returns:
        Confirmation message
    """
    try:
        get_registry().remove_subtask(params.item_id)
    except TrackerError as e:
        return _format_error(e)
    return f"Subtask {params.item_id} removed."


@mcp.tool(
    name="tracker_list_subtasks",
    annotations=ToolAnnotations(
        title="List Subtasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_list_subtasks(params: ListItemsInput) -> str:
    """
    List every subtask across all epics. Listing does not touch the history.

    Args:
        params: ListItemsInput with optional status filter, limit and response_format

    Returns:
        Formatted list of subtasks
    """
    subtasks, total = _select_items(get_registry().get_all_subtasks(), params.status, params.limit)

    title = "Subtasks"
    if params.status is not None:
        title += f" ({params.status.value})"
    return _format_items(subtasks, params.response_format, title, total=total)
