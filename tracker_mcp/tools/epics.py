"""MCP tools for epics."""

from mcp.types import ToolAnnotations

from tracker_mcp.errors import TrackerError
from tracker_mcp.models.inputs import (
    AddEpicInput,
    EpicSubtasksInput,
    GetItemInput,
    ListItemsInput,
    RemoveItemInput,
    UpdateEpicInput,
)
from tracker_mcp.server import get_registry, mcp
from tracker_mcp.utils.formatters import _format_error, _format_item, _format_items, _select_items
from tracker_mcp.utils.parsers import _parse_epic_input


@mcp.tool(
    name="tracker_add_epic",
    annotations=ToolAnnotations(
        title="Add Epic",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def tracker_add_epic(params: AddEpicInput) -> str:
    """
    Create an epic to group subtasks.

    An epic's status, start, end and duration are always derived from its
    subtasks: NEW while empty or all NEW, DONE when all DONE, otherwise
    IN_PROGRESS. Start is the earliest subtask start, end the latest subtask
    end, duration the sum of subtask durations.

    Args:
        params: AddEpicInput with title and optional description

    Returns:
        Confirmation message with the new epic ID

    Examples:
        - params with title="Release 1.0", description="Everything needed to ship"
    """
    try:
        epic_id = get_registry().add_epic(_parse_epic_input(params))
    except TrackerError as e:
        return _format_error(e)
    return f"Epic created successfully.\nCreated epic {epic_id}."


@mcp.tool(
    name="tracker_get_epic",
    annotations=ToolAnnotations(
        title="Get Epic",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_get_epic(params: GetItemInput) -> str:
    """
    Retrieve one epic by ID, with its derived status and time window.

    The epic is recorded in the view history.

    Args:
        params: GetItemInput with item_id and response_format

    Returns:
        Epic details (markdown, concise or JSON)
    """
    try:
        epic = get_registry().get_epic(params.item_id)
    except TrackerError as e:
        return _format_error(e)
    return _format_item(epic, params.response_format)


@mcp.tool(
    name="tracker_update_epic",
    annotations=ToolAnnotations(
        title="Update Epic",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_update_epic(params: UpdateEpicInput) -> str:
    """
    Replace an epic's title and description. Its subtasks are kept.

    Args:
        params: UpdateEpicInput with epic_id, title and optional description

    Returns:
        Confirmation message
    """
    try:
        get_registry().update_epic(_parse_epic_input(params))
    except TrackerError as e:
        return _format_error(e)
    return f"Epic {params.epic_id} updated successfully."


@mcp.tool(
    name="tracker_remove_epic",
    annotations=ToolAnnotations(
        title="Remove Epic",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def tracker_remove_epic(params: RemoveItemInput) -> str:
    """
    Delete an epic and every subtask it owns.

    Args:
        params: RemoveItemInput with item_id

    Returns:
        Confirmation message
    """
    registry = get_registry()
    try:
        owned = len(registry.get_epic_subtasks(params.item_id))
        registry.remove_epic(params.item_id)
    except TrackerError as e:
        return _format_error(e)
    return f"Epic {params.item_id} removed along with {owned} subtask(s)."


@mcp.tool(
    name="tracker_list_epics",
    annotations=ToolAnnotations(
        title="List Epics",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_list_epics(params: ListItemsInput) -> str:
    """
    List epics in creation order. Listing does not touch the history.

    Args:
        params: ListItemsInput with optional status filter, limit and response_format

    Returns:
        Formatted list of epics
    """
    epics, total = _select_items(get_registry().get_all_epics(), params.status, params.limit)

    title = "Epics"
    if params.status is not None:
        title += f" ({params.status.value})"
    return _format_items(epics, params.response_format, title, total=total)


@mcp.tool(
    name="tracker_epic_subtasks",
    annotations=ToolAnnotations(
        title="List Epic Subtasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_epic_subtasks(params: EpicSubtasksInput) -> str:
    """
    List the subtasks of one epic in the order they were added.

    An unknown epic ID yields an empty list rather than an error.

    Args:
        params: EpicSubtasksInput with epic_id and response_format

    Returns:
        Formatted list of subtasks
    """
    subtasks = get_registry().get_epic_subtasks(params.epic_id)
    return _format_items(subtasks, params.response_format, f"Subtasks of epic {params.epic_id}")
