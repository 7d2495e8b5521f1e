"""MCP tools for derived views: history, schedule, bulk clear."""

from mcp.types import ToolAnnotations

from tracker_mcp.enums import ClearScope
from tracker_mcp.errors import TrackerError
from tracker_mcp.models.inputs import ClearInput, HistoryInput, PrioritizedInput
from tracker_mcp.server import get_registry, mcp
from tracker_mcp.utils.formatters import _format_error, _format_items, _select_items


@mcp.tool(
    name="tracker_history",
    annotations=ToolAnnotations(
        title="Recently Viewed",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_history(params: HistoryInput) -> str:
    """
    Show the most recently viewed tasks, epics and subtasks, oldest first.

    Only the get tools record views. Each item appears once, at the position
    of its latest view; the oldest views drop off past the history limit
    (10 by default).

    Args:
        params: HistoryInput with response_format

    Returns:
        Formatted list of recently viewed items
    """
    history = get_registry().get_history()
    return _format_items(history, params.response_format, "History")


@mcp.tool(
    name="tracker_prioritized",
    annotations=ToolAnnotations(
        title="Schedule",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_prioritized(params: PrioritizedInput) -> str:
    """
    Show scheduled tasks and subtasks ordered by start time.

    Items without a start time and epics are not part of the schedule.

    Args:
        params: PrioritizedInput with optional limit and response_format

    Returns:
        Formatted, time-ordered list of items
    """
    items, total = _select_items(get_registry().get_prioritized_tasks(), None, params.limit)
    return _format_items(items, params.response_format, "Schedule", total=total)


@mcp.tool(
    name="tracker_clear",
    annotations=ToolAnnotations(
        title="Clear Items",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def tracker_clear(params: ClearInput) -> str:
    """
    Remove every item in a scope. Cannot be undone.

    SCOPES:
    - tasks: standalone tasks only
    - subtasks: every subtask; epics stay and fall back to NEW
    - epics: every epic together with all subtasks
    - all: everything, including the view history (IDs are never reused)

    Args:
        params: ClearInput with scope and confirm=true

    Returns:
        Confirmation message
    """
    if not params.confirm:
        return f"Error: Clearing {params.scope.value} requires confirm=true."

    registry = get_registry()
    actions = {
        ClearScope.TASKS: registry.clear_tasks,
        ClearScope.SUBTASKS: registry.clear_subtasks,
        ClearScope.EPICS: registry.clear_epics,
        ClearScope.ALL: registry.clear_all,
    }
    try:
        actions[params.scope]()
    except TrackerError as e:
        return _format_error(e)
    return f"Cleared {params.scope.value}."
