"""Utility functions for Tracker MCP."""

from tracker_mcp.utils.formatters import (
    _format_error,
    _format_item,
    _format_item_concise,
    _format_item_markdown,
    _format_items,
    _format_items_concise,
    _format_items_markdown,
    _select_items,
)
from tracker_mcp.utils.parsers import _parse_epic_input, _parse_subtask_input, _parse_task_input

__all__ = [
    "_format_error",
    "_format_item",
    "_format_item_concise",
    "_format_item_markdown",
    "_format_items",
    "_format_items_concise",
    "_format_items_markdown",
    "_select_items",
    "_parse_task_input",
    "_parse_subtask_input",
    "_parse_epic_input",
]
