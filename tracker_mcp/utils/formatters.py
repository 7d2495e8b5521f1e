"""Formatting utilities for item output."""

import json
from collections.abc import Sequence
from datetime import datetime, timedelta

from tracker_mcp.enums import ResponseFormat, TaskStatus
from tracker_mcp.errors import TrackerError
from tracker_mcp.models.task import Epic, Subtask, TrackedItem

_STATUS_LABELS = {
    TaskStatus.NEW: "New",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.DONE: "Done",
}


def _format_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


def _format_duration(value: timedelta) -> str:
    minutes = int(value.total_seconds() // 60)
    hours, minutes = divmod(minutes, 60)
    if hours and minutes:
        return f"{hours}h{minutes:02d}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def _format_error(error: TrackerError) -> str:
    """Render a tracker error so callers can tell the kinds apart by code."""
    return f"Error ({error.code}): {error.message}"


def _format_item_concise(item: TrackedItem) -> str:
    """
    Format a single item in concise format for token efficiency.

    Output: "#5 [SUBTASK] Write tests (IN_PROGRESS, 2025-03-01 09:00, 30m, epic:2)"
    """
    title = item.title[:50] if item.title else "Untitled"

    meta = [item.status.value]
    if item.start_time:
        meta.append(_format_time(item.start_time))
    if item.duration:
        meta.append(_format_duration(item.duration))
    if isinstance(item, Subtask):
        meta.append(f"epic:{item.epic_id}")
    if isinstance(item, Epic):
        meta.append(f"subtasks:{len(item.subtask_ids)}")

    return f"#{item.id} [{item.item_type.value}] {title} ({', '.join(meta)})"


def _format_items_concise(items: Sequence[TrackedItem], title: str | None = None) -> str:
    """
    Format a list of items in concise format.

    Output:
    2 item(s) | Schedule
    #1 [TASK] ...
    #4 [SUBTASK] ...
    """
    if not items:
        return "0 items"

    header = f"{len(items)} item(s)"
    if title:
        header = f"{len(items)} item(s) | {title}"

    lines = [header]
    for item in items:
        lines.append(_format_item_concise(item))
    return "\n".join(lines)


def _format_item_markdown(item: TrackedItem) -> str:
    """Format a single item as markdown."""
    lines = [f"### [{item.id}] {item.title or 'Untitled'}"]

    details = [
        f"**Type**: {item.item_type.value}",
        f"**Status**: {_STATUS_LABELS.get(item.status, item.status.value)}",
    ]
    if item.start_time:
        details.append(f"**Start**: {_format_time(item.start_time)}")
        details.append(f"**End**: {_format_time(item.end_time)}")  # type: ignore[attr-defined]
    if item.duration:
        details.append(f"**Duration**: {_format_duration(item.duration)}")
    if isinstance(item, Subtask):
        details.append(f"**Epic**: {item.epic_id}")
    if isinstance(item, Epic):
        ids = ", ".join(str(i) for i in item.subtask_ids) or "none"
        details.append(f"**Subtasks**: {ids}")

    lines.append(" | ".join(details))

    if item.description:
        lines.append("")
        lines.append(item.description)

    return "\n".join(lines)


def _format_items_markdown(items: Sequence[TrackedItem], title: str = "Items") -> str:
    """Format a list of items as markdown."""
    if not items:
        return f"# {title}\n\nNo items found."

    lines = [f"# {title}", f"*{len(items)} item(s)*", ""]
    for item in items:
        lines.append(_format_item_markdown(item))
        lines.append("")

    return "\n".join(lines)


def _format_item(item: TrackedItem, response_format: ResponseFormat) -> str:
    if response_format == ResponseFormat.JSON:
        return item.model_dump_json(indent=2)
    if response_format == ResponseFormat.CONCISE:
        return _format_item_concise(item)
    return _format_item_markdown(item)


def _format_items(
    items: Sequence[TrackedItem],
    response_format: ResponseFormat,
    title: str,
    total: int | None = None,
) -> str:
    if response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "total": len(items) if total is None else total,
                "count": len(items),
                "items": [i.model_dump(mode="json") for i in items],
            },
            indent=2,
        )
    if response_format == ResponseFormat.CONCISE:
        return _format_items_concise(items, title)
    return _format_items_markdown(items, title)


def _select_items(
    items: Sequence[TrackedItem],
    status: TaskStatus | None,
    limit: int | None,
) -> tuple[list[TrackedItem], int]:
    """Apply the optional status filter and limit; return the kept items and the pre-limit total."""
    selected = [i for i in items if status is None or i.status == status]
    total = len(selected)
    if limit and total > limit:
        selected = selected[:limit]
    return selected, total
