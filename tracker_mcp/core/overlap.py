"""Time window overlap checks between scheduled items."""

from collections.abc import Iterable

from tracker_mcp.models.task import TrackedItem


def overlaps(a: TrackedItem, b: TrackedItem) -> bool:
    """
    Return True if the time windows of two items intersect.

    Windows are half-open: an item ending exactly when the other starts does
    not overlap it. Items without a start time never overlap anything.
    Callers exclude an item from being compared against itself.
    """
    if a.start_time is None or b.start_time is None:
        return False
    end_a = a.start_time + a.duration
    end_b = b.start_time + b.duration
    return end_a > b.start_time and end_b > a.start_time


def find_conflicts(item: TrackedItem, candidates: Iterable[TrackedItem]) -> list[TrackedItem]:
    """Return every candidate that overlaps ``item``, skipping ``item`` itself."""
    if item.start_time is None:
        return []
    return [c for c in candidates if (item.id is None or c.id != item.id) and overlaps(item, c)]
