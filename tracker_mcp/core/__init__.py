"""Consistency engine: overlap checks, epic aggregation, history and the registry."""

from tracker_mcp.core.aggregator import EpicSchedule, derive_status, recompute
from tracker_mcp.core.history import DEFAULT_HISTORY_LIMIT, HistoryManager
from tracker_mcp.core.overlap import find_conflicts, overlaps
from tracker_mcp.core.registry import TaskRegistry

__all__ = [
    "overlaps",
    "find_conflicts",
    "EpicSchedule",
    "derive_status",
    "recompute",
    "DEFAULT_HISTORY_LIMIT",
    "HistoryManager",
    "TaskRegistry",
]
