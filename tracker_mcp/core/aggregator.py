"""Derive an epic's status and time window from its subtasks."""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from typing import NamedTuple

from tracker_mcp.enums import TaskStatus
from tracker_mcp.models.task import Epic, Subtask


class EpicSchedule(NamedTuple):
    """Derived values for an epic."""

    status: TaskStatus
    start_time: datetime | None
    duration: timedelta
    end_time: datetime | None


def derive_status(statuses: Iterable[TaskStatus]) -> TaskStatus:
    """
    Collapse subtask statuses into one epic status.

    - no subtasks, or all NEW -> NEW
    - all DONE -> DONE
    - anything else (any IN_PROGRESS, or a NEW/DONE mix) -> IN_PROGRESS
    """
    seen: set[TaskStatus] = set()
    for status in statuses:
        if status == TaskStatus.IN_PROGRESS:
            return TaskStatus.IN_PROGRESS
        seen.add(status)

    if not seen or seen == {TaskStatus.NEW}:
        return TaskStatus.NEW
    if seen == {TaskStatus.DONE}:
        return TaskStatus.DONE
    return TaskStatus.IN_PROGRESS


def recompute(epic: Epic, subtasks: Sequence[Subtask]) -> EpicSchedule:
    """
    Compute the epic's status and time window from ``subtasks``.

    Start is the earliest subtask start, end the latest subtask end (both over
    subtasks that have a start time). Duration is the plain sum of all subtask
    durations, so overlapping subtask windows still add up.
    """
    if not subtasks:
        return EpicSchedule(TaskStatus.NEW, None, timedelta(0), None)

    status = derive_status(s.status for s in subtasks)

    timed = [s for s in subtasks if s.start_time is not None]
    start_time = min((s.start_time for s in timed), default=None)
    end_time = max((s.end_time for s in timed), default=None)
    duration = sum((s.duration for s in subtasks), timedelta(0))

    return EpicSchedule(status, start_time, duration, end_time)


def apply(epic: Epic, subtasks: Sequence[Subtask]) -> Epic:
    """Write the recomputed schedule onto ``epic`` in place and return it."""
    schedule = recompute(epic, subtasks)
    epic.status = schedule.status
    epic.start_time = schedule.start_time
    epic.duration = schedule.duration
    epic.end_time = schedule.end_time
    return epic
