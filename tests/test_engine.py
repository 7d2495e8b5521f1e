"""Tests for overlap detection, epic aggregation and the view history."""

import itertools
from datetime import datetime, timedelta

import pytest

from tracker_mcp import (
    Epic,
    HistoryManager,
    InvalidReferenceError,
    Subtask,
    Task,
    TaskStatus,
    derive_status,
    find_conflicts,
    overlaps,
    recompute,
)
from tracker_mcp.core.aggregator import apply

T0 = datetime(2025, 3, 1, 9, 0)

NEW = TaskStatus.NEW
IN_PROGRESS = TaskStatus.IN_PROGRESS
DONE = TaskStatus.DONE


def _task(item_id=None, offset=None, minutes=0):
    start = T0 + timedelta(minutes=offset) if offset is not None else None
    return Task(id=item_id, title=f"t{item_id}", start_time=start, duration=timedelta(minutes=minutes))


def _subtask(item_id, offset=None, minutes=0, status=NEW, epic_id=100):
    start = T0 + timedelta(minutes=offset) if offset is not None else None
    return Subtask(
        id=item_id,
        epic_id=epic_id,
        title=f"s{item_id}",
        status=status,
        start_time=start,
        duration=timedelta(minutes=minutes),
    )


# ============================================================================
# Overlap Tests
# ============================================================================


class TestOverlaps:
    """Tests for the half-open window intersection."""

    def test_intersecting_windows(self):
        assert overlaps(_task(1, 0, 60), _task(2, 30, 60))

    def test_contained_window(self):
        assert overlaps(_task(1, 0, 120), _task(2, 30, 15))

    def test_touching_boundary_does_not_overlap(self):
        """An item ending exactly when the other starts is fine."""
        assert not overlaps(_task(1, 0, 60), _task(2, 60, 30))
        assert not overlaps(_task(2, 60, 30), _task(1, 0, 60))

    def test_disjoint_windows(self):
        assert not overlaps(_task(1, 0, 30), _task(2, 90, 30))

    def test_missing_start_never_overlaps(self):
        assert not overlaps(_task(1, None, 60), _task(2, 0, 60))
        assert not overlaps(_task(1, 0, 60), _task(2, None, 60))
        assert not overlaps(_task(1), _task(2))

    def test_zero_duration_inside_window(self):
        assert overlaps(_task(1, 30, 0), _task(2, 0, 60))

    def test_zero_duration_at_window_start(self):
        assert not overlaps(_task(1, 0, 0), _task(2, 0, 60))

    def test_symmetric(self):
        """overlaps(a, b) == overlaps(b, a) over a grid of windows."""
        windows = [(None, 30), (0, 0), (0, 30), (0, 60), (15, 15), (30, 30), (60, 0), (45, 90)]
        for (oa, ma), (ob, mb) in itertools.product(windows, repeat=2):
            a, b = _task(1, oa, ma), _task(2, ob, mb)
            assert overlaps(a, b) == overlaps(b, a), (oa, ma, ob, mb)


class TestFindConflicts:
    """Tests for collecting conflicting items."""

    def test_returns_all_conflicts(self):
        scheduled = [_task(1, 0, 60), _task(2, 60, 60), _task(3, 180, 30)]
        conflicts = find_conflicts(_task(None, 30, 60), scheduled)
        assert [c.id for c in conflicts] == [1, 2]

    def test_skips_same_id(self):
        """An update is not checked against its own stored version."""
        scheduled = [_task(1, 0, 60)]
        assert find_conflicts(_task(1, 15, 60), scheduled) == []

    def test_new_item_checked_against_everything(self):
        scheduled = [_task(1, 0, 60)]
        assert len(find_conflicts(_task(None, 15, 15), scheduled)) == 1

    def test_untimed_item_has_no_conflicts(self):
        assert find_conflicts(_task(None), [_task(1, 0, 60)]) == []

    def test_mixed_kinds(self):
        scheduled = [_subtask(4, 0, 60)]
        assert [c.id for c in find_conflicts(_task(None, 30, 10), scheduled)] == [4]


# ============================================================================
# Aggregator Tests
# ============================================================================


def _expected_status(statuses):
    if not statuses or all(s == NEW for s in statuses):
        return NEW
    if all(s == DONE for s in statuses):
        return DONE
    return IN_PROGRESS


class TestDeriveStatus:
    """Tests for collapsing subtask statuses into an epic status."""

    @pytest.mark.parametrize(
        "statuses,expected",
        [
            ([], NEW),
            ([NEW], NEW),
            ([NEW, NEW], NEW),
            ([DONE], DONE),
            ([DONE, DONE, DONE], DONE),
            ([IN_PROGRESS], IN_PROGRESS),
            ([NEW, DONE], IN_PROGRESS),
            ([NEW, IN_PROGRESS], IN_PROGRESS),
            ([DONE, IN_PROGRESS], IN_PROGRESS),
            ([DONE, NEW, DONE], IN_PROGRESS),
        ],
    )
    def test_rule_table(self, statuses, expected):
        assert derive_status(statuses) == expected

    def test_every_combination(self):
        """The rule is total over all status multisets up to size four."""
        for size in range(5):
            for combo in itertools.product(list(TaskStatus), repeat=size):
                assert derive_status(combo) == _expected_status(combo), combo

    def test_accepts_generators(self):
        assert derive_status(s for s in [DONE, DONE]) == DONE


class TestRecompute:
    """Tests for the derived epic schedule."""

    def test_empty_epic(self):
        schedule = recompute(Epic(id=100, title="E"), [])
        assert schedule.status == NEW
        assert schedule.start_time is None
        assert schedule.end_time is None
        assert schedule.duration == timedelta(0)

    def test_window_and_duration(self):
        subtasks = [_subtask(1, 60, 30, DONE), _subtask(2, 0, 30, NEW), _subtask(3, 120, 45, DONE)]
        schedule = recompute(Epic(id=100, title="E"), subtasks)
        assert schedule.status == IN_PROGRESS
        assert schedule.start_time == T0
        assert schedule.end_time == T0 + timedelta(minutes=165)
        assert schedule.duration == timedelta(minutes=105)

    def test_end_is_latest_end_not_last_start(self):
        """A long early subtask can end after a short later one."""
        subtasks = [_subtask(1, 0, 240), _subtask(2, 60, 15)]
        schedule = recompute(Epic(id=100, title="E"), subtasks)
        assert schedule.end_time == T0 + timedelta(minutes=240)

    def test_duration_is_plain_sum(self):
        """Overlapping windows still add up in duration."""
        subtasks = [_subtask(1, 0, 60), _subtask(2, 30, 60)]
        schedule = recompute(Epic(id=100, title="E"), subtasks)
        assert schedule.duration == timedelta(minutes=120)
        assert schedule.end_time - schedule.start_time == timedelta(minutes=90)

    def test_untimed_subtasks_count_for_duration_only(self):
        subtasks = [_subtask(1, None, 20), _subtask(2, 30, 10)]
        schedule = recompute(Epic(id=100, title="E"), subtasks)
        assert schedule.start_time == T0 + timedelta(minutes=30)
        assert schedule.end_time == T0 + timedelta(minutes=40)
        assert schedule.duration == timedelta(minutes=30)

    def test_all_untimed(self):
        schedule = recompute(Epic(id=100, title="E"), [_subtask(1, None, 20, DONE)])
        assert schedule.status == DONE
        assert schedule.start_time is None
        assert schedule.end_time is None
        assert schedule.duration == timedelta(minutes=20)

    def test_apply_writes_fields(self):
        epic = Epic(id=100, title="E", status=DONE)
        apply(epic, [_subtask(1, 0, 30, IN_PROGRESS)])
        assert epic.status == IN_PROGRESS
        assert epic.start_time == T0
        assert epic.end_time == T0 + timedelta(minutes=30)
        assert epic.duration == timedelta(minutes=30)


# ============================================================================
# History Tests
# ============================================================================


class TestHistoryManager:
    """Tests for the bounded, de-duplicated history."""

    def test_starts_empty(self):
        history = HistoryManager()
        assert history.get_history() == []
        assert len(history) == 0
        assert history.limit == 10

    def test_oldest_first(self):
        history = HistoryManager()
        for i in (1, 2, 3):
            history.add(_task(i))
        assert history.ids() == [1, 2, 3]

    def test_re_adding_moves_to_end(self):
        """Each id appears once, at the position of its latest access."""
        history = HistoryManager()
        for i in (1, 2, 3, 1):
            history.add(_task(i))
        assert history.ids() == [2, 3, 1]
        assert len(history) == 3

    def test_evicts_oldest_past_limit(self):
        history = HistoryManager()
        for i in range(1, 13):
            history.add(_task(i))
        assert len(history) == 10
        assert history.ids() == list(range(3, 13))

    def test_custom_limit(self):
        history = HistoryManager(limit=2)
        for i in (1, 2, 3):
            history.add(_task(i))
        assert history.ids() == [2, 3]

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            HistoryManager(limit=0)

    def test_add_none_rejected(self):
        history = HistoryManager()
        with pytest.raises(InvalidReferenceError):
            history.add(None)
        with pytest.raises(InvalidReferenceError):
            history.add(_task(None))
        assert len(history) == 0

    def test_remove(self):
        history = HistoryManager()
        for i in (1, 2, 3):
            history.add(_task(i))
        history.remove(2)
        history.remove(99)
        assert history.ids() == [1, 3]
        assert 2 not in history
        assert 1 in history

    def test_get_history_returns_copy(self):
        history = HistoryManager()
        history.add(_task(1))
        snapshot = history.get_history()
        snapshot.clear()
        assert history.ids() == [1]

    def test_clear(self):
        history = HistoryManager()
        history.add(_task(1))
        history.clear()
        assert history.get_history() == []

    def test_mixed_kinds(self):
        history = HistoryManager()
        history.add(_task(1))
        history.add(Epic(id=2, title="E"))
        history.add(_subtask(3, epic_id=2))
        assert [type(i).__name__ for i in history.get_history()] == ["Task", "Epic", "Subtask"]
