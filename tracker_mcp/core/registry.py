"""In-memory registry of tasks, epics and subtasks."""

from __future__ import annotations

import threading
from bisect import bisect_left, insort
from datetime import datetime
from typing import TypeVar

import structlog

from tracker_mcp.core import aggregator
from tracker_mcp.core.history import DEFAULT_HISTORY_LIMIT, HistoryManager
from tracker_mcp.core.overlap import find_conflicts
from tracker_mcp.errors import EntityNotFoundError, InvalidReferenceError, TimeConflictError
from tracker_mcp.models.snapshot import RegistrySnapshot
from tracker_mcp.models.task import Epic, Subtask, Task, TrackedItem

log = structlog.get_logger()

ItemT = TypeVar("ItemT", bound=TrackedItem)


def _priority_key(item: TrackedItem) -> tuple[datetime, int]:
    # Only timed items with ids ever enter the prioritized view.
    return (item.start_time, item.id)  # type: ignore[return-value]


def _require(item: object, cls: type[ItemT]) -> ItemT:
    if item is None:
        raise InvalidReferenceError(f"Expected a {cls.__name__}, got None")
    if not isinstance(item, cls):
        raise InvalidReferenceError(
            f"Expected a {cls.__name__}, got {type(item).__name__}",
            details={"expected": cls.__name__, "actual": type(item).__name__},
        )
    return item


class TaskRegistry:
    """
    Owner of every task, epic and subtask plus their derived views.

    The registry keeps three id-keyed maps, a strictly increasing id counter,
    a start-time ordered view of timed tasks and subtasks, and the recently
    viewed history. Every public method runs under one lock, so epic
    aggregation and overlap checks always see all three maps consistently.

    Items are stored as private copies and handed out as copies. A failed
    call leaves every map, the prioritized view and the history untouched.
    Time conflicts are always rejected with TimeConflictError.
    """

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._lock = threading.RLock()
        self._tasks: dict[int, Task] = {}
        self._epics: dict[int, Epic] = {}
        self._subtasks: dict[int, Subtask] = {}
        self._prioritized: list[TrackedItem] = []
        self._history = HistoryManager(history_limit)
        self._next_id = 1

    # ---- create ----

    def add_task(self, task: Task) -> int:
        with self._lock:
            _require(task, Task)
            stored = task.model_copy(deep=True)
            stored.id = None
            self._check_conflicts(stored)

            stored.id = self._generate_id()
            self._tasks[stored.id] = stored
            self._add_to_prioritized(stored)
            task.id = stored.id

            log.info("Task added", task_id=stored.id, start_time=stored.start_time)
            self._after_change()
            return stored.id

    def add_epic(self, epic: Epic) -> int:
        with self._lock:
            _require(epic, Epic)
            stored = epic.model_copy(deep=True)
            stored.subtask_ids = []
            aggregator.apply(stored, [])

            stored.id = self._generate_id()
            self._epics[stored.id] = stored
            epic.id = stored.id

            log.info("Epic added", epic_id=stored.id)
            self._after_change()
            return stored.id

    def add_subtask(self, subtask: Subtask) -> int:
        with self._lock:
            _require(subtask, Subtask)
            epic = self._epics.get(subtask.epic_id)
            if epic is None:
                raise EntityNotFoundError("Epic", subtask.epic_id)

            stored = subtask.model_copy(deep=True)
            stored.id = None
            self._check_conflicts(stored)

            stored.id = self._generate_id()
            self._subtasks[stored.id] = stored
            epic.subtask_ids.append(stored.id)
            self._refresh_epic(epic)
            self._add_to_prioritized(stored)
            subtask.id = stored.id

            log.info("Subtask added", subtask_id=stored.id, epic_id=epic.id, epic_status=epic.status.value)
            self._after_change()
            return stored.id

    # ---- read ----

    def get_task(self, task_id: int) -> Task:
        return self._get_and_record(self._tasks, task_id, "Task")

    def get_epic(self, epic_id: int) -> Epic:
        return self._get_and_record(self._epics, epic_id, "Epic")

    def get_subtask(self, subtask_id: int) -> Subtask:
        return self._get_and_record(self._subtasks, subtask_id, "Subtask")

    def get_all_tasks(self) -> list[Task]:
        with self._lock:
            return [t.model_copy(deep=True) for t in self._tasks.values()]

    def get_all_epics(self) -> list[Epic]:
        with self._lock:
            return [e.model_copy(deep=True) for e in self._epics.values()]

    def get_all_subtasks(self) -> list[Subtask]:
        with self._lock:
            return [s.model_copy(deep=True) for s in self._subtasks.values()]

    def get_epic_subtasks(self, epic_id: int) -> list[Subtask]:
        """Return the epic's subtasks in link order; an unknown epic yields an empty list."""
        with self._lock:
            epic = self._epics.get(epic_id)
            if epic is None:
                return []
            return [self._subtasks[sid].model_copy(deep=True) for sid in epic.subtask_ids]

    def get_prioritized_tasks(self) -> list[TrackedItem]:
        """Return timed tasks and subtasks ordered by start time (ties by id)."""
        with self._lock:
            return [item.model_copy(deep=True) for item in self._prioritized]

    def get_history(self) -> list[TrackedItem]:
        """Return recently viewed items, oldest first, in their current state."""
        with self._lock:
            resolved: list[TrackedItem] = []
            for entry in self._history.get_history():
                current = self._lookup(entry.id)  # type: ignore[arg-type]
                if current is not None:
                    resolved.append(current.model_copy(deep=True))
            return resolved

    # ---- update ----

    def update_task(self, task: Task) -> None:
        with self._lock:
            _require(task, Task)
            if task.id not in self._tasks:
                raise EntityNotFoundError("Task", task.id)
            stored = task.model_copy(deep=True)
            self._check_conflicts(stored)

            self._remove_from_prioritized(self._tasks[stored.id])  # type: ignore[index]
            self._tasks[stored.id] = stored  # type: ignore[index]
            self._add_to_prioritized(stored)

            log.info("Task updated", task_id=stored.id, status=stored.status.value)
            self._after_change()

    def update_epic(self, epic: Epic) -> None:
        """Replace an epic's own fields; its subtask links and derived fields stay authoritative."""
        with self._lock:
            _require(epic, Epic)
            current = self._epics.get(epic.id)  # type: ignore[arg-type]
            if current is None:
                raise EntityNotFoundError("Epic", epic.id)

            stored = epic.model_copy(deep=True)
            stored.subtask_ids = list(current.subtask_ids)
            self._refresh_epic(stored)
            self._epics[stored.id] = stored  # type: ignore[index]

            log.info("Epic updated", epic_id=stored.id, status=stored.status.value)
            self._after_change()

    def update_subtask(self, subtask: Subtask) -> None:
        """
        Replace a subtask and re-aggregate its epic.

        Pointing the subtask at another existing epic moves it there; both the
        old and the new epic are re-aggregated.
        """
        with self._lock:
            _require(subtask, Subtask)
            old = self._subtasks.get(subtask.id)  # type: ignore[arg-type]
            if old is None:
                raise EntityNotFoundError("Subtask", subtask.id)
            subtask.check_epic_reference()
            new_epic = self._epics.get(subtask.epic_id)
            if new_epic is None:
                raise EntityNotFoundError("Epic", subtask.epic_id)

            stored = subtask.model_copy(deep=True)
            self._check_conflicts(stored)

            self._remove_from_prioritized(old)
            self._subtasks[old.id] = stored  # type: ignore[index]
            if old.epic_id != stored.epic_id:
                old_epic = self._epics.get(old.epic_id)
                if old_epic is not None:
                    old_epic.subtask_ids.remove(old.id)  # type: ignore[arg-type]
                    self._refresh_epic(old_epic)
                new_epic.subtask_ids.append(stored.id)  # type: ignore[arg-type]
                log.info("Subtask moved", subtask_id=stored.id, from_epic=old.epic_id, to_epic=stored.epic_id)
            self._refresh_epic(new_epic)
            self._add_to_prioritized(stored)

            log.info("Subtask updated", subtask_id=stored.id, epic_status=new_epic.status.value)
            self._after_change()

    # ---- delete ----

    def remove_task(self, task_id: int) -> None:
        with self._lock:
            removed = self._tasks.pop(task_id, None)
            if removed is None:
                raise EntityNotFoundError("Task", task_id)
            self._remove_from_prioritized(removed)
            self._history.remove(task_id)

            log.info("Task removed", task_id=task_id)
            self._after_change()

    def remove_subtask(self, subtask_id: int) -> None:
        with self._lock:
            removed = self._subtasks.pop(subtask_id, None)
            if removed is None:
                raise EntityNotFoundError("Subtask", subtask_id)
            epic = self._epics.get(removed.epic_id)
            if epic is not None:
                epic.subtask_ids.remove(subtask_id)
                self._refresh_epic(epic)
            self._remove_from_prioritized(removed)
            self._history.remove(subtask_id)

            log.info("Subtask removed", subtask_id=subtask_id, epic_id=removed.epic_id)
            self._after_change()

    def remove_epic(self, epic_id: int) -> None:
        """Remove an epic together with every subtask it owns."""
        with self._lock:
            removed = self._epics.pop(epic_id, None)
            if removed is None:
                raise EntityNotFoundError("Epic", epic_id)
            self._drop_subtasks_of(removed)
            self._history.remove(epic_id)

            log.info("Epic removed", epic_id=epic_id, subtasks_removed=len(removed.subtask_ids))
            self._after_change()

    def clear_tasks(self) -> None:
        with self._lock:
            self._clear_tasks()
            self._after_change()

    def clear_subtasks(self) -> None:
        """Remove every subtask; every epic falls back to the empty NEW state."""
        with self._lock:
            self._clear_subtasks()
            self._after_change()

    def clear_epics(self) -> None:
        """Remove every epic and, with them, every subtask."""
        with self._lock:
            self._clear_epics()
            self._after_change()

    def clear_all(self) -> None:
        """
        Empty every map, the prioritized view and the history.

        The id counter is kept: ids issued after a clear continue from the
        previous high-water mark and are never reused.
        """
        with self._lock:
            self._clear_tasks()
            self._clear_epics()
            self._subtasks.clear()
            self._prioritized.clear()
            self._history.clear()
            log.info("Registry cleared", next_id=self._next_id)
            self._after_change()

    # ---- snapshot / restore ----

    def snapshot(self) -> RegistrySnapshot:
        with self._lock:
            return RegistrySnapshot(
                tasks=self.get_all_tasks(),
                epics=self.get_all_epics(),
                subtasks=self.get_all_subtasks(),
                history=self._history.ids(),
            )

    def restore(self, snapshot: RegistrySnapshot) -> None:
        """
        Replace the whole registry state with ``snapshot``.

        Epic links are rebuilt from each subtask's ``epic_id`` and every epic
        is re-aggregated. The id counter resumes at the highest id plus one.
        Raises InvalidReferenceError (leaving the registry untouched) for
        missing or duplicate ids and for subtasks whose epic is absent.
        """
        with self._lock:
            tasks: dict[int, Task] = {}
            epics: dict[int, Epic] = {}
            subtasks: dict[int, Subtask] = {}
            seen: set[int] = set()

            for items, target in ((snapshot.tasks, tasks), (snapshot.epics, epics), (snapshot.subtasks, subtasks)):
                for item in items:
                    if item.id is None:
                        raise InvalidReferenceError(f"Snapshot {item.type.lower()} has no id")
                    if item.id in seen:
                        raise InvalidReferenceError(
                            f"Snapshot id {item.id} is used more than once", details={"id": item.id}
                        )
                    seen.add(item.id)
                    target[item.id] = item.model_copy(deep=True)  # type: ignore[index]

            for epic in epics.values():
                epic.subtask_ids = []
            for subtask in sorted(subtasks.values(), key=lambda s: s.id):  # type: ignore[arg-type, return-value]
                subtask.check_epic_reference()
                epic = epics.get(subtask.epic_id)
                if epic is None:
                    raise InvalidReferenceError(
                        f"Subtask {subtask.id} references missing epic {subtask.epic_id}",
                        details={"subtask_id": subtask.id, "epic_id": subtask.epic_id},
                    )
                epic.subtask_ids.append(subtask.id)  # type: ignore[arg-type]

            self._tasks = tasks
            self._epics = epics
            self._subtasks = subtasks
            for epic in epics.values():
                self._refresh_epic(epic)

            timed = [i for i in (*tasks.values(), *subtasks.values()) if i.start_time is not None]
            self._prioritized = sorted(timed, key=_priority_key)

            self._history.clear()
            for item_id in snapshot.history:
                item = self._lookup(item_id)
                if item is not None:
                    self._history.add(item)

            self._next_id = max(seen, default=0) + 1
            log.info(
                "Registry restored",
                tasks=len(tasks),
                epics=len(epics),
                subtasks=len(subtasks),
                next_id=self._next_id,
            )

    # ---- hooks ----

    def _after_change(self) -> None:
        """Called after every successful state change; subclasses persist here."""

    # ---- internals ----

    def _generate_id(self) -> int:
        item_id = self._next_id
        self._next_id += 1
        return item_id

    def _get_and_record(self, items: dict[int, ItemT], item_id: int, entity_type: str) -> ItemT:
        with self._lock:
            item = items.get(item_id)
            if item is None:
                raise EntityNotFoundError(entity_type, item_id)
            self._history.add(item)
            log.debug("Item viewed", entity_type=entity_type, item_id=item_id)
            self._after_change()
            return item.model_copy(deep=True)

    def _lookup(self, item_id: int) -> TrackedItem | None:
        for items in (self._tasks, self._epics, self._subtasks):
            if item_id in items:
                return items[item_id]
        return None

    def _refresh_epic(self, epic: Epic) -> None:
        aggregator.apply(epic, [self._subtasks[sid] for sid in epic.subtask_ids])

    def _check_conflicts(self, item: TrackedItem) -> None:
        conflicts = find_conflicts(item, self._prioritized)
        if conflicts:
            conflicting_ids = [c.id for c in conflicts]
            log.warning(
                "Time conflict rejected",
                item_id=item.id,
                start_time=item.start_time,
                conflicting_ids=conflicting_ids,
            )
            raise TimeConflictError(item.id, conflicting_ids)  # type: ignore[arg-type]

    def _add_to_prioritized(self, item: TrackedItem) -> None:
        if item.start_time is not None:
            insort(self._prioritized, item, key=_priority_key)

    def _remove_from_prioritized(self, item: TrackedItem) -> None:
        if item.start_time is None:
            return
        idx = bisect_left(self._prioritized, _priority_key(item), key=_priority_key)
        if idx < len(self._prioritized) and self._prioritized[idx].id == item.id:
            del self._prioritized[idx]

    def _drop_subtasks_of(self, epic: Epic) -> None:
        for sid in epic.subtask_ids:
            subtask = self._subtasks.pop(sid, None)
            if subtask is not None:
                self._remove_from_prioritized(subtask)
            self._history.remove(sid)

    def _clear_tasks(self) -> None:
        for task in self._tasks.values():
            self._remove_from_prioritized(task)
            self._history.remove(task.id)  # type: ignore[arg-type]
        self._tasks.clear()

    def _clear_subtasks(self) -> None:
        for subtask in self._subtasks.values():
            self._remove_from_prioritized(subtask)
            self._history.remove(subtask.id)  # type: ignore[arg-type]
        self._subtasks.clear()
        for epic in self._epics.values():
            epic.subtask_ids.clear()
            self._refresh_epic(epic)

    def _clear_epics(self) -> None:
        for epic in self._epics.values():
            self._drop_subtasks_of(epic)
            self._history.remove(epic.id)  # type: ignore[arg-type]
        self._epics.clear()
