"""Bounded, de-duplicated record of recently viewed items."""

from collections import OrderedDict

from tracker_mcp.errors import InvalidReferenceError
from tracker_mcp.models.task import TrackedItem

DEFAULT_HISTORY_LIMIT = 10


class HistoryManager:
    """
    Recently viewed items, oldest first.

    Each id appears at most once; viewing an item again moves it to the end.
    When the limit is exceeded the oldest entries are evicted.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._limit = limit
        self._items: OrderedDict[int, TrackedItem] = OrderedDict()

    @property
    def limit(self) -> int:
        return self._limit

    def add(self, item: TrackedItem | None) -> None:
        if item is None or item.id is None:
            raise InvalidReferenceError("Cannot record history for an item without an id")
        self._items.pop(item.id, None)
        self._items[item.id] = item
        while len(self._items) > self._limit:
            self._items.popitem(last=False)

    def remove(self, item_id: int) -> None:
        self._items.pop(item_id, None)

    def get_history(self) -> list[TrackedItem]:
        return list(self._items.values())

    def ids(self) -> list[int]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items
