"""Custom exceptions for the Tracker MCP server."""


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    code = "tracker_error"

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EntityNotFoundError(TrackerError):
    """Raised when an id does not resolve to a stored task, epic or subtask."""

    code = "not_found"

    def __init__(self, entity_type: str, entity_id: int | None) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvalidReferenceError(TrackerError):
    """Raised for self-referencing subtasks and missing or wrong-kind entities.

    Must not derive from ValueError, so it escapes pydantic validators as is.
    """

    code = "invalid_reference"


class TimeConflictError(TrackerError):
    """Raised when a timed item overlaps one or more scheduled items."""

    code = "time_conflict"

    def __init__(self, item_id: int | None, conflicting_ids: list[int]) -> None:
        label = f"Item {item_id}" if item_id is not None else "New item"
        ids = ", ".join(str(i) for i in conflicting_ids)
        super().__init__(
            f"{label} overlaps scheduled item(s): {ids}",
            details={"item_id": item_id, "conflicting_ids": list(conflicting_ids)},
        )
        self.item_id = item_id
        self.conflicting_ids = list(conflicting_ids)


class PersistenceError(TrackerError):
    """Raised when a snapshot cannot be read from or written to disk."""

    code = "persistence"
