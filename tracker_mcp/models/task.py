"""Core item models for Tracker MCP."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, computed_field, field_validator, model_validator

from tracker_mcp.enums import TaskStatus, TaskType
from tracker_mcp.errors import InvalidReferenceError


class TrackedItem(BaseModel):
    """Fields shared by every kind of tracked item.

    Identity is the registry-assigned ``id`` alone: two items with the same id
    compare equal and hash alike whatever their other fields hold. Items not
    yet added to a registry all have ``id=None`` and so are equal to each other.

    Start times are naive local times; aware values are converted to the
    local clock on validation.
    """

    id: int | None = None
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.NEW
    start_time: datetime | None = None
    duration: timedelta = Field(default_factory=timedelta)

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError("Duration cannot be negative")
        return v

    @property
    def item_type(self) -> TaskType:
        return TaskType(self.type)  # type: ignore[attr-defined]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrackedItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class ScheduledItem(TrackedItem):
    """An item whose end time follows from its own start and duration."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def end_time(self) -> datetime | None:
        if self.start_time is None:
            return None
        return self.start_time + self.duration


class Task(ScheduledItem):
    """A standalone task."""

    type: Literal["TASK"] = "TASK"


class Subtask(ScheduledItem):
    """A task owned by exactly one epic."""

    type: Literal["SUBTASK"] = "SUBTASK"
    epic_id: int

    @model_validator(mode="after")
    def validate_epic_reference(self) -> Subtask:
        self.check_epic_reference()
        return self

    def check_epic_reference(self) -> None:
        if self.id is not None and self.id == self.epic_id:
            raise InvalidReferenceError(
                f"Subtask {self.id} cannot be its own epic",
                details={"subtask_id": self.id, "epic_id": self.epic_id},
            )


class Epic(TrackedItem):
    """A grouping item whose status and time window come from its subtasks.

    ``subtask_ids`` holds ordered back-references into the registry; the
    subtasks themselves live only in the registry's subtask map.
    """

    type: Literal["EPIC"] = "EPIC"
    subtask_ids: list[int] = Field(default_factory=list)
    end_time: datetime | None = None


AnyItem = Annotated[Task | Epic | Subtask, Field(discriminator="type")]

_item_adapter: TypeAdapter[Task | Epic | Subtask] = TypeAdapter(AnyItem)


def parse_item(data: dict[str, Any]) -> Task | Epic | Subtask:
    """Validate a raw mapping into the matching item model using its ``type`` tag."""
    return _item_adapter.validate_python(data)
