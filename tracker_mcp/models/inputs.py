"""Input models for Tracker MCP tools."""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker_mcp.enums import ClearScope, ResponseFormat, TaskStatus

# ============================================================================
# Shared Item Fields
# ============================================================================


class ItemFieldsInput(BaseModel):
    """Fields every task-like input carries. Updates replace all of them."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., description="Short title (required)", min_length=1, max_length=200)
    description: str = Field(default="", description="Longer free-text description", max_length=2000)
    status: TaskStatus = Field(default=TaskStatus.NEW, description="Status: NEW, IN_PROGRESS or DONE")
    start_time: datetime | None = Field(
        default=None,
        description="Local start time in ISO format (e.g., '2025-03-01T09:00'); omit for unscheduled items",
    )
    duration_minutes: int = Field(default=0, description="Planned duration in minutes", ge=0, le=525600)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=self.duration_minutes)


# ============================================================================
# Task Input Models
# ============================================================================


class AddTaskInput(ItemFieldsInput):
    """Input model for adding a task."""


class UpdateTaskInput(ItemFieldsInput):
    """Input model for replacing a task."""

    task_id: int = Field(..., description="ID of the task to replace", ge=1)


# ============================================================================
# Subtask Input Models
# ============================================================================


class AddSubtaskInput(ItemFieldsInput):
    """Input model for adding a subtask to an epic."""

    epic_id: int = Field(..., description="ID of the owning epic", ge=1)


class UpdateSubtaskInput(ItemFieldsInput):
    """Input model for replacing a subtask (may move it to another epic)."""

    subtask_id: int = Field(..., description="ID of the subtask to replace", ge=1)
    epic_id: int = Field(..., description="ID of the owning epic", ge=1)


# ============================================================================
# Epic Input Models
# ============================================================================


class AddEpicInput(BaseModel):
    """Input model for adding an epic. Status and timing come from its subtasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., description="Short title (required)", min_length=1, max_length=200)
    description: str = Field(default="", description="Longer free-text description", max_length=2000)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()


class UpdateEpicInput(AddEpicInput):
    """Input model for replacing an epic's title and description."""

    epic_id: int = Field(..., description="ID of the epic to replace", ge=1)


class EpicSubtasksInput(BaseModel):
    """Input model for listing an epic's subtasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    epic_id: int = Field(..., description="ID of the epic", ge=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


# ============================================================================
# Shared Lookup Models
# ============================================================================


class GetItemInput(BaseModel):
    """Input model for fetching one task, epic or subtask by id."""

    model_config = ConfigDict(str_strip_whitespace=True)

    item_id: int = Field(..., description="ID of the item to retrieve", ge=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class RemoveItemInput(BaseModel):
    """Input model for removing one task, epic or subtask by id."""

    model_config = ConfigDict(str_strip_whitespace=True)

    item_id: int = Field(..., description="ID of the item to remove", ge=1)


class ListItemsInput(BaseModel):
    """Input model for listing every item of one kind."""

    model_config = ConfigDict(str_strip_whitespace=True)

    status: TaskStatus | None = Field(default=None, description="Only include items with this status")
    limit: int | None = Field(default=50, description="Maximum number of items to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


# ============================================================================
# View Input Models
# ============================================================================


class HistoryInput(BaseModel):
    """Input model for the recently viewed items."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class PrioritizedInput(BaseModel):
    """Input model for the time-ordered schedule."""

    model_config = ConfigDict(str_strip_whitespace=True)

    limit: int | None = Field(default=None, description="Maximum number of items to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class ClearInput(BaseModel):
    """Input model for bulk removal."""

    model_config = ConfigDict(str_strip_whitespace=True)

    scope: ClearScope = Field(default=ClearScope.ALL, description="What to clear: tasks, subtasks, epics or all")
    confirm: bool = Field(default=False, description="Must be true; clearing cannot be undone")
