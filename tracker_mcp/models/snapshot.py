"""Serializable snapshot of the whole registry."""

from pydantic import BaseModel, Field

from tracker_mcp.models.task import Epic, Subtask, Task


class RegistrySnapshot(BaseModel):
    """Every stored item plus the history ids, oldest access first."""

    tasks: list[Task] = Field(default_factory=list)
    epics: list[Epic] = Field(default_factory=list)
    subtasks: list[Subtask] = Field(default_factory=list)
    history: list[int] = Field(default_factory=list)
