"""JSON file persistence for the task registry."""

from __future__ import annotations

import os
from pathlib import Path

import structlog
from pydantic import ValidationError

from tracker_mcp.core.history import DEFAULT_HISTORY_LIMIT
from tracker_mcp.core.registry import TaskRegistry
from tracker_mcp.errors import InvalidReferenceError, PersistenceError
from tracker_mcp.models.snapshot import RegistrySnapshot

log = structlog.get_logger()


def load_snapshot(path: Path) -> RegistrySnapshot:
    """Read and validate a snapshot file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Failed to read {path}: {e}", details={"path": str(path)}) from e

    if not raw.strip():
        return RegistrySnapshot()

    try:
        return RegistrySnapshot.model_validate_json(raw)
    except ValidationError as e:
        raise PersistenceError(
            f"Invalid snapshot in {path}: {e.error_count()} error(s)",
            details={"path": str(path), "errors": e.errors(include_url=False)},
        ) from e
    except InvalidReferenceError as e:
        raise PersistenceError(
            f"Inconsistent snapshot in {path}: {e.message}",
            details={"path": str(path), **e.details},
        ) from e


def save_snapshot(path: Path, snapshot: RegistrySnapshot) -> None:
    """Write a snapshot atomically: temporary file first, then replace."""
    tmp_path = path.with_name(f"{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as e:
        raise PersistenceError(f"Failed to write {path}: {e}", details={"path": str(path)}) from e


class FileBackedTaskRegistry(TaskRegistry):
    """
    A TaskRegistry that mirrors its full state to a JSON file.

    The file is loaded on construction when it exists and rewritten after
    every successful change, history included.
    """

    def __init__(self, path: str | Path, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        super().__init__(history_limit=history_limit)
        self._path = Path(path)
        if self._path.exists():
            snapshot = load_snapshot(self._path)
            try:
                self.restore(snapshot)
            except InvalidReferenceError as e:
                raise PersistenceError(
                    f"Inconsistent snapshot in {self._path}: {e.message}",
                    details={"path": str(self._path), **e.details},
                ) from e
        log.info("File-backed registry ready", path=str(self._path))

    @property
    def path(self) -> Path:
        return self._path

    def save(self) -> None:
        save_snapshot(self._path, self.snapshot())

    def _after_change(self) -> None:
        self.save()
