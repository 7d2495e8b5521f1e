"""Tests for JSON persistence, settings and registry construction."""

import json
from datetime import datetime, timedelta

import pytest

from tracker_mcp import (
    Epic,
    FileBackedTaskRegistry,
    PersistenceError,
    RegistrySnapshot,
    Subtask,
    Task,
    TaskRegistry,
    TaskStatus,
    TimeConflictError,
)
from tracker_mcp import server
from tracker_mcp.config import Settings
from tracker_mcp.storage import load_snapshot, save_snapshot

T0 = datetime(2025, 3, 1, 9, 0)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "tracker.json"


# ============================================================================
# Snapshot Files
# ============================================================================


class TestSnapshotFiles:
    """Tests for reading and writing snapshot files."""

    def test_save_and_load(self, data_file):
        snapshot = RegistrySnapshot(
            tasks=[Task(id=1, title="Standup", start_time=T0, duration=timedelta(minutes=15))],
            epics=[Epic(id=2, title="Release", subtask_ids=[3])],
            subtasks=[Subtask(id=3, epic_id=2, title="Deploy", status=TaskStatus.DONE)],
            history=[3, 1],
        )
        save_snapshot(data_file, snapshot)
        loaded = load_snapshot(data_file)
        assert loaded.tasks[0].title == "Standup"
        assert loaded.tasks[0].duration == timedelta(minutes=15)
        assert loaded.subtasks[0].status == TaskStatus.DONE
        assert loaded.history == [3, 1]

    def test_save_leaves_no_temp_file(self, data_file):
        save_snapshot(data_file, RegistrySnapshot())
        assert [p.name for p in data_file.parent.iterdir()] == ["tracker.json"]

    def test_save_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "tracker.json"
        save_snapshot(path, RegistrySnapshot())
        assert path.exists()

    def test_empty_file_is_empty_snapshot(self, data_file):
        data_file.write_text("")
        assert load_snapshot(data_file) == RegistrySnapshot()

    def test_invalid_json(self, data_file):
        data_file.write_text("{not json")
        with pytest.raises(PersistenceError):
            load_snapshot(data_file)

    def test_invalid_item(self, data_file):
        data_file.write_text(json.dumps({"tasks": [{"id": 1, "type": "TASK", "title": "x", "status": "LATER"}]}))
        with pytest.raises(PersistenceError) as exc_info:
            load_snapshot(data_file)
        assert exc_info.value.code == "persistence"

    def test_missing_file(self, data_file):
        with pytest.raises(PersistenceError):
            load_snapshot(data_file)


# ============================================================================
# File-Backed Registry
# ============================================================================


class TestFileBackedTaskRegistry:
    """Tests for the registry that mirrors itself to disk."""

    def test_starts_empty_without_file(self, data_file):
        registry = FileBackedTaskRegistry(data_file)
        assert registry.path == data_file
        assert registry.get_all_tasks() == []
        assert not data_file.exists()

    def test_saves_after_each_change(self, data_file):
        registry = FileBackedTaskRegistry(data_file)
        registry.add_task(Task(title="Standup"))
        data = json.loads(data_file.read_text())
        assert [t["title"] for t in data["tasks"]] == ["Standup"]

    def test_reload_restores_everything(self, data_file):
        registry = FileBackedTaskRegistry(data_file)
        task_id = registry.add_task(Task(title="Standup", start_time=T0, duration=timedelta(minutes=15)))
        epic_id = registry.add_epic(Epic(title="Release"))
        sid = registry.add_subtask(
            Subtask(
                epic_id=epic_id,
                title="Deploy",
                status=TaskStatus.DONE,
                start_time=T0 + timedelta(hours=1),
                duration=timedelta(minutes=30),
            )
        )
        registry.get_subtask(sid)
        registry.get_task(task_id)

        reloaded = FileBackedTaskRegistry(data_file)
        assert [t.title for t in reloaded.get_all_tasks()] == ["Standup"]
        epic = reloaded.get_all_epics()[0]
        assert epic.subtask_ids == [sid]
        assert epic.status == TaskStatus.DONE
        assert epic.end_time == T0 + timedelta(minutes=90)
        assert [i.id for i in reloaded.get_prioritized_tasks()] == [task_id, sid]
        assert [i.id for i in reloaded.get_history()] == [sid, task_id]

    def test_reload_resumes_ids(self, data_file):
        registry = FileBackedTaskRegistry(data_file)
        for i in range(3):
            registry.add_task(Task(title=f"t{i}"))

        reloaded = FileBackedTaskRegistry(data_file)
        assert reloaded.add_task(Task(title="next")) == 4

    def test_history_is_persisted(self, data_file):
        """Viewing an item is a change worth saving."""
        registry = FileBackedTaskRegistry(data_file)
        task_id = registry.add_task(Task(title="Standup"))
        registry.get_task(task_id)
        assert json.loads(data_file.read_text())["history"] == [task_id]

    def test_failed_change_not_saved(self, data_file):
        registry = FileBackedTaskRegistry(data_file)
        registry.add_task(Task(title="T1", start_time=T0, duration=timedelta(hours=1)))
        before = data_file.read_text()
        with pytest.raises(TimeConflictError):
            registry.add_task(Task(title="T2", start_time=T0, duration=timedelta(hours=1)))
        assert data_file.read_text() == before

    def test_inconsistent_file(self, data_file):
        """A subtask whose epic is gone makes the file unusable."""
        snapshot = RegistrySnapshot(subtasks=[Subtask(id=2, epic_id=1, title="orphan")])
        save_snapshot(data_file, snapshot)
        with pytest.raises(PersistenceError) as exc_info:
            FileBackedTaskRegistry(data_file)
        assert exc_info.value.details["epic_id"] == 1

    def test_corrupt_file(self, data_file):
        data_file.write_text("[]")
        with pytest.raises(PersistenceError):
            FileBackedTaskRegistry(data_file)

    def test_self_owned_subtask_in_file(self, data_file):
        """A subtask claiming itself as epic is reported as a persistence error."""
        data = {
            "epics": [{"type": "EPIC", "id": 1, "title": "E"}],
            "subtasks": [{"type": "SUBTASK", "id": 1, "epic_id": 1, "title": "loop"}],
        }
        data_file.write_text(json.dumps(data))
        with pytest.raises(PersistenceError) as exc_info:
            FileBackedTaskRegistry(data_file)
        assert exc_info.value.details["subtask_id"] == 1
        with pytest.raises(PersistenceError):
            load_snapshot(data_file)

    def test_custom_history_limit(self, data_file):
        registry = FileBackedTaskRegistry(data_file, history_limit=1)
        a = registry.add_task(Task(title="a"))
        b = registry.add_task(Task(title="b"))
        registry.get_task(a)
        registry.get_task(b)
        assert json.loads(data_file.read_text())["history"] == [b]


# ============================================================================
# Settings
# ============================================================================


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("TRACKER_SERVER_NAME", "TRACKER_LOG_LEVEL", "TRACKER_HISTORY_LIMIT", "TRACKER_DATA_FILE"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.server_name == "tracker_mcp"
        assert settings.log_level == "INFO"
        assert settings.history_limit == 10
        assert settings.data_file is None

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TRACKER_HISTORY_LIMIT", "25")
        monkeypatch.setenv("TRACKER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TRACKER_DATA_FILE", str(tmp_path / "data.json"))
        settings = Settings(_env_file=None)
        assert settings.history_limit == 25
        assert settings.log_level == "DEBUG"
        assert settings.data_file == tmp_path / "data.json"

    def test_history_limit_bounds(self, monkeypatch):
        monkeypatch.setenv("TRACKER_HISTORY_LIMIT", "0")
        with pytest.raises(ValueError):
            Settings(_env_file=None)


class TestCreateRegistry:
    """Tests for building the process-wide registry from settings."""

    def test_in_memory_by_default(self, monkeypatch):
        monkeypatch.setattr(server.settings, "data_file", None)
        registry = server.create_registry()
        assert type(registry) is TaskRegistry

    def test_file_backed_when_configured(self, monkeypatch, data_file):
        monkeypatch.setattr(server.settings, "data_file", data_file)
        monkeypatch.setattr(server.settings, "history_limit", 3)
        registry = server.create_registry()
        assert isinstance(registry, FileBackedTaskRegistry)
        assert registry.path == data_file

    def test_get_registry_is_lazy_and_shared(self, monkeypatch):
        monkeypatch.setattr(server.settings, "data_file", None)
        server.set_registry(None)
        try:
            first = server.get_registry()
            assert server.get_registry() is first
        finally:
            server.set_registry(None)
