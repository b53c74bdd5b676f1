"""Integration tests for JsonTaskStore and ProjectRegistry."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from viban.errors import CorruptDataError
from viban.models import Task
from viban.repositories import JsonTaskStore, ProjectRegistry
from viban.services import ConfigService


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a temporary project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def store(project_dir: Path) -> JsonTaskStore:
    """Create a store that reads the tasks file name from config."""
    return JsonTaskStore(project_dir, ConfigService(project_dir))


def make_task(task_id: str, column: str = "todo") -> Task:
    stamp = datetime(2026, 1, 1, tzinfo=UTC)
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        description="Description",
        column=column,
        priority="high",
        created_at=stamp,
        updated_at=stamp,
    )


class TestJsonTaskStoreLoad:
    """Tests for loading the tasks file."""

    def test_load_creates_empty_file(self, store: JsonTaskStore, project_dir: Path):
        """A missing tasks file is created holding an empty array."""
        assert store.load() == []
        tasks_file = project_dir / "tasks.json"
        assert tasks_file.exists()
        assert json.loads(tasks_file.read_text()) == []

    def test_load_uses_configured_tasks_file(self, project_dir: Path):
        config_service = ConfigService(project_dir)
        config_service.update({"tasksFile": "work.json"})
        store = JsonTaskStore(project_dir, config_service)

        store.save([make_task("a")])

        assert (project_dir / "work.json").exists()
        assert not (project_dir / "tasks.json").exists()

    def test_load_without_config_service_uses_default_name(self, project_dir: Path):
        store = JsonTaskStore(project_dir)
        assert store.tasks_path == project_dir / "tasks.json"

    def test_invalid_json_raises_corrupt_data(self, store: JsonTaskStore):
        store.tasks_path.write_text("{not json")

        with pytest.raises(CorruptDataError) as exc_info:
            store.load()

        assert exc_info.value.path == store.tasks_path
        assert str(store.tasks_path) in str(exc_info.value)

    def test_non_array_raises_corrupt_data(self, store: JsonTaskStore):
        store.tasks_path.write_text('{"tasks": []}')

        with pytest.raises(CorruptDataError, match="must contain an array"):
            store.load()

    def test_non_task_entry_raises_corrupt_data(self, store: JsonTaskStore):
        store.tasks_path.write_text('[{"id": "x"}]')

        with pytest.raises(CorruptDataError, match="not a valid task"):
            store.load()

    def test_non_utf8_content_raises_corrupt_data(self, store: JsonTaskStore):
        store.tasks_path.write_bytes(b"[\xff\xfe]")

        with pytest.raises(CorruptDataError) as exc_info:
            store.load()

        assert exc_info.value.path == store.tasks_path
        assert store.tasks_path.read_bytes() == b"[\xff\xfe]"

    def test_corrupt_file_is_left_untouched(self, store: JsonTaskStore):
        """No auto-repair: the bad content stays for manual inspection."""
        store.tasks_path.write_text("[1, 2")

        with pytest.raises(CorruptDataError):
            store.load()

        assert store.tasks_path.read_text() == "[1, 2"


class TestJsonTaskStoreSave:
    """Tests for writing the tasks file."""

    def test_round_trip_preserves_order_and_fields(self, store: JsonTaskStore):
        tasks = [make_task("a"), make_task("b", "done"), make_task("c", "backlog")]

        store.save(tasks)
        loaded = store.load()

        assert loaded == tasks
        assert [t.id for t in loaded] == ["a", "b", "c"]

    def test_save_writes_indented_camel_case_json(self, store: JsonTaskStore):
        store.save([make_task("a")])

        content = store.tasks_path.read_text()
        assert '\n  {\n    "id": "a"' in content
        assert '"createdAt": "2026-01-01T00:00:00+00:00"' in content

    def test_save_leaves_no_temp_files(self, store: JsonTaskStore, project_dir: Path):
        store.save([make_task("a")])
        store.save([make_task("b")])

        leftovers = [p.name for p in project_dir.iterdir() if p.suffix == ".tmp"]
        assert leftovers == []

    def test_save_creates_missing_directories(self, tmp_path: Path):
        project = tmp_path / "nested" / "project"
        store = JsonTaskStore(project)

        store.save([make_task("a")])

        assert (project / "tasks.json").exists()

    def test_failed_write_keeps_previous_file(self, store: JsonTaskStore, monkeypatch):
        """A crash before the rename leaves the old collection in place."""
        store.save([make_task("a")])
        before = store.tasks_path.read_text()

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("viban.repositories.task_store.os.replace", fail_replace)

        with pytest.raises(OSError, match="disk full"):
            store.save([make_task("b")])

        assert store.tasks_path.read_text() == before
        assert [p for p in store.tasks_path.parent.iterdir() if p.suffix == ".tmp"] == []


class TestProjectRegistry:
    """Tests for the per-user project registry."""

    @pytest.fixture
    def registry(self, tmp_path: Path) -> ProjectRegistry:
        return ProjectRegistry(tmp_path / "home" / ".viban-global.yml")

    def test_empty_registry(self, registry: ProjectRegistry):
        assert registry.get_last_project_path() is None
        assert registry.get_recent_projects() == []

    def test_recent_projects_are_deduplicated(self, registry: ProjectRegistry):
        registry.set_last_project_path("/a")
        registry.set_last_project_path("/b")
        registry.set_last_project_path("/a")

        assert registry.get_recent_projects()[:2] == ["/a", "/b"]
        assert registry.get_recent_projects().count("/a") == 1
        assert registry.get_last_project_path() == "/a"

    def test_recent_projects_capped_at_ten(self, registry: ProjectRegistry):
        for i in range(12):
            registry.set_last_project_path(f"/p{i}")

        recent = registry.get_recent_projects()
        assert len(recent) == 10
        assert recent[0] == "/p11"

    def test_state_is_shared_through_the_file(self, registry: ProjectRegistry):
        """A fresh instance sees what another instance wrote."""
        registry.set_last_project_path("/a")

        other = ProjectRegistry(registry.registry_path)
        assert other.get_last_project_path() == "/a"
        assert "lastProjectPath: /a" in registry.registry_path.read_text()

    def test_accepts_path_objects(self, registry: ProjectRegistry, tmp_path: Path):
        registry.set_last_project_path(tmp_path)
        assert registry.get_last_project_path() == str(tmp_path)

    def test_malformed_file_treated_as_empty(self, registry: ProjectRegistry):
        registry.registry_path.parent.mkdir(parents=True)
        registry.registry_path.write_text("- just\n- a list\n")

        assert registry.get_recent_projects() == []

        registry.set_last_project_path("/a")
        assert registry.get_recent_projects() == ["/a"]

    def test_non_utf8_file_treated_as_empty(self, registry: ProjectRegistry):
        registry.registry_path.parent.mkdir(parents=True)
        registry.registry_path.write_bytes(b"lastProjectPath: \xff\n")

        assert registry.get_last_project_path() is None
        assert registry.get_recent_projects() == []

        registry.set_last_project_path("/b")
        assert registry.get_last_project_path() == "/b"
