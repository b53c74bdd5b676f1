"""JSON file storage for a project's tasks."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from ..errors import CorruptDataError
from ..models import DEFAULT_TASKS_FILE, Task

if TYPE_CHECKING:
    from ..services.config_service import ConfigService

logger = logging.getLogger(__name__)


class JsonTaskStore:
    """
    Stores the task collection as one JSON array.

    The file lives at ``<project>/<tasksFile>``, where ``tasksFile`` comes
    from the project config. Writes go to a temporary sibling first and are
    renamed into place, so a crash never leaves a half-written file.
    """

    def __init__(self, project_path: Path, config_service: ConfigService | None = None) -> None:
        """
        Initialize the store.

        Args:
            project_path: Project directory holding the tasks file
            config_service: Optional config service naming the tasks file
        """
        self.project_path = project_path
        self._config_service = config_service

    @property
    def tasks_path(self) -> Path:
        """Full path of the tasks file."""
        if self._config_service:
            filename = self._config_service.load().tasks_file
        else:
            filename = DEFAULT_TASKS_FILE
        return self.project_path / filename

    def load(self) -> list[Task]:
        """Load all tasks, creating an empty tasks file if there is none."""
        path = self.tasks_path

        if not path.exists():
            logger.debug("No tasks file at %s, creating an empty one", path)
            self._write(path, [])
            return []

        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptDataError(path, f"Invalid JSON in tasks file: {path}") from e

        if not isinstance(data, list):
            raise CorruptDataError(path, f"Tasks file must contain an array: {path}")

        tasks: list[Task] = []
        for index, record in enumerate(data):
            if not isinstance(record, dict):
                raise CorruptDataError(path, f"Entry {index} in {path} is not a task record")
            try:
                tasks.append(Task.from_record(record))
            except PydanticValidationError as e:
                raise CorruptDataError(
                    path, f"Entry {index} in {path} is not a valid task: {e.error_count()} error(s)"
                ) from e
        return tasks

    def save(self, tasks: list[Task]) -> None:
        """Write the full collection, replacing the tasks file atomically."""
        self._write(self.tasks_path, tasks)
        logger.debug("Saved %d task(s) to %s", len(tasks), self.project_path)

    def _write(self, path: Path, tasks: list[Task]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps([task.to_record() for task in tasks], indent=2, ensure_ascii=False)

        fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
