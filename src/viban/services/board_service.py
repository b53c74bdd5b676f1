"""Service for board state and the task lifecycle."""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..models import (
    COLUMN_BACKLOG,
    COLUMN_DONE,
    COLUMN_REVIEW,
    BoardConfig,
    BoardState,
    CreateTaskInput,
    Task,
    UpdateTaskInput,
    count_by_column,
    group_by_column,
)
from ..models.task import PRIORITY_MEDIUM, validate_column
from ..repositories import JsonTaskStore, ProjectRegistry, TaskStoreProtocol
from ..utils import next_timestamp, now_utc
from .config_service import ConfigService

logger = logging.getLogger(__name__)

InputModel = TypeVar("InputModel", bound=BaseModel)

# One lock per resolved project path, shared by every BoardService in the
# process, so overlapping requests cannot interleave load and save.
_locks_guard = threading.Lock()
_project_locks: dict[Path, threading.RLock] = {}


def _project_lock(project_path: Path) -> threading.RLock:
    with _locks_guard:
        lock = _project_locks.get(project_path)
        if lock is None:
            lock = _project_locks[project_path] = threading.RLock()
        return lock


def _parse_input(model: type[InputModel], data: InputModel | Mapping[str, Any]) -> InputModel:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def _find_index(tasks: list[Task], task_id: str) -> int | None:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    return None


class BoardService:
    """Task lifecycle operations for a single project.

    Every operation loads the full collection, changes it in memory and
    saves it back before returning. Failed validation never writes.
    """

    def __init__(
        self,
        repository: TaskStoreProtocol,
        config_service: ConfigService,
    ) -> None:
        self.repository = repository
        self.config_service = config_service
        self._lock = _project_lock(self.project_path.resolve())

    @classmethod
    def for_project(cls, project_path: Path | str) -> BoardService:
        """Create a service storing tasks as JSON under ``project_path``."""
        path = Path(project_path).expanduser().resolve()
        config_service = ConfigService(path)
        return cls(JsonTaskStore(path, config_service), config_service)

    @property
    def project_path(self) -> Path:
        return self.config_service.project_path

    def initialize(self) -> BoardConfig:
        """Create the project directory, config file and tasks file if missing."""
        self.project_path.mkdir(parents=True, exist_ok=True)
        with self._lock:
            config = self.config_service.load()
            self.repository.load()
        return config

    # --- Queries ---

    def get_state(self) -> BoardState:
        """Load the full board: all tasks plus configuration."""
        with self._lock:
            tasks = self.repository.load()
            config = self.config_service.load()
        return BoardState(tasks=tasks, config=config)

    def get_tasks(self, column: str | None = None) -> list[Task]:
        """Get all tasks, or only those in ``column``."""
        if column is not None:
            validate_column(column)
        with self._lock:
            tasks = self.repository.load()
        if column is None:
            return tasks
        return [t for t in tasks if t.column == column]

    def get_tasks_by_column(self) -> dict[str, list[Task]]:
        """Get tasks grouped into every column."""
        with self._lock:
            tasks = self.repository.load()
        return group_by_column(tasks)

    def get_task(self, task_id: str) -> Task | None:
        with self._lock:
            tasks = self.repository.load()
        index = _find_index(tasks, task_id)
        return tasks[index] if index is not None else None

    def get_stats(self) -> dict[str, int]:
        """Count tasks per column; all columns are always present."""
        with self._lock:
            tasks = self.repository.load()
        return count_by_column(tasks)

    def get_summary(self) -> dict[str, Any]:
        """Board name, per-column counts and the total."""
        state = self.get_state()
        stats = count_by_column(state.tasks)
        return {
            "boardName": state.config.board_name,
            "stats": stats,
            "total": sum(stats.values()),
        }

    # --- Mutations ---

    def create_task(self, task_input: CreateTaskInput | Mapping[str, Any]) -> Task:
        """Create a task at the end of the collection.

        Raises:
            ValidationError: Empty title or unknown column/priority.
        """
        data = _parse_input(CreateTaskInput, task_input)
        now = now_utc()
        task = Task(
            id=str(uuid.uuid4()),
            title=data.title,
            description=data.description,
            column=data.column or COLUMN_BACKLOG,
            priority=data.priority or PRIORITY_MEDIUM,
            created_at=now,
            updated_at=now,
        )

        with self._lock:
            tasks = self.repository.load()
            tasks.append(task)
            self.repository.save(tasks)

        logger.info("Task created: %s (column=%s, priority=%s)", task.id, task.column, task.priority)
        return task

    def update_task(self, task_id: str, updates: UpdateTaskInput | Mapping[str, Any]) -> Task | None:
        """Change title, description or priority of a task.

        Returns:
            The updated task, or None if no task has ``task_id``.
        """
        changes = _parse_input(UpdateTaskInput, updates).changes()
        task = self._apply(task_id, changes)
        if task is not None:
            logger.info("Task updated: %s (%s)", task_id, ", ".join(sorted(changes)) or "no fields")
        return task

    def move_task(self, task_id: str, to_column: str) -> Task | None:
        """
        Move a task to any column.

        Every column is reachable from every other; there is no enforced
        workflow order.

        Raises:
            ValidationError: ``to_column`` is not a board column.
        """
        validate_column(to_column)
        task = self._apply(task_id, {"column": to_column})
        if task is not None:
            logger.info("Task moved: %s -> %s", task_id, to_column)
        return task

    def move_to_review(self, task_id: str) -> Task | None:
        """Move a task to review, e.g. when an agent finished working on it."""
        return self.move_task(task_id, COLUMN_REVIEW)

    def complete_task(self, task_id: str) -> Task | None:
        return self.move_task(task_id, COLUMN_DONE)

    def update_config(self, updates: Mapping[str, Any]) -> BoardConfig:
        """Change board settings without interleaving with task writes.

        Raises:
            ValidationError: An unknown or read-only field, or an invalid value.
        """
        with self._lock:
            return self.config_service.update(updates)

    def delete_task(self, task_id: str) -> bool:
        """Delete a task. Returns False if no task has ``task_id``."""
        with self._lock:
            tasks = self.repository.load()
            index = _find_index(tasks, task_id)
            if index is None:
                logger.debug("delete_task: task not found: %s", task_id)
                return False
            del tasks[index]
            self.repository.save(tasks)

        logger.info("Task deleted: %s", task_id)
        return True

    def _apply(self, task_id: str, changes: dict[str, Any]) -> Task | None:
        """Apply validated field changes and refresh updatedAt."""
        with self._lock:
            tasks = self.repository.load()
            index = _find_index(tasks, task_id)
            if index is None:
                logger.debug("Task not found: %s", task_id)
                return None

            current = tasks[index]
            updated = current.model_copy(
                update={**changes, "updated_at": next_timestamp(current.updated_at)}
            )
            tasks[index] = updated
            self.repository.save(tasks)
        return updated


def open_project(project_path: Path | str, registry: ProjectRegistry | None = None) -> BoardService:
    """Bind a board to ``project_path``, initializing a new project directory.

    When ``registry`` is given the project is also recorded as last used.
    """
    board = BoardService.for_project(project_path)
    config = board.initialize()
    if registry is not None:
        registry.set_last_project_path(board.project_path)
    logger.info("Project opened: %s (%s)", board.project_path, config.board_name)
    return board
