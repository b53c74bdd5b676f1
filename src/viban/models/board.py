"""Board state models."""

from typing import Any

from pydantic import BaseModel, Field

from .board_config import BoardConfig
from .task import COLUMNS, Task


class BoardState(BaseModel):
    """Tasks and configuration of one project, read at a point in time."""

    tasks: list[Task] = Field(default_factory=list)
    config: BoardConfig

    def to_document(self) -> dict[str, Any]:
        return {
            "tasks": [task.to_record() for task in self.tasks],
            "config": self.config.to_document(),
        }


def group_by_column(tasks: list[Task]) -> dict[str, list[Task]]:
    """Partition tasks into every column, keeping their relative order."""
    grouped: dict[str, list[Task]] = {column: [] for column in COLUMNS}
    for task in tasks:
        grouped[task.column].append(task)
    return grouped


def count_by_column(tasks: list[Task]) -> dict[str, int]:
    """Number of tasks per column; every column is present."""
    return {column: len(items) for column, items in group_by_column(tasks).items()}
