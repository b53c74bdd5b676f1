"""Data models."""

from .board import BoardState, count_by_column, group_by_column
from .board_config import DEFAULT_BOARD_NAME, DEFAULT_TASKS_FILE, BoardConfig
from .registry import RegistryData
from .task import (
    COLUMN_BACKLOG,
    COLUMN_DONE,
    COLUMN_REVIEW,
    COLUMN_TODO,
    COLUMNS,
    PRIORITIES,
    Column,
    CreateTaskInput,
    Priority,
    Task,
    UpdateTaskInput,
)

__all__ = [
    "COLUMNS",
    "COLUMN_BACKLOG",
    "COLUMN_DONE",
    "COLUMN_REVIEW",
    "COLUMN_TODO",
    "DEFAULT_BOARD_NAME",
    "DEFAULT_TASKS_FILE",
    "PRIORITIES",
    "BoardConfig",
    "BoardState",
    "Column",
    "CreateTaskInput",
    "Priority",
    "RegistryData",
    "Task",
    "UpdateTaskInput",
    "count_by_column",
    "group_by_column",
]
