"""Repository layer for data access."""

from .protocol import TaskStoreProtocol
from .registry import ProjectRegistry
from .task_store import JsonTaskStore

__all__ = [
    "JsonTaskStore",
    "ProjectRegistry",
    "TaskStoreProtocol",
]
