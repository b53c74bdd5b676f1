"""Storage protocol for task collections."""

from typing import Protocol

from ..models import Task


class TaskStoreProtocol(Protocol):
    """Interface for task collection storage.

    The whole collection is the unit of I/O: callers load every task,
    change the list in memory and save it back.
    """

    def load(self) -> list[Task]:
        """Load the full task collection.

        Returns:
            All tasks in insertion order. An empty list when nothing
            has been stored yet.

        Raises:
            CorruptDataError: The stored data is not a list of task records.
        """
        ...

    def save(self, tasks: list[Task]) -> None:
        """Replace the stored collection with ``tasks``.

        Args:
            tasks: The complete collection to persist.
        """
        ...
