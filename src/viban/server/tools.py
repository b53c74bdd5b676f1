"""Board operations as text-returning tool handlers for AI assistants."""

from __future__ import annotations

import json
from typing import Any

from mcp.server.fastmcp.exceptions import ToolError

from ..models import COLUMN_TODO, Task
from ..services import BoardService


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _dump_task(task: Task) -> str:
    return to_json(task.to_record())


def _not_found(task_id: str) -> ToolError:
    return ToolError(f"Task with ID {task_id} not found")


class BoardTools:
    """Tool handlers bound to one board.

    Each handler returns the text payload sent back to the assistant and
    raises ToolError when the task id does not resolve.
    """

    def __init__(self, board: BoardService) -> None:
        self.board = board

    def get_tasks(self, column: str | None = None) -> str:
        return to_json([task.to_record() for task in self.board.get_tasks(column)])

    def get_todo_tasks(self) -> str:
        return self.get_tasks(COLUMN_TODO)

    def create_task(
        self,
        title: str,
        description: str | None = None,
        column: str | None = None,
        priority: str | None = None,
    ) -> str:
        task = self.board.create_task(
            {"title": title, "description": description, "column": column, "priority": priority}
        )
        return f"Created task: {_dump_task(task)}"

    def update_task(
        self,
        task_id: str,
        title: str | None = None,
        description: str | None = None,
        priority: str | None = None,
    ) -> str:
        fields = {"title": title, "description": description, "priority": priority}
        task = self.board.update_task(
            task_id, {name: value for name, value in fields.items() if value is not None}
        )
        if task is None:
            raise _not_found(task_id)
        return f"Updated task: {_dump_task(task)}"

    def move_task(self, task_id: str, column: str) -> str:
        task = self.board.move_task(task_id, column)
        if task is None:
            raise _not_found(task_id)
        return f"Moved task to {column}: {_dump_task(task)}"

    def move_to_review(self, task_id: str) -> str:
        task = self.board.move_to_review(task_id)
        if task is None:
            raise _not_found(task_id)
        return f"Task moved to review: {_dump_task(task)}"

    def complete_task(self, task_id: str) -> str:
        task = self.board.complete_task(task_id)
        if task is None:
            raise _not_found(task_id)
        return f"Task completed: {_dump_task(task)}"

    def delete_task(self, task_id: str) -> str:
        if not self.board.delete_task(task_id):
            raise _not_found(task_id)
        return f"Task {task_id} deleted successfully"

    def get_board_stats(self) -> str:
        return to_json(self.board.get_summary())

    # --- Resources ---

    def board_document(self) -> str:
        """Full board state as JSON."""
        return to_json(self.board.get_state().to_document())

    def todo_document(self) -> str:
        """Tasks in the todo column as JSON."""
        return self.get_todo_tasks()
