"""MCP server exposing board operations as tools for AI assistants."""

import logging
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from .. import __version__
from ..models import Column, Priority
from ..services import BoardService
from .tools import BoardTools

logger = logging.getLogger(__name__)

INSTRUCTIONS = """\
Kanban board for the current project. Tasks move through four columns:
backlog, todo, review and done. Pick up work from todo, and call
move_to_review once you have finished a task so a human can check it.
"""

TaskId = Annotated[str, Field(description="Task ID")]


def create_mcp_server(board: BoardService) -> FastMCP:
    """Create the MCP server for one board."""
    tools = BoardTools(board)
    server = FastMCP(name="viban", instructions=INSTRUCTIONS)

    # --- Tools ---

    @server.tool(
        name="get_tasks",
        description="Get all tasks from the Kanban board, optionally filtered by column",
    )
    def get_tasks(
        column: Annotated[
            Optional[Column],
            Field(description="Filter by column: backlog, todo, review, or done"),
        ] = None,
    ) -> str:
        return tools.get_tasks(column)

    @server.tool(
        name="get_todo_tasks",
        description="Get all tasks in the TODO column - these are tasks ready to be worked on",
    )
    def get_todo_tasks() -> str:
        return tools.get_todo_tasks()

    @server.tool(name="create_task", description="Create a new task on the Kanban board")
    def create_task(
        title: Annotated[str, Field(description="Task title")],
        description: Annotated[Optional[str], Field(description="Task description")] = None,
        column: Annotated[
            Optional[Column], Field(description="Initial column (default: backlog)")
        ] = None,
        priority: Annotated[
            Optional[Priority], Field(description="Task priority (default: medium)")
        ] = None,
    ) -> str:
        return tools.create_task(title, description, column, priority)

    @server.tool(name="update_task", description="Update an existing task's properties")
    def update_task(
        id: TaskId,
        title: Annotated[Optional[str], Field(description="New title")] = None,
        description: Annotated[Optional[str], Field(description="New description")] = None,
        priority: Annotated[Optional[Priority], Field(description="New priority")] = None,
    ) -> str:
        return tools.update_task(id, title, description, priority)

    @server.tool(name="move_task", description="Move a task to a different column")
    def move_task(
        id: TaskId,
        column: Annotated[Column, Field(description="Target column")],
    ) -> str:
        return tools.move_task(id, column)

    @server.tool(
        name="move_to_review",
        description="Move a task to REVIEW - use this when you have completed work on a task",
    )
    def move_to_review(id: Annotated[str, Field(description="Task ID to move to review")]) -> str:
        return tools.move_to_review(id)

    @server.tool(name="complete_task", description="Mark a task as done - move it to the DONE column")
    def complete_task(id: Annotated[str, Field(description="Task ID to complete")]) -> str:
        return tools.complete_task(id)

    @server.tool(name="delete_task", description="Delete a task from the board")
    def delete_task(id: Annotated[str, Field(description="Task ID to delete")]) -> str:
        return tools.delete_task(id)

    @server.tool(
        name="get_board_stats",
        description="Get statistics about the Kanban board (task counts per column)",
    )
    def get_board_stats() -> str:
        return tools.get_board_stats()

    # --- Resources ---

    @server.resource(
        "kanban://board",
        name="board",
        description="Current state of the Kanban board including all tasks and configuration",
        mime_type="application/json",
    )
    def board_resource() -> str:
        return tools.board_document()

    @server.resource(
        "kanban://tasks/todo",
        name="todo_tasks",
        description="Current TODO tasks that need to be worked on",
        mime_type="application/json",
    )
    def todo_resource() -> str:
        return tools.todo_document()

    logger.debug("MCP server %s created for %s", __version__, board.project_path)
    return server


def run_mcp_server(board: BoardService) -> None:
    """Serve the board over stdio until the client disconnects."""
    create_mcp_server(board).run(transport="stdio")
