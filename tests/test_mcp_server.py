"""Tests for the MCP tool handlers and server registration."""

import asyncio
import json
from pathlib import Path

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from viban.errors import ValidationError
from viban.server import create_mcp_server
from viban.server.tools import BoardTools
from viban.services import BoardService


@pytest.fixture
def board(tmp_path: Path) -> BoardService:
    return BoardService.for_project(tmp_path / "project")


@pytest.fixture
def tools(board: BoardService) -> BoardTools:
    return BoardTools(board)


def payload(text: str, prefix: str) -> dict:
    """Parse the JSON document following a message prefix."""
    assert text.startswith(prefix)
    return json.loads(text[len(prefix) :])


class TestBoardTools:
    """Tests for the text-returning tool handlers."""

    def test_create_task(self, tools: BoardTools, board: BoardService):
        text = tools.create_task("Write docs", description="README", priority="high")

        task = payload(text, "Created task: ")
        assert task["title"] == "Write docs"
        assert task["column"] == "backlog"
        assert task["priority"] == "high"
        assert board.get_task(task["id"]) is not None

    def test_get_tasks(self, tools: BoardTools):
        tools.create_task("a", column="todo")
        tools.create_task("b")

        assert [t["title"] for t in json.loads(tools.get_tasks())] == ["a", "b"]
        assert [t["title"] for t in json.loads(tools.get_tasks("todo"))] == ["a"]

    def test_get_tasks_empty_board(self, tools: BoardTools):
        assert json.loads(tools.get_tasks()) == []

    def test_get_todo_tasks(self, tools: BoardTools):
        tools.create_task("ready", column="todo")
        tools.create_task("later")

        assert [t["title"] for t in json.loads(tools.get_todo_tasks())] == ["ready"]

    def test_update_task(self, tools: BoardTools):
        task = payload(tools.create_task("Old"), "Created task: ")

        updated = payload(tools.update_task(task["id"], title="New"), "Updated task: ")

        assert updated["title"] == "New"
        assert updated["priority"] == "medium"

    def test_update_task_keeps_omitted_description(self, tools: BoardTools):
        task = payload(tools.create_task("x", description="notes"), "Created task: ")

        updated = payload(tools.update_task(task["id"], priority="high"), "Updated task: ")

        assert updated["description"] == "notes"
        assert updated["priority"] == "high"

    def test_move_task(self, tools: BoardTools):
        task = payload(tools.create_task("x"), "Created task: ")

        moved = payload(tools.move_task(task["id"], "todo"), "Moved task to todo: ")

        assert moved["column"] == "todo"

    def test_agent_workflow(self, tools: BoardTools):
        """An assistant picks up a todo task, hands it to review, then it is completed."""
        task = payload(tools.create_task("Implement login", column="todo"), "Created task: ")

        reviewed = payload(tools.move_to_review(task["id"]), "Task moved to review: ")
        assert reviewed["column"] == "review"

        done = payload(tools.complete_task(task["id"]), "Task completed: ")
        assert done["column"] == "done"

        assert tools.delete_task(task["id"]) == f"Task {task['id']} deleted successfully"
        assert json.loads(tools.get_tasks()) == []

    @pytest.mark.parametrize(
        "call",
        [
            lambda t: t.update_task("missing", title="x"),
            lambda t: t.move_task("missing", "todo"),
            lambda t: t.move_to_review("missing"),
            lambda t: t.complete_task("missing"),
            lambda t: t.delete_task("missing"),
        ],
    )
    def test_unknown_task_raises_tool_error(self, tools: BoardTools, call):
        with pytest.raises(ToolError, match="Task with ID missing not found"):
            call(tools)

    def test_invalid_column_raises(self, tools: BoardTools):
        task = payload(tools.create_task("x"), "Created task: ")

        with pytest.raises(ValidationError, match="Invalid column"):
            tools.move_task(task["id"], "archived")

    def test_board_stats(self, tools: BoardTools):
        tools.create_task("a", column="todo")
        tools.create_task("b", column="done")

        stats = json.loads(tools.get_board_stats())

        assert stats == {
            "boardName": "Kanban Board",
            "stats": {"backlog": 0, "todo": 1, "review": 0, "done": 1},
            "total": 2,
        }

    def test_board_document(self, tools: BoardTools):
        tools.create_task("a")

        document = json.loads(tools.board_document())

        assert document["tasks"][0]["title"] == "a"
        assert document["config"]["boardName"] == "Kanban Board"


class TestMcpServer:
    """Tests for tool and resource registration."""

    def test_registers_tools(self, board: BoardService):
        server = create_mcp_server(board)

        names = {tool.name for tool in asyncio.run(server.list_tools())}

        assert names == {
            "get_tasks",
            "get_todo_tasks",
            "create_task",
            "update_task",
            "move_task",
            "move_to_review",
            "complete_task",
            "delete_task",
            "get_board_stats",
        }

    def test_tool_schema_lists_columns(self, board: BoardService):
        server = create_mcp_server(board)
        tools = {tool.name: tool for tool in asyncio.run(server.list_tools())}

        schema = tools["move_task"].inputSchema

        assert set(schema["required"]) == {"id", "column"}
        assert "review" in json.dumps(schema["properties"]["column"])

    def test_registers_resources(self, board: BoardService):
        server = create_mcp_server(board)

        uris = {str(resource.uri).rstrip("/") for resource in asyncio.run(server.list_resources())}

        assert uris == {"kanban://board", "kanban://tasks/todo"}
