"""viban - a file-backed Kanban board with a REST API and MCP tools."""

__version__ = "1.0.0"
