"""Adapters exposing the board over HTTP and MCP."""

from .api import create_app
from .mcp_server import create_mcp_server, run_mcp_server

__all__ = [
    "create_app",
    "create_mcp_server",
    "run_mcp_server",
]
