"""Startup for the web and MCP modes."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..config import Settings
from ..errors import VibanError
from ..repositories import ProjectRegistry
from ..services import open_project
from . import output

logger = logging.getLogger(__name__)


def resolve_mcp_project(settings: Settings, registry: ProjectRegistry) -> Path:
    """Pick the MCP project: explicit setting, then last used, then cwd."""
    if settings.project_path is not None:
        return settings.project_path.expanduser().resolve()
    last = registry.get_last_project_path()
    if last:
        return Path(last).expanduser().resolve()
    return Path.cwd()


def run_web(settings: Settings, registry: ProjectRegistry) -> int:
    """Serve the JSON API (and web UI assets) until interrupted."""
    import uvicorn

    from ..server import create_app

    project = settings.project_path or registry.get_last_project_path()

    output.header("viban - Kanban Board")
    try:
        app = create_app(project_path=project, registry=registry, static_dir=settings.static_dir)
    except (VibanError, OSError) as e:
        output.error(f"Cannot open project {project}: {e}")
        return 1

    if app.state.board is not None:
        output.info(f"Project: {app.state.board.project_path}")
    else:
        output.info("No project selected - POST /api/project/select to choose one")
    output.success(f"Listening on http://{settings.host}:{settings.port}")

    uvicorn.run(app, host=settings.host, port=settings.port, log_level="warning")
    return 0


def run_mcp(settings: Settings, registry: ProjectRegistry) -> int:
    """Serve MCP over stdio. Human-readable output goes to stderr only."""
    from ..server import run_mcp_server

    project_path = resolve_mcp_project(settings, registry)
    try:
        board = open_project(project_path)
        config = board.config_service.load()
    except (VibanError, OSError) as e:
        output.error(f"Cannot open project {project_path}: {e}")
        return 1

    output.info("viban MCP server starting...", stream=sys.stderr)
    output.info(f"Project: {board.project_path}", stream=sys.stderr)
    output.info(f"Board: {config.board_name}", stream=sys.stderr)
    logger.info("Serving MCP for %s", board.project_path)

    run_mcp_server(board)
    return 0
