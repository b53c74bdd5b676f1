"""FastAPI web server exposing the board as a JSON API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..errors import ConfigParseError, CorruptDataError, ValidationError
from ..repositories import ProjectRegistry
from ..services import BoardService, open_project

logger = logging.getLogger(__name__)

NO_PROJECT_MESSAGE = "No project selected. POST to /api/project/select first."


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def resolve_asset(static_dir: Path, asset_path: str) -> Path:
    """Map a request path onto a file under ``static_dir``.

    Raises:
        HTTPException: 403 when the path escapes ``static_dir``.
    """
    root = static_dir.resolve()
    target = (root / (asset_path or "index.html")).resolve()
    if not target.is_relative_to(root):
        raise HTTPException(status_code=403, detail="Forbidden")
    return target


def create_app(
    project_path: Optional[Path | str] = None,
    registry: Optional[ProjectRegistry] = None,
    static_dir: Optional[Path] = None,
    enable_cors: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        project_path: Project to bind at startup. Without one, clients must
            select a project before using the board routes.
        registry: Project registry to record selections in.
        static_dir: Directory of web UI assets served outside ``/api``.
        enable_cors: Whether to allow cross-origin requests.

    Returns:
        Configured FastAPI app.
    """
    app = FastAPI(
        title="viban",
        description="Kanban board API",
        version=__version__,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type"],
        )

    app.state.registry = registry or ProjectRegistry()
    app.state.static_dir = static_dir
    app.state.board = None

    def select_project(path: Path | str) -> BoardService:
        app.state.board = open_project(path, app.state.registry)
        return app.state.board

    if project_path is not None:
        select_project(project_path)

    def require_board() -> BoardService:
        board: BoardService | None = app.state.board
        if board is None:
            raise HTTPException(status_code=400, detail=NO_PROJECT_MESSAGE)
        return board

    # --- Error mapping ---

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            return _error("Invalid JSON", 400)
        return _error("Request body must be a JSON object", 400)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(str(exc), 400)

    @app.exception_handler(CorruptDataError)
    @app.exception_handler(ConfigParseError)
    async def data_error(request: Request, exc: CorruptDataError | ConfigParseError) -> JSONResponse:
        logger.error("Unreadable project file %s: %s", exc.path, exc)
        return _error(str(exc), 500)

    @app.exception_handler(OSError)
    async def io_error(request: Request, exc: OSError) -> JSONResponse:
        logger.error("I/O error handling %s %s: %s", request.method, request.url.path, exc)
        return _error(f"I/O error: {exc}", 500)

    # --- Projects ---

    @app.get("/api/projects")
    def list_projects() -> dict[str, Any]:
        board: BoardService | None = app.state.board
        return {
            "current": str(board.project_path) if board else None,
            "recent": app.state.registry.get_recent_projects(),
        }

    @app.post("/api/project/select")
    def select(body: Optional[dict[str, Any]] = Body(default=None)) -> dict[str, Any]:
        path = (body or {}).get("path")
        if not path or not isinstance(path, str):
            raise HTTPException(status_code=400, detail="Path required")
        board = select_project(path)
        return {
            "success": True,
            "project": str(board.project_path),
            "config": board.config_service.load().to_document(),
        }

    @app.get("/api/project/current")
    def current_project() -> dict[str, Any]:
        board: BoardService | None = app.state.board
        if board is None:
            return {"project": None}
        return {
            "project": str(board.project_path),
            "config": board.config_service.load().to_document(),
        }

    # --- Board ---

    @app.get("/api/board")
    def get_board(board: BoardService = Depends(require_board)) -> dict[str, Any]:
        return board.get_state().to_document()

    @app.get("/api/stats")
    def get_stats(board: BoardService = Depends(require_board)) -> dict[str, int]:
        return board.get_stats()

    # --- Tasks ---

    @app.get("/api/tasks")
    def list_tasks(
        column: Optional[str] = Query(default=None),
        board: BoardService = Depends(require_board),
    ) -> list[dict[str, Any]]:
        return [task.to_record() for task in board.get_tasks(column or None)]

    @app.post("/api/tasks", status_code=201)
    def create_task(
        body: Optional[dict[str, Any]] = Body(default=None),
        board: BoardService = Depends(require_board),
    ) -> dict[str, Any]:
        body = body or {}
        if not body.get("title"):
            raise HTTPException(status_code=400, detail="Title required")
        return board.create_task(body).to_record()

    @app.get("/api/tasks/{task_id}")
    def get_task(task_id: str, board: BoardService = Depends(require_board)) -> dict[str, Any]:
        task = board.get_task(task_id)
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return task.to_record()

    @app.put("/api/tasks/{task_id}")
    def update_task(
        task_id: str,
        body: Optional[dict[str, Any]] = Body(default=None),
        board: BoardService = Depends(require_board),
    ) -> dict[str, Any]:
        task = board.update_task(task_id, body or {})
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return task.to_record()

    @app.delete("/api/tasks/{task_id}")
    def delete_task(task_id: str, board: BoardService = Depends(require_board)) -> dict[str, Any]:
        if not board.delete_task(task_id):
            raise HTTPException(status_code=404, detail="Task not found")
        return {"success": True}

    @app.post("/api/tasks/{task_id}/move")
    def move_task(
        task_id: str,
        body: Optional[dict[str, Any]] = Body(default=None),
        board: BoardService = Depends(require_board),
    ) -> dict[str, Any]:
        column = (body or {}).get("column")
        if not column:
            raise HTTPException(status_code=400, detail="Column required")
        if not isinstance(column, str):
            raise ValidationError(f"Invalid column: {column}")
        task = board.move_task(task_id, column)
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return task.to_record()

    # --- Config ---

    @app.get("/api/config")
    def get_config(board: BoardService = Depends(require_board)) -> dict[str, Any]:
        return board.config_service.load().to_document()

    @app.put("/api/config")
    def update_config(
        body: Optional[dict[str, Any]] = Body(default=None),
        board: BoardService = Depends(require_board),
    ) -> dict[str, Any]:
        return board.update_config(body or {}).to_document()

    @app.api_route(
        "/api/{rest:path}",
        methods=["GET", "POST", "PUT", "DELETE"],
        include_in_schema=False,
    )
    def api_not_found(rest: str) -> None:
        raise HTTPException(status_code=404, detail="Not found")

    # --- Static assets ---

    @app.get("/{asset_path:path}", include_in_schema=False)
    def static_asset(asset_path: str) -> FileResponse:
        static_root: Path | None = app.state.static_dir
        if static_root is None:
            raise HTTPException(status_code=404, detail="Not found")

        target = resolve_asset(static_root, asset_path)
        if target.is_file():
            return FileResponse(target)

        # Single-page app fallback
        index = static_root / "index.html"
        if index.is_file():
            return FileResponse(index)
        raise HTTPException(status_code=404, detail="Not found")

    return app
