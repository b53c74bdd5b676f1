"""Service layer for business logic."""

from .board_service import BoardService, open_project
from .config_service import ConfigService

__all__ = [
    "BoardService",
    "ConfigService",
    "open_project",
]
