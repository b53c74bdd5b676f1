"""Per-user registry of known project paths."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..models import RegistryData

logger = logging.getLogger(__name__)


class ProjectRegistry:
    """
    Tracks the last used project and recently used projects.

    Stored once per user, independent of any project directory. Nothing is
    cached: every call reads the file, and every change writes it back.
    """

    REGISTRY_FILE = ".viban-global.yml"

    def __init__(self, registry_path: Path | None = None) -> None:
        """
        Initialize the registry.

        Args:
            registry_path: Location of the registry file
                (default: ~/.viban-global.yml)
        """
        self.registry_path = registry_path or self.default_path()

    @classmethod
    def default_path(cls) -> Path:
        return Path.home() / cls.REGISTRY_FILE

    def get_last_project_path(self) -> str | None:
        return self._load().last_project_path

    def set_last_project_path(self, project_path: str | Path) -> None:
        """Make ``project_path`` the last used project and move it to the front."""
        data = self._load()
        data.touch(str(project_path))
        self._save(data)
        logger.debug("Recorded last project: %s", project_path)

    def get_recent_projects(self) -> list[str]:
        """Recently used project paths, most recent first."""
        return self._load().recent_projects

    def _load(self) -> RegistryData:
        """Read the registry, treating a missing or unreadable file as empty."""
        path = self.registry_path
        if not path.exists():
            return RegistryData()

        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
            if data is None:
                return RegistryData()
            if not isinstance(data, dict):
                logger.warning("Ignoring %s: expected a mapping", path)
                return RegistryData()
            return RegistryData.model_validate(data)

        except (OSError, UnicodeDecodeError, yaml.YAMLError, PydanticValidationError) as e:
            logger.warning("Ignoring unreadable project registry %s: %s", path, e)
            return RegistryData()

    def _save(self, data: RegistryData) -> None:
        path = self.registry_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data.to_document(), f, default_flow_style=False, sort_keys=False)
