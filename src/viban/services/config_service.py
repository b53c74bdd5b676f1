"""Configuration service for .config-viban.yml."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigParseError, ValidationError
from ..models import BoardConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and saving a project's board configuration.

    Nothing is cached; each call reads the file again so edits made by
    other processes are picked up.
    """

    CONFIG_FILE = ".config-viban.yml"

    def __init__(self, project_path: Path) -> None:
        """Initialize the config service.

        Args:
            project_path: Path to the project directory
        """
        self.project_path = project_path

    @property
    def config_path(self) -> Path:
        return self.project_path / self.CONFIG_FILE

    def exists(self) -> bool:
        """Check if the project already has a config file."""
        return self.config_path.exists()

    def load(self) -> BoardConfig:
        """Load configuration, creating it with defaults on first use.

        Raises:
            ConfigParseError: The file exists but is not a valid mapping.
        """
        config_path = self.config_path

        if not config_path.exists():
            config = BoardConfig.default()
            self.save(config)
            logger.info("Created %s in %s", self.CONFIG_FILE, self.project_path)
            return config

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigParseError(config_path, f"Failed to parse config file: {config_path}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigParseError(
                config_path, f"Config file must contain a mapping: {config_path}"
            )

        try:
            config = BoardConfig.from_stored(data)
        except PydanticValidationError as e:
            raise ConfigParseError(
                config_path, f"Invalid values in config file {config_path}: {e.error_count()} error(s)"
            ) from e

        if data.get("createdAt") is None:
            # Stamp older files once so createdAt stays stable across loads
            self.save(config)
            logger.debug("Added createdAt to %s", config_path)

        return config

    def save(self, config: BoardConfig) -> None:
        """Write configuration to disk, creating the project directory if needed."""
        config_path = self.config_path
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(config.to_document(), f, default_flow_style=False, sort_keys=False)

    def update(self, updates: Mapping[str, Any]) -> BoardConfig:
        """Merge ``updates`` over the current configuration and save it.

        Args:
            updates: camelCase fields to change (``boardName``, ``tasksFile``)

        Raises:
            ValidationError: An unknown or read-only field, or an invalid value.
        """
        unknown = sorted(set(updates) - BoardConfig.UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Cannot update config field(s): {', '.join(unknown)}. "
                f"Updatable fields: {', '.join(sorted(BoardConfig.UPDATABLE_FIELDS))}"
            )

        current = self.load()
        try:
            updated = BoardConfig.model_validate({**current.to_document(), **updates})
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e) from e

        self.save(updated)
        logger.info("Config updated for %s: %s", self.project_path, ", ".join(sorted(updates)))
        return updated
