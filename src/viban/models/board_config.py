"""Per-project board configuration model (.config-viban.yml)."""

from collections.abc import Mapping
from datetime import datetime
from pathlib import PurePath
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..utils import ensure_utc, now_utc, to_iso

DEFAULT_BOARD_NAME = "Kanban Board"
DEFAULT_TASKS_FILE = "tasks.json"


class BoardConfig(BaseModel):
    """Display name, task file location and creation stamp of one board."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    # Keys that may be changed after creation
    UPDATABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"boardName", "tasksFile"})

    board_name: str = Field(default=DEFAULT_BOARD_NAME, alias="boardName", min_length=1)
    tasks_file: str = Field(default=DEFAULT_TASKS_FILE, alias="tasksFile", min_length=1)
    created_at: datetime = Field(default_factory=now_utc, alias="createdAt")

    @field_validator("tasks_file")
    @classmethod
    def check_tasks_file(cls, v: str) -> str:
        """The tasks file must stay inside the project directory."""
        path = PurePath(v)
        if path.is_absolute() or path.anchor or ".." in path.parts:
            raise ValueError(f"tasksFile must be a path relative to the project: {v}")
        return v

    @field_validator("created_at")
    @classmethod
    def check_timezone(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return to_iso(value)

    @staticmethod
    def defaults() -> dict[str, Any]:
        """Every recognized field with its default value."""
        return {
            "boardName": DEFAULT_BOARD_NAME,
            "tasksFile": DEFAULT_TASKS_FILE,
            "createdAt": now_utc(),
        }

    @classmethod
    def default(cls) -> "BoardConfig":
        """Create a fresh configuration stamped with the current time."""
        return cls.model_validate(cls.defaults())

    @classmethod
    def from_stored(cls, stored: Mapping[str, Any]) -> "BoardConfig":
        """Overlay a stored document on the defaults, field by field.

        Keys missing from ``stored`` (or set to null) keep their default,
        so config files written by older versions still load.
        """
        merged = cls.defaults()
        merged.update({key: value for key, value in stored.items() if value is not None})
        return cls.model_validate(merged)

    def to_document(self) -> dict[str, Any]:
        """Convert to the camelCase mapping written to disk."""
        return self.model_dump(by_alias=True)
