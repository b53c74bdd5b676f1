"""Task domain model."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..errors import ValidationError
from ..utils import ensure_utc, to_iso

# Column constants, in board order
COLUMN_BACKLOG = "backlog"
COLUMN_TODO = "todo"
COLUMN_REVIEW = "review"
COLUMN_DONE = "done"

COLUMNS: tuple[str, ...] = (COLUMN_BACKLOG, COLUMN_TODO, COLUMN_REVIEW, COLUMN_DONE)

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"

PRIORITIES: tuple[str, ...] = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH)

Column = Literal["backlog", "todo", "review", "done"]
Priority = Literal["low", "medium", "high"]


def validate_column(value: str) -> str:
    """Return ``value`` if it names a board column, else raise ValidationError."""
    if value not in COLUMNS:
        raise ValidationError(f"Invalid column: {value}. Must be one of: {', '.join(COLUMNS)}")
    return value


def validate_priority(value: str) -> str:
    """Return ``value`` if it names a priority, else raise ValidationError."""
    if value not in PRIORITIES:
        raise ValidationError(
            f"Invalid priority: {value}. Must be one of: {', '.join(PRIORITIES)}"
        )
    return value


class Task(BaseModel):
    """A single card on the board, as stored in the tasks file."""

    # Unknown keys written by newer versions survive a load/save cycle
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., min_length=1)
    title: str
    description: str | None = None
    column: str = COLUMN_BACKLOG
    priority: str = PRIORITY_MEDIUM
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("column")
    @classmethod
    def check_column(cls, v: str) -> str:
        return validate_column(v)

    @field_validator("priority")
    @classmethod
    def check_priority(cls, v: str) -> str:
        return validate_priority(v)

    @field_validator("created_at", "updated_at")
    @classmethod
    def check_timezone(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return to_iso(value)

    def to_record(self) -> dict[str, Any]:
        """Convert to the camelCase dict written to the tasks file."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Task":
        """Create Task from a record read from the tasks file."""
        return cls.model_validate(record)


class CreateTaskInput(BaseModel):
    """Fields accepted when creating a task.

    Omitted ``column`` and ``priority`` are filled in by the board
    (``backlog`` and ``medium``).
    """

    title: str
    description: str | None = None
    column: str | None = None
    priority: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title required")
        return v.strip()

    @field_validator("column")
    @classmethod
    def check_column(cls, v: str | None) -> str | None:
        return validate_column(v) if v is not None else None

    @field_validator("priority")
    @classmethod
    def check_priority(cls, v: str | None) -> str | None:
        return validate_priority(v) if v is not None else None


class UpdateTaskInput(BaseModel):
    """Fields that may be changed on an existing task.

    ``id``, ``column`` and ``createdAt`` are not accepted here; columns
    change only through a move.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    priority: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip() if v is not None else None

    @field_validator("priority")
    @classmethod
    def check_priority(cls, v: str | None) -> str | None:
        return validate_priority(v) if v is not None else None

    def changes(self) -> dict[str, Any]:
        """Fields that were supplied, keyed by attribute name.

        ``None`` means "leave unchanged", except for an explicit
        ``description: null``, which clears the description.
        """
        changes = self.model_dump(exclude_none=True)
        if "description" in self.model_fields_set and self.description is None:
            changes["description"] = None
        return changes
