"""Error types raised by the board engine and its stores."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic import ValidationError as PydanticValidationError


class VibanError(Exception):
    """Base exception for board errors."""

    pass


class ValidationError(VibanError, ValueError):
    """Caller-supplied input failed a precondition.

    Nothing is persisted when this is raised.
    """

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> ValidationError:
        """Build a readable error from a pydantic validation failure."""
        messages = []
        for err in exc.errors():
            msg = err["msg"]
            if err["type"] == "value_error":
                # Our own validators already phrase the full message
                messages.append(msg.removeprefix("Value error, "))
            else:
                loc = ".".join(str(part) for part in err["loc"])
                messages.append(f"{loc}: {msg}" if loc else msg)
        return cls("; ".join(messages))


class CorruptDataError(VibanError):
    """The task file exists but does not hold a list of task records."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class ConfigParseError(VibanError):
    """The project config file exists but is not a valid mapping."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path
