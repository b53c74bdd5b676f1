"""Per-user project registry model (~/.viban-global.yml)."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class RegistryData(BaseModel):
    """Last used project and the recently used list, most recent first."""

    model_config = ConfigDict(populate_by_name=True)

    MAX_RECENT: ClassVar[int] = 10

    last_project_path: str | None = Field(default=None, alias="lastProjectPath")
    recent_projects: list[str] = Field(default_factory=list, alias="recentProjects")

    def touch(self, project_path: str) -> None:
        """Record ``project_path`` as the most recently used project."""
        self.last_project_path = project_path
        recent = [p for p in self.recent_projects if p != project_path]
        recent.insert(0, project_path)
        self.recent_projects = recent[: self.MAX_RECENT]

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
