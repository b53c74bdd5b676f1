"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, read from ``VIBAN_*`` environment variables."""

    project_path: Path | None = Field(
        default=None,
        description="Project directory to bind at startup (overrides the last used project)",
    )

    registry_file: Path | None = Field(
        default=None,
        description="Location of the per-user project registry (default: ~/.viban-global.yml)",
    )

    host: str = Field(
        default="127.0.0.1",
        description="Interface the web server listens on",
    )

    port: int = Field(
        default=3000,
        description="Port for the web server",
    )

    static_dir: Path | None = Field(
        default=None,
        description="Directory of web UI assets served outside /api",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "VIBAN_",
    }
