"""Application configuration loaded from environment variables."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


class Settings(BaseSettings):
    """HTMSQL site settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False

    # Content database blob
    data_dir: Path = Path("./data")
    store_name: str = "htmsql-content-db"
    store_key: str = "main"
    ephemeral: bool = False

    # Rendering
    default_page: str = "home"
    site_title: str = "HTMSQL"
    stylesheet_href: str = "styles.css"

    # Ad-hoc SQL endpoints (/api/query, /api/render); always on in debug
    query_api_enabled: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    trusted_hosts: list[str] = Field(default_factory=list)

    def validate_runtime(self) -> None:
        """Validate settings that pydantic field constraints cannot express."""
        violations: list[str] = []
        if not _SLUG_PATTERN.fullmatch(self.default_page):
            violations.append(f"DEFAULT_PAGE must be a page slug, got {self.default_page!r}")
        if not self.store_name.strip() or not self.store_key.strip():
            violations.append("STORE_NAME and STORE_KEY must not be empty")

        if violations:
            joined = "; ".join(violations)
            raise ValueError(f"Invalid configuration: {joined}")
