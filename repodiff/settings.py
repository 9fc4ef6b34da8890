"""Runtime configuration for repodiff."""

from __future__ import annotations

import json
import os
from typing import Annotated, Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _default_workers() -> int:
    return os.cpu_count() or 1


class Settings(BaseSettings):
    """Configuration values mapped from ``REPODIFF_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPODIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Repositories
    local_path: Optional[str] = None
    remote_url: Optional[str] = None
    remote_username: Optional[str] = None
    remote_password: Optional[str] = None
    verify_tls: bool = True

    # Filters and output
    ignored_groups: Annotated[List[str], NoDecode] = Field(default_factory=list)
    display_format: str = "long"
    archive_path: Optional[str] = None

    # Probing
    workers: int = Field(default_factory=_default_workers)
    request_timeout: float = 30.0
    deadline_seconds: Optional[float] = None

    verbosity: int = 0

    @field_validator("ignored_groups", mode="before")
    @classmethod
    def _split_groups(cls, value: Any) -> Any:
        """Accept a JSON array or a comma separated list of group names."""
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [group.strip() for group in text.split(",") if group.strip()]

    @field_validator("workers")
    @classmethod
    def _at_least_one_worker(cls, value: int) -> int:
        return max(1, value)

    @field_validator("remote_url")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else value

