"""SparksAI layout service configuration using Pydantic Settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SparksConfig(BaseSettings):
    """Main configuration class. Loads from .env file and environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "SparksAI Dashboard Layout"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: str = "http://localhost:3000"

    # Logging
    log_dir: str = "logs"
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    # Database
    database_url: str = "sqlite+aiosqlite:///./sparks_layout.db"

    # Layout
    reports_per_row: int = 2
    seed_report_catalog: bool = True
    default_view_reports: dict[str, list[str]] = {
        "pi-dashboard": [
            "pi-burndown",
            "pi-predictability",
            "epic-scope-changes",
            "sprint-predictability",
        ],
        "team-dashboard": [
            "team-sprint-burndown",
            "team-current-sprint-progress",
            "team-issues-trend",
            "team-closed-sprints",
        ],
    }

    @field_validator("reports_per_row")
    @classmethod
    def validate_reports_per_row(cls, v: int) -> int:
        if v < 1:
            raise ValueError("reports_per_row must be at least 1")
        return v


def get_config() -> SparksConfig:
    """Factory function to create config instance."""
    return SparksConfig()
