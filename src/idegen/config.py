"""Configuration settings for idegen.

Settings come from ``IDEGEN_``-prefixed environment variables or a local
``.env`` file. They only steer ``update_projects``; the project model itself
is configured entirely through builders.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="IDEGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Backends used when update_projects() is not given an explicit list
    ides: list[str] = Field(default_factory=lambda: ["netbeans"])

    # 0 = quiet, 1 = per-backend progress, 2 = file reference details
    verbosity: int = 0

    # JSONL generation event logs; disabled when unset
    log_dir: Path | None = None

    @field_validator("verbosity")
    @classmethod
    def _clamp_verbosity(cls, value: int) -> int:
        return max(0, min(2, value))


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None
