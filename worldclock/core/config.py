"""Application configuration using pydantic-settings."""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Get the package directory path
PACKAGE_DIR = Path(__file__).parent.parent
ENV_FILE = PACKAGE_DIR / ".env"


class Settings(BaseSettings):
    """Display settings loaded from environment variables (WORLDCLOCK_*)."""

    # Waking hours, half-open [start, end)
    wake_start_hour: int = Field(default=8, ge=0, le=24)
    wake_end_hour: int = Field(default=22, ge=0, le=24)

    # Table layout
    detail_mode: bool = False
    sort_direction: Literal["ascending", "descending"] = "ascending"

    # Glyphs
    home_glyph: str = "⌂"
    awake_glyph: str = "☀"
    asleep_glyph: str = "☾"
    dst_glyph: str = "✦"
    fallback_flag: str = "🌐"

    # Shell
    refresh_interval_seconds: int = 30  # seconds
    config_path: Optional[Path] = None
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="WORLDCLOCK_",
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def _check_waking_hours(self):
        if self.wake_start_hour > self.wake_end_hour:
            raise ValueError(
                f"wake_start_hour ({self.wake_start_hour}) must not be after "
                f"wake_end_hour ({self.wake_end_hour})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance. Override in tests via lru_cache.cache_clear()."""
    return Settings()
