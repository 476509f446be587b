"""Configuration settings for the workout cycle engine."""

from pathlib import Path
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# Path calculations:
# __file__ = src/workout_cycle/config.py
# .parent.parent.parent = project root
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path.home() / ".workout_cycle"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WORKOUT_CYCLE_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Cycle state cache
    cache_ttl_seconds: float = 5.0
    state_key: str = "workout_cycle_state"

    # Split used when the caller has no plan yet
    default_weekly_plan: List[str] = ["Push", "Pull", "Legs"]

    # Storage
    db_path: Path | None = None

    log_level: str = "INFO"

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.db_path is None:
            self.db_path = DATA_DIR / "cycle.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
