"""Configuration settings for the running log."""

from pathlib import Path
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/running_log/config.py
# .parent.parent.parent = project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables (RUNLOG_*)."""

    model_config = SettingsConfigDict(
        env_prefix="RUNLOG_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    log_level: str = "INFO"

    # Record snapshots exported by the store ("read collection" responses)
    data_dir: Path = PROJECT_ROOT / "data"
    runs_path: Path | None = None
    races_path: Path | None = None

    # Dashboard windows
    recent_runs_limit: int = 5
    pace_series_runs: int = 10
    weekly_chart_weeks: int = 8

    # Forecasting
    forecast_window: int = 3
    forecast_periods: int = 1
    prediction_distances_km: List[float] = [10.0, 21.1, 42.2]

    def model_post_init(self, __context) -> None:
        """Set default snapshot paths after initialization."""
        if self.runs_path is None:
            self.runs_path = self.data_dir / "runs.json"
        if self.races_path is None:
            self.races_path = self.data_dir / "races.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
