"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "SwingLevels Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Candle source
    data_source: str = "mock"  # Only "mock" ships; broker clients plug in via CandleSourceInterface
    mock_seed: int = 42
    default_timeframe: str = "15m"
    quote_timeframe: str = "5s"
    candle_count: int = 200  # Largest batch most broker APIs hand out per request

    # Pipeline
    atr_period: int = 14
    pivot_window_size: int = 5
    pivot_strict: bool = True
    max_backfill_rounds: int = 5
    max_bricks: int = 10000

    # Signal
    max_spread_atr_percent: Optional[float] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "SWINGLEVELS_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
