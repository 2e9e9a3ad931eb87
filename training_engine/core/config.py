"""
Host configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).  The engine
functions never read these values themselves; hosts pass them in.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Training Analytics & Adherence Engine"
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = []

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Dashboard defaults
    ADHERENCE_WEEKS_TO_TRACK: int = 12
    HEATMAP_GRID_DAYS: int = 365

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
