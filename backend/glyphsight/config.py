"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    glyphsight_env: str = "development"
    glyphsight_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Raster defaults
    default_resolution: int = 64

    # Training
    training_error_margin: float = 0.5

    # Snapshot directory for the living database
    data_dir: str = "data"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
