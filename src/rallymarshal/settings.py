"""Application settings, read from the environment and an optional .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the marshal data pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="RALLY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "rallymarshal"

    # Input files
    config_path: str = "./data/rally_config.json"
    marshal_data_path: str = "./data/marshal_data.csv"

    # Car codes are <prefix><3-digit car number>
    car_code_prefix: str = "ART40/24/"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None
