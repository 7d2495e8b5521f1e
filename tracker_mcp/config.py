"""Configuration management for Tracker MCP."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = Field(default="tracker_mcp", description="MCP server name")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    history_limit: int = Field(
        default=10, ge=1, le=100, description="How many recently viewed items to remember"
    )
    data_file: Path | None = Field(
        default=None,
        description="JSON snapshot file; unset keeps everything in memory",
    )


settings = Settings()
