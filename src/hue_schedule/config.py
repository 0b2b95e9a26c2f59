"""
Schedule Daemon Configuration Management
"""
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Schedule Configuration
    schedule_yaml_path: str = Field(
        default="schedule.yaml",
        description="Path to the schedule YAML file",
    )

    # Daemon Configuration
    host: str = Field(default="0.0.0.0", description="HTTP API bind address")
    port: int = Field(default=8000, description="HTTP API port")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    json_logs: bool = Field(default=True, description="Render logs as JSON")
    log_file: Optional[str] = Field(
        default=None, description="Optional path to an additional JSON log file"
    )

    # API Configuration
    api_title: str = Field(default="Hue Schedule API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")
    api_docs_enabled: bool = Field(default=True, description="Enable API documentation")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
