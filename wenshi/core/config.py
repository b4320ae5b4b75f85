"""Application configuration using Pydantic settings."""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore")

    service_name: str = "wenshi-document-service"
    service_port: int = 8000
    log_level: str = "INFO"

    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:5174",
    ]

    # File access
    files_root: Optional[str] = None
    default_filename: str = "untitled.wen"


settings = Settings()
