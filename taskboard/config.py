"""
Configuration module for environment variables.
"""
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite:///./taskboard.db",
        description="SQLAlchemy connection URL"
    )

    # Auth
    secret_key: str = Field(default="CHANGE_THIS_SECRET")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 24 * 7)
    admin_invite_token: str = Field(
        default="",
        description="Registration token that grants the admin role; empty disables admin sign-up"
    )

    # HTTP
    cors_origins: List[str] = Field(default=["*"])
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    # Application Settings
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_file: str = Field(default="")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


settings = get_settings()
