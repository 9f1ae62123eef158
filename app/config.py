"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (saved plans)
    database_url: str = "sqlite:///./emi_plans.db"

    # App settings
    app_name: str = "EMI Plan Calculator"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Display currency for saved plans
    currency: str = "AUD"

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
