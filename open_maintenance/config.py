"""
Configuration management for OpenMaintenance
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "OpenMaintenance Torre K"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    CORS_ORIGINS: list[str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./maintenance.db"

    # Site
    SITE_TIMEZONE: str = "America/Mexico_City"  # empty string = server local date
    DEFAULT_ASSIGNEE: str = "Técnico"

    # Task lifecycle
    SEED_ON_STARTUP: bool = True
    PURGE_PAST_TASKS: bool = False
    REJECT_RECOMPLETION: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
