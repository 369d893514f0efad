"""
Configuration settings for the Speech Practice backend.
All environment variables and app settings are centralized here.
"""
from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Speech Therapy Practice"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # API Settings
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite default
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173"
    ]

    # Practice sessions
    DEFAULT_MAX_WORDS_PER_CONFIGURATION: int = 5
    MIN_WORDS_PER_CONFIGURATION: int = 1
    MAX_WORDS_PER_CONFIGURATION: int = 10

    # Trend classification: minimum change in stored accuracy ratio
    TREND_THRESHOLD: float = 0.05

    # Content access
    FREE_PHONEMES: list[str] = ["p", "t", "k"]
    PREMIUM_UNLOCKED: bool = False

    # Reference catalog
    DEFAULT_LANGUAGE: str = "english"
    CATALOG_DATA_DIR: Optional[str] = None  # Defaults to the packaged data directory

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Singleton instance
settings = get_settings()
