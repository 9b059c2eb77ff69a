"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_v1_prefix: str = "/api/v1"
    project_name: str = "Pathway Learner Progression"
    version: str = "1.0.0"

    # Demo / presentation
    demo_mode: bool = True  # allows manual-level-up and jump-to-stage
    default_scenario: str = "fresh-start"
    demo_seed: str = "DEMO_SEED_2026"

    # Engine
    notification_limit: int = 50  # 0 keeps every notification
    reflection_min_words: int = 10


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
