"""
Application configuration settings.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

StorageBackend = Literal["memory", "sql", "redis", "detached"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = Field("Study Cards API", alias="APP_NAME")

    # Environment
    environment: str = Field("development", alias="ENVIRONMENT")
    debug: bool = Field(False, alias="DEBUG")

    # Server
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")

    # Storage; DECKS_KEY/PROGRESS_KEY apply to the local backends only
    storage_backend: StorageBackend = Field("sql", alias="STORAGE_BACKEND")
    decks_key: str = Field("study-cards-decks", alias="DECKS_KEY")
    progress_key: str = Field("study-cards-progress", alias="PROGRESS_KEY")
    seed_on_startup: bool = Field(True, alias="SEED_ON_STARTUP")

    # Database (local key-value store)
    database_url: str = Field(
        "sqlite+aiosqlite:///./studycards.db", alias="DATABASE_URL"
    )
    debug_sql: bool = Field(False, alias="DATABASE_ECHO")

    # Redis (remote tree store); the REDIS_*_KEY pair replaces the local keys
    redis_url: str = Field("redis://localhost:6379", alias="REDIS_URL")
    redis_key_prefix: str = Field("studycards:", alias="REDIS_KEY_PREFIX")
    redis_decks_key: str = Field("decks", alias="REDIS_DECKS_KEY")
    redis_progress_key: str = Field("userProgress", alias="REDIS_PROGRESS_KEY")

    # CORS
    cors_origins: str = Field("*", alias="CORS_ORIGINS")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("json", alias="LOG_FORMAT")

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    def storage_keys(self) -> tuple[str, str]:
        """(decks key, progress key) for the configured backend."""
        if self.storage_backend == "redis":
            return self.redis_decks_key, self.redis_progress_key
        return self.decks_key, self.progress_key


_settings = None


def get_settings() -> Settings:
    """Get settings instance (useful for dependency injection)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
