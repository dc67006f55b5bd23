"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "TaskWise Scheduler"
    debug: bool = False
    log_level: str = "INFO"
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "taskwise"
    # Cosmetic pause before an optimization run, in seconds.
    optimization_delay_seconds: float = 0.0
    analytics_cache_hours: int = 1
    weekly_goal: int = 85


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
