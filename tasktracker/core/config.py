"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    record_store_url: str = "http://localhost:3001"
    request_timeout: float | None = None
    session_path: Path = Path(".local/tasktracker/session.json")
    seed_path: Path | None = None

    model_config = SettingsConfigDict(env_prefix="TASKTRACKER_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
