"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Secrets and connection strings come from environment variables or .env
    - get_settings() is cached (lru_cache), one instance per process

Design Decisions:
    - Defaults for every setting so docker-compose and tests start without a .env
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Service identity (reported by health probe)
    service_name: str = "sata-wellbeing-api"
    service_version: str = "1.0.0"

    # Database
    database_url: str = "postgresql+asyncpg://sata:sata@db:5432/sata"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgres:// or postgresql://, asyncpg needs postgresql+asyncpg://."""
        if not isinstance(v, str):
            return v
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
