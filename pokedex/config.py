"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - repository_backend is chosen once at startup; no runtime switching

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: the in-memory backend works out-of-the-box
    - CLI flags override by model_copy(update=...), never by mutating the cached instance
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Backend selection
    repository_backend: Literal["memory", "sqlite", "airtable"] = "memory"

    # Relational backend
    database_url: str = "sqlite+aiosqlite:///pokedex.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Pool sizing only applies to server databases (SQLite uses its own pool)
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Remote (Airtable) backend
    airtable_api_key: str = ""
    airtable_workspace_id: str = ""
    airtable_table: str = "pokemons"
    airtable_base_url: str = "https://api.airtable.com/v0"
    http_timeout_seconds: float = 10.0

    # In-memory backend
    lock_timeout_seconds: float = 5.0

    # API
    api_host: str = "localhost"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
