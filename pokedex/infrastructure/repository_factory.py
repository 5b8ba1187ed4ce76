"""Repository Factory — selects and holds the one backend for this process.

Invariants:
    - Exactly one backend per process, chosen from Settings at startup
    - The backend is settings.repository_backend alone; flag precedence is resolved by the CLI
    - Backend construction failures propagate: the process must not start half-wired
    - get_repository() raises if called before init_repository()

Design Decisions:
    - Module-level singleton initialized on startup: FastAPI lifespan and the CLI
      manage lifecycle
    - get_repository doubles as the FastAPI dependency, overridden in tests
"""

import logging

from pokedex.config import Settings
from pokedex.core.repository_protocols import PokemonRepository
from pokedex.infrastructure.airtable_repository import AirtableRepository
from pokedex.infrastructure.memory_repository import InMemoryRepository
from pokedex.infrastructure.sql_repository import SqlRepository

logger = logging.getLogger(__name__)


async def build_repository(settings: Settings) -> PokemonRepository:
    """Construct the backend named by settings.repository_backend."""
    backend = settings.repository_backend
    if backend == "airtable":
        if not settings.airtable_api_key or not settings.airtable_workspace_id:
            raise ValueError(
                "airtable backend requires AIRTABLE_API_KEY and AIRTABLE_WORKSPACE_ID",
            )
        return await AirtableRepository.connect(
            settings.airtable_api_key,
            settings.airtable_workspace_id,
            table=settings.airtable_table,
            base_url=settings.airtable_base_url,
            timeout_seconds=settings.http_timeout_seconds,
        )
    if backend == "sqlite":
        return await SqlRepository.connect(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    return InMemoryRepository(lock_timeout_seconds=settings.lock_timeout_seconds)


# Singleton (initialized on startup)
repository: PokemonRepository | None = None


async def init_repository(settings: Settings) -> PokemonRepository:
    global repository
    repository = await build_repository(settings)
    logger.info(
        f"Repository initialized: {settings.repository_backend}",
        extra={"backend": settings.repository_backend},
    )
    return repository


async def close_repository() -> None:
    global repository
    if repository is not None:
        await repository.close()
        repository = None


def get_repository() -> PokemonRepository:
    """FastAPI dependency for the active repository."""
    if repository is None:
        raise RuntimeError("Repository not initialized")
    return repository
