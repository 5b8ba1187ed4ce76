"""Database Session Manager — async engine with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to StorageError (core/errors.py)
    - SQLite connections enforce foreign keys (PRAGMA foreign_keys=ON) so tag rows cascade
    - Non-SQLAlchemy exceptions (e.g. DuplicateNumberError) pass through untouched

Design Decisions:
    - One manager per SqlRepository, owned by it: the repository is the single
      owner of its database connection
    - expire_on_commit=False: prevents lazy-load issues in async context
    - pool sizing only for server databases: SQLite pools reject pool_size
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from pokedex.core.errors import StorageError

logger = logging.getLogger(__name__)

BACKEND = "sql"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# most specific first: IntegrityError and OperationalError are DBAPIErrors
_REASONS = (
    (IntegrityError, "integrity constraint violated"),
    (OperationalError, "connection or operational error"),
    (DBAPIError, "database driver error"),
)


def _describe(exc: SQLAlchemyError) -> str:
    for exc_type, reason in _REASONS:
        if isinstance(exc, exc_type):
            return reason
    return "database operation failed"


class DatabaseSessionManager:
    """Manages async database sessions with rollback, error mapping, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        url = make_url(database_url)
        engine_kwargs: dict = {"pool_pre_ping": True}
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        if url.get_backend_name() == "sqlite":
            event.listen(
                self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: str = "query",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback; SQLAlchemy errors become StorageError."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            reason = _describe(e)
            logger.error(
                f"DB {reason}: {e}",
                extra={"backend": BACKEND, "operation": operation},
            )
            raise StorageError(reason, operation, BACKEND) from e
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_schema(self, metadata) -> None:
        """Create missing tables. Bootstrap only; there are no migrations."""
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except StorageError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
