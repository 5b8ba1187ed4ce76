"""Relational Backend — PokemonRepository over two SQL tables (records, types).

Invariants:
    - insert runs in ONE transaction: records row first, then one types row per tag;
      any failure rolls back everything (no orphan record, no partial tag set)
    - Conflict is derived from the database's own primary-key constraint, recognised
      by structured driver error codes, never by matching message text
    - delete is a single statement; zero affected rows means NotFound; tag rows go
      with it via ON DELETE CASCADE
    - A record read back with no tag rows was deleted mid-read: fetch_all skips it,
      fetch_one reports NotFound. Only tags that are present but invalid are StorageError

Design Decisions:
    - Constraint-enforced uniqueness over read-then-insert: atomic under concurrent inserts
    - Reads (records query, then selectinload tag query) are NOT a single snapshot.
      insert always writes at least one tag in the same transaction, so an empty
      tag set can only mean a concurrent delete landed between the two queries
    - sqlite_errorname (Python 3.11+) and SQLSTATE 23505 cover SQLite and PostgreSQL
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from pokedex.core.domain_types import (
    Pokemon, PokemonName, PokemonNumber, PokemonTypes,
)
from pokedex.core.errors import (
    DuplicateNumberError, InvalidValueError, NumberNotFoundError, StorageError,
)
from pokedex.db.base import Base
from pokedex.infrastructure.database import BACKEND, DatabaseSessionManager
from pokedex.models.pokemon import PokemonRecord, PokemonTypeTag

logger = logging.getLogger(__name__)

_SQLITE_UNIQUE_ERRORS = {"SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE"}
_PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True if the driver reports a primary-key/unique constraint violation."""
    # async adapters may wrap the driver exception one level deeper
    candidates = [exc.orig]
    if exc.orig is not None:
        candidates += [exc.orig.__cause__, exc.orig.__context__]
    for candidate in candidates:
        if candidate is None:
            continue
        if getattr(candidate, "sqlite_errorname", None) in _SQLITE_UNIQUE_ERRORS:
            return True
        if getattr(candidate, "sqlstate", None) == _PG_UNIQUE_VIOLATION:
            return True
        if getattr(candidate, "pgcode", None) == _PG_UNIQUE_VIOLATION:
            return True
    return False


def _still_present(row: PokemonRecord) -> bool:
    if row.types:
        return True
    logger.debug(
        f"Record #{row.number} lost its tags mid-read, treating it as deleted",
        extra={"backend": BACKEND, "pokemon_number": row.number},
    )
    return False


def _to_pokemon(row: PokemonRecord, operation: str) -> Pokemon:
    try:
        return Pokemon.from_primitives(
            row.number, row.name, [tag.name for tag in row.types],
        )
    except InvalidValueError as e:
        logger.error(
            f"Stored row #{row.number} is corrupt: {e.message}",
            extra={"backend": BACKEND, "operation": operation,
                   "pokemon_number": row.number},
        )
        raise StorageError("stored row failed validation", operation, BACKEND) from e


class SqlRepository:
    """PokemonRepository backed by an async SQLAlchemy engine."""

    def __init__(self, manager: DatabaseSessionManager):
        self._db = manager

    @classmethod
    async def connect(
        cls, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ) -> "SqlRepository":
        """Open the engine and bootstrap tables. Failure here is fatal at startup."""
        manager = DatabaseSessionManager(
            database_url, pool_size=pool_size, max_overflow=max_overflow,
        )
        try:
            await manager.create_schema(Base.metadata)
        except SQLAlchemyError as e:
            await manager.dispose()
            logger.error(
                f"Schema bootstrap failed: {e}",
                extra={"backend": BACKEND, "operation": "connect"},
            )
            raise StorageError("schema bootstrap failed", "connect", BACKEND) from e
        if not await manager.health_check():
            await manager.dispose()
            raise StorageError("database unreachable", "connect", BACKEND)
        logger.info("SQL repository ready", extra={"backend": BACKEND})
        return cls(manager)

    async def insert(
        self, number: PokemonNumber, name: PokemonName, types: PokemonTypes,
    ) -> Pokemon:
        async with self._db.session("insert") as db:
            db.add(PokemonRecord(number=number.value, name=name.value))
            try:
                await db.flush()
            except IntegrityError as e:
                await db.rollback()
                if is_unique_violation(e):
                    raise DuplicateNumberError(number.value) from e
                raise
            for tag in types:
                db.add(PokemonTypeTag(pokemon_number=number.value, name=tag.value))
            await db.commit()
        return Pokemon(number, name, types)

    async def fetch_all(self) -> list[Pokemon]:
        async with self._db.session("fetch_all") as db:
            result = await db.execute(
                select(PokemonRecord)
                .options(selectinload(PokemonRecord.types))
                .order_by(PokemonRecord.number),
            )
            rows = result.scalars().all()
            return [_to_pokemon(row, "fetch_all") for row in rows if _still_present(row)]

    async def fetch_one(self, number: PokemonNumber) -> Pokemon:
        async with self._db.session("fetch_one") as db:
            result = await db.execute(
                select(PokemonRecord)
                .options(selectinload(PokemonRecord.types))
                .where(PokemonRecord.number == number.value),
            )
            row = result.scalar_one_or_none()
            if row is None or not _still_present(row):
                raise NumberNotFoundError(number.value)
            return _to_pokemon(row, "fetch_one")

    async def delete(self, number: PokemonNumber) -> None:
        async with self._db.session("delete") as db:
            result = await db.execute(
                delete(PokemonRecord).where(PokemonRecord.number == number.value),
            )
            if result.rowcount == 0:
                await db.rollback()
                raise NumberNotFoundError(number.value)
            await db.commit()

    async def close(self) -> None:
        await self._db.dispose()
