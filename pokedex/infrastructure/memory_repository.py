"""In-Memory Backend — PokemonRepository over a list guarded by one lock.

Invariants:
    - Every read and write of _pokemons happens while holding _lock
    - insert's scan-then-append is atomic relative to all other operations on this instance
    - fetch_all returns a sorted COPY; no live reference into guarded state ever escapes
    - error mode: every operation raises StorageError before touching state, whatever the input
    - a lock that cannot be acquired within lock_timeout_seconds degrades to StorageError

Design Decisions:
    - asyncio.Lock over threading.Lock: all callers share the API/shell event loop
    - Bounded acquisition stands in for lock poisoning: a wedged holder yields
      Unknown for waiters instead of hanging the request forever
    - Records are frozen dataclasses, so a shallow list copy is a full snapshot
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from pokedex.core.domain_types import (
    Pokemon, PokemonName, PokemonNumber, PokemonTypes,
)
from pokedex.core.errors import (
    DuplicateNumberError, NumberNotFoundError, StorageError,
)

logger = logging.getLogger(__name__)

BACKEND = "memory"


class InMemoryRepository:
    """PokemonRepository kept in process memory. Reference backend and test double."""

    def __init__(self, error: bool = False, lock_timeout_seconds: float = 5.0):
        self._error = error
        self._lock_timeout = lock_timeout_seconds
        self._lock = asyncio.Lock()
        self._pokemons: list[Pokemon] = []

    def with_error(self) -> "InMemoryRepository":
        """Same store, failure injection switched on."""
        self._error = True
        return self

    @asynccontextmanager
    async def _guarded(self, operation: str) -> AsyncGenerator[list[Pokemon], None]:
        if self._error:
            raise StorageError("failure injected", operation, BACKEND)
        try:
            await asyncio.wait_for(self._lock.acquire(), self._lock_timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                f"Lock not acquired within {self._lock_timeout}s",
                extra={"backend": BACKEND, "operation": operation},
            )
            raise StorageError("lock unavailable", operation, BACKEND) from e
        try:
            yield self._pokemons
        finally:
            self._lock.release()

    async def insert(
        self, number: PokemonNumber, name: PokemonName, types: PokemonTypes,
    ) -> Pokemon:
        async with self._guarded("insert") as pokemons:
            if any(p.number == number for p in pokemons):
                raise DuplicateNumberError(number.value)
            pokemon = Pokemon(number, name, types)
            pokemons.append(pokemon)
            return pokemon

    async def fetch_all(self) -> list[Pokemon]:
        async with self._guarded("fetch_all") as pokemons:
            snapshot = list(pokemons)
        return sorted(snapshot, key=lambda p: p.number)

    async def fetch_one(self, number: PokemonNumber) -> Pokemon:
        async with self._guarded("fetch_one") as pokemons:
            for pokemon in pokemons:
                if pokemon.number == number:
                    return pokemon
        raise NumberNotFoundError(number.value)

    async def delete(self, number: PokemonNumber) -> None:
        async with self._guarded("delete") as pokemons:
            for index, pokemon in enumerate(pokemons):
                if pokemon.number == number:
                    del pokemons[index]
                    return
        raise NumberNotFoundError(number.value)

    async def close(self) -> None:
        async with self._lock:
            self._pokemons.clear()
