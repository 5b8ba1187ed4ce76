"""In-Memory Backend — failure injection, lock discipline and snapshot isolation.

Tests cover:
    - error mode: every operation raises StorageError regardless of input
    - a held lock degrades to StorageError after lock_timeout_seconds
    - fetch_all hands out a copy, never the guarded list
    - concurrent inserts of one number: exactly one wins
"""

import asyncio

import pytest

from pokedex.core.domain_types import PokemonName, PokemonNumber, PokemonTypes
from pokedex.core.errors import DuplicateNumberError, StorageError
from pokedex.infrastructure.memory_repository import InMemoryRepository


async def test_error_mode_fails_every_operation(pikachu):
    repo = InMemoryRepository().with_error()

    with pytest.raises(StorageError):
        await repo.insert(*pikachu)
    with pytest.raises(StorageError):
        await repo.fetch_all()
    with pytest.raises(StorageError):
        await repo.fetch_one(PokemonNumber(25))
    with pytest.raises(StorageError):
        await repo.delete(PokemonNumber(25))


async def test_error_mode_wins_over_conflict(pikachu):
    repo = InMemoryRepository()
    await repo.insert(*pikachu)
    repo.with_error()

    with pytest.raises(StorageError) as exc:
        await repo.insert(*pikachu)
    assert exc.value.backend == "memory"


async def test_error_flag_in_constructor():
    repo = InMemoryRepository(error=True)
    with pytest.raises(StorageError):
        await repo.fetch_all()


async def test_unavailable_lock_degrades_to_storage_error():
    repo = InMemoryRepository(lock_timeout_seconds=0.01)
    await repo._lock.acquire()
    try:
        with pytest.raises(StorageError, match="lock unavailable"):
            await repo.fetch_all()
    finally:
        repo._lock.release()


async def test_lock_is_released_after_each_operation(pikachu):
    repo = InMemoryRepository()
    await repo.insert(*pikachu)
    with pytest.raises(DuplicateNumberError):
        await repo.insert(*pikachu)
    assert not repo._lock.locked()


async def test_fetch_all_returns_a_copy(pikachu, charmander):
    repo = InMemoryRepository()
    await repo.insert(*pikachu)

    snapshot = await repo.fetch_all()
    snapshot.clear()

    assert len(await repo.fetch_all()) == 1


async def test_concurrent_inserts_of_one_number_admit_exactly_one():
    repo = InMemoryRepository()
    types = PokemonTypes.parse(["Electric"])

    results = await asyncio.gather(
        *(repo.insert(PokemonNumber(25), PokemonName(f"Pikachu{i}"), types)
          for i in range(10)),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, DuplicateNumberError)]
    assert len(conflicts) == 9
    assert len(await repo.fetch_all()) == 1
