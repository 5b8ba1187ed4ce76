"""Create Pokemon — validation before storage, repository errors mapped 1:1.

Tests cover:
    - valid request → response echoing the primitives
    - each invalid field → BadRequestError naming the field, repository untouched
    - duplicate number → ConflictError; storage failure → UnknownError
"""

import pytest

from pokedex.core.errors import BadRequestError, ConflictError, UnknownError
from pokedex.infrastructure.memory_repository import InMemoryRepository
from pokedex.services import create_pokemon
from pokedex.services.responses import PokemonResponse


def _req(number=25, name="Pikachu", types=None):
    return create_pokemon.Request(
        number=number, name=name, types=["Electric"] if types is None else types,
    )


async def test_create_returns_primitives():
    repo = InMemoryRepository()

    res = await create_pokemon.execute(repo, _req())

    assert res == PokemonResponse(number=25, name="Pikachu", types=["Electric"])
    assert len(await repo.fetch_all()) == 1


@pytest.mark.parametrize("req, field", [
    (_req(number=0), "number"),
    (_req(number=899), "number"),
    (_req(name=""), "name"),
    (_req(types=[]), "types"),
    (_req(types=["Water"]), "types"),
    (_req(types=["Fire", "Fire"]), "types"),
])
async def test_invalid_input_is_bad_request(req, field):
    repo = InMemoryRepository()

    with pytest.raises(BadRequestError) as exc:
        await create_pokemon.execute(repo, req)

    assert exc.value.field == field
    assert await repo.fetch_all() == []


async def test_invalid_input_wins_over_broken_storage():
    """Validation runs before the repository is touched at all."""
    with pytest.raises(BadRequestError):
        await create_pokemon.execute(InMemoryRepository(error=True), _req(number=0))


async def test_duplicate_number_is_conflict():
    repo = InMemoryRepository()
    await create_pokemon.execute(repo, _req())

    with pytest.raises(ConflictError) as exc:
        await create_pokemon.execute(repo, _req(name="Raichu"))

    assert exc.value.http_status == 409
    assert exc.value.context.pokemon_number == 25


async def test_storage_failure_is_unknown():
    with pytest.raises(UnknownError) as exc:
        await create_pokemon.execute(InMemoryRepository(error=True), _req())
    assert exc.value.operation == "create_pokemon"
