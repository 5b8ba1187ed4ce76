"""Fetch All Pokemons — the whole catalog, ascending by number.

Invariants:
    - No input, so no BadRequest; the only failure is UnknownError
    - Order is the repository's (contractually ascending by number), never re-sorted here
"""

from pokedex.core.errors import StorageError, UnknownError
from pokedex.core.repository_protocols import PokemonRepository
from pokedex.services.responses import PokemonResponse


async def execute(repo: PokemonRepository) -> list[PokemonResponse]:
    try:
        pokemons = await repo.fetch_all()
    except StorageError as e:
        raise UnknownError("fetch_all_pokemons", e.context) from e
    return [PokemonResponse.from_pokemon(p) for p in pokemons]
