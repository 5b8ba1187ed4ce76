"""Pokemon Routes — HTTP translation of the four catalog use-cases.

Invariants:
    - Routes never contain business logic: parse, call services.*.execute, serialize
    - Use-case errors propagate to the global PokedexError handler
      (BadRequest 400, NotFound 404, Conflict 409, Unknown 500)
    - {number} is parsed as int only; range checks belong to PokemonNumber (→ 400, not 422)
"""

from fastapi import APIRouter, Depends, Response, status

from pokedex.core.repository_protocols import PokemonRepository
from pokedex.infrastructure.repository_factory import get_repository
from pokedex.schemas.pokemon import PokemonCreate, PokemonOut
from pokedex.services import (
    create_pokemon, delete_pokemon, fetch_all_pokemons, fetch_pokemon,
)

router = APIRouter(prefix="/api/v1/pokemons", tags=["pokemons"])


@router.get("", response_model=list[PokemonOut])
async def list_pokemons(repo: PokemonRepository = Depends(get_repository)):
    """Whole catalog, ascending by number."""
    pokemons = await fetch_all_pokemons.execute(repo)
    return [PokemonOut(number=p.number, name=p.name, types=p.types) for p in pokemons]


@router.get("/{number}", response_model=PokemonOut)
async def get_pokemon(
    number: int, repo: PokemonRepository = Depends(get_repository),
):
    res = await fetch_pokemon.execute(repo, fetch_pokemon.Request(number=number))
    return PokemonOut(number=res.number, name=res.name, types=res.types)


@router.post(
    "", response_model=PokemonOut, status_code=status.HTTP_201_CREATED,
)
async def create(
    body: PokemonCreate, repo: PokemonRepository = Depends(get_repository),
):
    res = await create_pokemon.execute(
        repo,
        create_pokemon.Request(number=body.number, name=body.name, types=body.types),
    )
    return PokemonOut(number=res.number, name=res.name, types=res.types)


@router.delete("/{number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    number: int, repo: PokemonRepository = Depends(get_repository),
):
    await delete_pokemon.execute(repo, delete_pokemon.Request(number=number))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
