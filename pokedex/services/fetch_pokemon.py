"""Fetch Pokemon — one record by number."""

from dataclasses import dataclass

from pokedex.core.domain_types import PokemonNumber
from pokedex.core.errors import (
    BadRequestError, InvalidValueError, NotFoundError, NumberNotFoundError,
    StorageError, UnknownError,
)
from pokedex.core.repository_protocols import PokemonRepository
from pokedex.services.responses import PokemonResponse


@dataclass
class Request:
    number: int


async def execute(repo: PokemonRepository, req: Request) -> PokemonResponse:
    try:
        number = PokemonNumber(req.number)
    except InvalidValueError as e:
        raise BadRequestError(e.message, e.field) from e

    try:
        pokemon = await repo.fetch_one(number)
    except NumberNotFoundError as e:
        raise NotFoundError(number.value) from e
    except StorageError as e:
        raise UnknownError("fetch_pokemon", e.context) from e

    return PokemonResponse.from_pokemon(pokemon)
