"""Create Pokemon — validate raw input, insert, map repository errors.

Invariants:
    - Validation happens before any storage access; first failure → BadRequestError
    - DuplicateNumberError → ConflictError, StorageError → UnknownError (1:1, nothing else)
    - The response carries primitives only

Design Decisions:
    - Request as a plain dataclass of primitives: the API router and the shell
      build it without touching value objects
"""

import logging
from dataclasses import dataclass

from pokedex.core.domain_types import PokemonName, PokemonNumber, PokemonTypes
from pokedex.core.errors import (
    BadRequestError, ConflictError, DuplicateNumberError, InvalidValueError,
    StorageError, UnknownError,
)
from pokedex.core.repository_protocols import PokemonRepository
from pokedex.services.responses import PokemonResponse

logger = logging.getLogger(__name__)


@dataclass
class Request:
    number: int
    name: str
    types: list[str]


async def execute(repo: PokemonRepository, req: Request) -> PokemonResponse:
    try:
        number = PokemonNumber(req.number)
        name = PokemonName(req.name)
        types = PokemonTypes.parse(req.types)
    except InvalidValueError as e:
        raise BadRequestError(e.message, e.field) from e

    try:
        pokemon = await repo.insert(number, name, types)
    except DuplicateNumberError as e:
        raise ConflictError(number.value) from e
    except StorageError as e:
        raise UnknownError("create_pokemon", e.context) from e

    logger.info(
        f"Pokemon #{number.value} created", extra={"pokemon_number": number.value},
    )
    return PokemonResponse.from_pokemon(pokemon)
