"""Delete Pokemon — permanent removal by number."""

import logging
from dataclasses import dataclass

from pokedex.core.domain_types import PokemonNumber
from pokedex.core.errors import (
    BadRequestError, InvalidValueError, NotFoundError, NumberNotFoundError,
    StorageError, UnknownError,
)
from pokedex.core.repository_protocols import PokemonRepository

logger = logging.getLogger(__name__)


@dataclass
class Request:
    number: int


async def execute(repo: PokemonRepository, req: Request) -> None:
    try:
        number = PokemonNumber(req.number)
    except InvalidValueError as e:
        raise BadRequestError(e.message, e.field) from e

    try:
        await repo.delete(number)
    except NumberNotFoundError as e:
        raise NotFoundError(number.value) from e
    except StorageError as e:
        raise UnknownError("delete_pokemon", e.context) from e

    logger.info(
        f"Pokemon #{number.value} deleted", extra={"pokemon_number": number.value},
    )
