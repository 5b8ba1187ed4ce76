"""Pokemon Schemas — Pydantic models for the HTTP boundary.

Invariants:
    - PokemonCreate checks JSON shape only (types of fields); domain rules
      (number range, empty name, tag vocabulary) stay in the value objects
    - strict mode: "25" is not a number, 25.0 is not a number

Design Decisions:
    - Shape here, semantics in core: the shell reaches the same use-case
      without pydantic, so the domain gate cannot live in the schema
"""

from pydantic import BaseModel, ConfigDict


class PokemonCreate(BaseModel):
    """Body of POST /pokemons."""
    model_config = ConfigDict(strict=True)

    number: int
    name: str
    types: list[str]


class PokemonOut(BaseModel):
    """Public-facing record."""
    number: int
    name: str
    types: list[str]
