"""Service Responses — raw-primitive view of a Pokemon handed back to callers.

Invariants:
    - Callers (API router, shell) never receive value objects, only int/str/list[str]
    - from_pokemon is lossless: the primitives rebuild an equal Pokemon
"""

from dataclasses import dataclass

from pokedex.core.domain_types import Pokemon


@dataclass
class PokemonResponse:
    number: int
    name: str
    types: list[str]

    @classmethod
    def from_pokemon(cls, pokemon: Pokemon) -> "PokemonResponse":
        return cls(
            number=pokemon.number.value,
            name=pokemon.name.value,
            types=pokemon.types.to_list(),
        )
