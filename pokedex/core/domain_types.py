"""Domain Types — validated value objects that replace bare primitives across the codebase.

Invariants:
    - PokemonNumber lies in MIN_POKEMON_NUMBER..MAX_POKEMON_NUMBER (0 is reserved, never valid)
    - PokemonName is a non-empty string, stored exactly as given (no trimming)
    - PokemonTypes is non-empty, duplicate-free, drawn only from PokemonType
    - Construction is the single gate: an existing value object is trusted everywhere downstream
    - All value objects are frozen and round-trip losslessly to their primitive form

Design Decisions:
    - Frozen dataclasses with __post_init__ validation over NewType: the type must
      carry its invariant at runtime, not just for the type checker
    - str Enum for the tag vocabulary: a configuration constant, serializes to JSON
      without custom encoders
    - Duplicate tags rejected rather than deduplicated: the relational backend stores
      one row per tag and silent dedup would break the lossless round-trip
"""

from dataclasses import dataclass
from enum import Enum

from pokedex.core.errors import InvalidValueError


# ─── Vocabulary ──────────────────────────────────────────────────

MIN_POKEMON_NUMBER = 1
MAX_POKEMON_NUMBER = 898


class PokemonType(str, Enum):
    """Closed tag vocabulary. Values are the exact wire/storage spelling."""
    ELECTRIC = "Electric"
    FIRE = "Fire"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True, order=True)
class PokemonNumber:
    """Unique catalog identifier. Ordered — catalog listings sort on it."""
    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not become Pokemon #1
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidValueError("Pokemon number must be an integer", "number")
        if not MIN_POKEMON_NUMBER <= self.value <= MAX_POKEMON_NUMBER:
            raise InvalidValueError(
                f"Pokemon number must be between {MIN_POKEMON_NUMBER} "
                f"and {MAX_POKEMON_NUMBER}, got {self.value}",
                "number",
            )

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class PokemonName:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidValueError("Pokemon name must be a string", "name")
        if not self.value:
            raise InvalidValueError("Pokemon name cannot be empty", "name")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PokemonTypes:
    """Ordered, non-empty, duplicate-free set of tags."""
    values: tuple[PokemonType, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise InvalidValueError("Pokemon must have at least one type", "types")
        if not all(isinstance(t, PokemonType) for t in self.values):
            raise InvalidValueError("Pokemon types must be PokemonType members", "types")
        if len(set(self.values)) != len(self.values):
            raise InvalidValueError("Pokemon types cannot repeat", "types")

    @classmethod
    def parse(cls, raw: list[str]) -> "PokemonTypes":
        """Build from primitive tag strings. Raises InvalidValueError."""
        if not isinstance(raw, (list, tuple)):
            raise InvalidValueError("Pokemon types must be a list of strings", "types")
        parsed = []
        for tag in raw:
            try:
                parsed.append(PokemonType(tag))
            except ValueError:
                allowed = ", ".join(t.value for t in PokemonType)
                raise InvalidValueError(
                    f"Unknown Pokemon type {tag!r} (allowed: {allowed})", "types",
                ) from None
        return cls(tuple(parsed))

    def to_list(self) -> list[str]:
        return [t.value for t in self.values]

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


# ─── Record ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Pokemon:
    """Catalog record. Immutable — "updating" means delete + insert."""
    number: PokemonNumber
    name: PokemonName
    types: PokemonTypes

    @classmethod
    def from_primitives(
        cls, number: int, name: str, types: list[str],
    ) -> "Pokemon":
        """Assemble from stored primitives. Raises InvalidValueError on corrupt data."""
        return cls(PokemonNumber(number), PokemonName(name), PokemonTypes.parse(types))
