"""Boundary Protocols — the persistence contract between core and backends.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Every backend (memory, sqlite, airtable) satisfies PokemonRepository structurally
    - Backends raise only RepositoryError subclasses (DuplicateNumberError,
      NumberNotFoundError, StorageError); driver/HTTP exceptions never escape
    - fetch_all returns records sorted ascending by number, whatever the storage order
    - Arguments are already-validated value objects; backends never re-validate input

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: every real backend does IO (SQL driver, HTTP); the in-memory
      backend is async too so the test double is a drop-in substitute
    - Exceptions over result enums: the service layer maps them with except clauses,
      and an unmapped case surfaces loudly instead of being silently dropped
"""

from typing import Protocol

from pokedex.core.domain_types import (
    Pokemon, PokemonName, PokemonNumber, PokemonTypes,
)


class PokemonRepository(Protocol):
    """Contract for Pokemon persistence — implemented by infrastructure backends."""

    async def insert(
        self, number: PokemonNumber, name: PokemonName, types: PokemonTypes,
    ) -> Pokemon:
        """Store a new record. DuplicateNumberError if the number is taken."""
        ...

    async def fetch_all(self) -> list[Pokemon]:
        """All records, ascending by number."""
        ...

    async def fetch_one(self, number: PokemonNumber) -> Pokemon:
        """NumberNotFoundError if absent."""
        ...

    async def delete(self, number: PokemonNumber) -> None:
        """Permanent removal. NumberNotFoundError if absent."""
        ...

    async def close(self) -> None:
        """Release engine/client resources. Called once at shutdown."""
        ...
