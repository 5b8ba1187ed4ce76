"""ORM Models — SQLAlchemy declarative models for the relational backend.

Invariants:
    - All models inherit from Base (db/base.py)
    - PokemonRecord is the aggregate root; PokemonTypeTag rows are scoped by pokemon_number

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from pokedex.models.pokemon import PokemonRecord, PokemonTypeTag  # noqa: F401
