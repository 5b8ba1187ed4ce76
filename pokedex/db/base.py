"""SQLAlchemy Declarative Base — metadata owner for the records and types tables.

Invariants:
    - PokemonRecord and PokemonTypeTag inherit from Base
    - Base.metadata is what SqlRepository.connect creates on startup

Design Decisions:
    - Separate file for Base: models and the repository import it without cycles
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for Pokedex ORM models."""
    pass
