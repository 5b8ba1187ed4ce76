"""Pokemon ORM — the two relational tables behind the sqlite backend.

Invariants:
    - records.number is the primary key: the database enforces number uniqueness
    - types rows always belong to a record (pokemon_number FK, ON DELETE CASCADE)
    - one types row per tag; types.id preserves the tag order given at insert

Design Decisions:
    - Surrogate types.id over a composite key: keeps insertion order without a position column
    - passive_deletes=True: the FK cascade removes tag rows, the ORM never loads them to delete
"""

from sqlalchemy import Integer, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pokedex.db.base import Base


class PokemonRecord(Base):
    """One catalog entry — number and name."""
    __tablename__ = "records"

    number: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)

    types: Mapped[list["PokemonTypeTag"]] = relationship(
        "PokemonTypeTag",
        back_populates="record",
        order_by="PokemonTypeTag.id",
        passive_deletes=True,
    )


class PokemonTypeTag(Base):
    """One category tag of a record."""
    __tablename__ = "types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pokemon_number: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("records.number", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)

    record: Mapped["PokemonRecord"] = relationship(
        "PokemonRecord", back_populates="types",
    )
