"""Root conftest — shared test configuration and Pokemon fixtures."""

import os

import pytest

# Ensure tests never reach a real Airtable base or a stray database file
os.environ.setdefault("REPOSITORY_BACKEND", "memory")
os.environ.setdefault("AIRTABLE_API_KEY", "key-test-fake")
os.environ.setdefault("LOG_FORMAT", "text")

from pokedex.core.domain_types import (  # noqa: E402
    PokemonName, PokemonNumber, PokemonTypes,
)


@pytest.fixture
def pikachu():
    return PokemonNumber(25), PokemonName("Pikachu"), PokemonTypes.parse(["Electric"])


@pytest.fixture
def charmander():
    return PokemonNumber(4), PokemonName("Charmander"), PokemonTypes.parse(["Fire"])
