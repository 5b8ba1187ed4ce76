"""Infrastructure fixtures — one fresh repository per backend per test.

Invariants:
    - sqlite repositories use a temporary database file (never the project's pokedex.db)
    - airtable repositories talk to FakeAirtable through httpx.MockTransport
    - every repository is closed after the test

Design Decisions:
    - `repo` is parametrized over all three backends: the contract tests run
      unchanged against each one
"""

import pytest

from pokedex.infrastructure.memory_repository import InMemoryRepository
from pokedex.infrastructure.sql_repository import SqlRepository
from tests.infrastructure.fake_airtable import FakeAirtable, connect_fake_airtable


@pytest.fixture
def fake_airtable():
    return FakeAirtable()


@pytest.fixture
async def airtable_repo(fake_airtable):
    repo = await connect_fake_airtable(fake_airtable)
    yield repo
    await repo.close()


@pytest.fixture
async def sql_repo(tmp_path):
    repo = await SqlRepository.connect(f"sqlite+aiosqlite:///{tmp_path / 'pokedex.db'}")
    yield repo
    await repo.close()


@pytest.fixture(params=["memory", "sqlite", "airtable"])
async def repo(request, tmp_path):
    if request.param == "memory":
        repo = InMemoryRepository()
    elif request.param == "sqlite":
        repo = await SqlRepository.connect(
            f"sqlite+aiosqlite:///{tmp_path / 'pokedex.db'}",
        )
    else:
        repo = await connect_fake_airtable(FakeAirtable())
    yield repo
    await repo.close()
