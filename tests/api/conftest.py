"""API test fixtures — FastAPI app over httpx ASGITransport.

Invariants:
    - get_repository is overridden: ASGITransport does not run the lifespan,
      so no backend is built from settings
    - Every test gets a fresh InMemoryRepository
    - dependency_overrides cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pokedex.infrastructure.memory_repository import InMemoryRepository
from pokedex.infrastructure.repository_factory import get_repository
from pokedex.main import app


@pytest.fixture
def memory_repo():
    return InMemoryRepository()


async def _client_for(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(memory_repo):
    """Test client backed by a working in-memory repository."""
    async with await _client_for(memory_repo) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def broken_client():
    """Test client whose repository fails every operation."""
    async with await _client_for(InMemoryRepository(error=True)) as c:
        yield c
    app.dependency_overrides.clear()
