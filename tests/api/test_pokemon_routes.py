"""Pokemon Routes — status codes and bodies for the four catalog endpoints.

Tests cover:
    - POST 201 / 409 / 400 (domain validation and malformed JSON alike)
    - GET list ascending, GET one 200 / 404 / 400
    - DELETE 204 then 404
    - storage failure → 500 UNKNOWN_ERROR without internal details
"""

import pytest

PIKACHU = {"number": 25, "name": "Pikachu", "types": ["Electric"]}
CHARMANDER = {"number": 4, "name": "Charmander", "types": ["Fire"]}


async def test_create_returns_201_with_body(client):
    res = await client.post("/api/v1/pokemons", json=PIKACHU)
    assert res.status_code == 201
    assert res.json() == PIKACHU


async def test_create_duplicate_returns_409(client):
    await client.post("/api/v1/pokemons", json=PIKACHU)

    res = await client.post("/api/v1/pokemons", json={**PIKACHU, "name": "Raichu"})

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"
    assert res.json()["error"]["context"]["pokemon_number"] == 25


@pytest.mark.parametrize("body", [
    {**PIKACHU, "number": 0},
    {**PIKACHU, "number": 899},
    {**PIKACHU, "name": ""},
    {**PIKACHU, "types": []},
    {**PIKACHU, "types": ["Water"]},
    {**PIKACHU, "types": ["Electric", "Electric"]},
])
async def test_create_invalid_values_return_400_bad_request(client, body):
    res = await client.post("/api/v1/pokemons", json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.parametrize("body", [
    {"name": "Pikachu", "types": ["Electric"]},
    {**PIKACHU, "number": "25"},
    {**PIKACHU, "types": "Electric"},
])
async def test_create_malformed_body_returns_400_validation_error(client, body):
    res = await client.post("/api/v1/pokemons", json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_does_not_store_rejected_input(client, memory_repo):
    await client.post("/api/v1/pokemons", json={**PIKACHU, "number": 0})
    assert await memory_repo.fetch_all() == []


async def test_list_is_ascending(client):
    await client.post("/api/v1/pokemons", json=PIKACHU)
    await client.post("/api/v1/pokemons", json=CHARMANDER)

    res = await client.get("/api/v1/pokemons")

    assert res.status_code == 200
    assert res.json() == [CHARMANDER, PIKACHU]


async def test_list_empty(client):
    res = await client.get("/api/v1/pokemons")
    assert res.status_code == 200
    assert res.json() == []


async def test_get_one(client):
    await client.post("/api/v1/pokemons", json=PIKACHU)
    res = await client.get("/api/v1/pokemons/25")
    assert res.status_code == 200
    assert res.json() == PIKACHU


async def test_get_absent_returns_404(client):
    res = await client.get("/api/v1/pokemons/25")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


async def test_get_out_of_range_returns_400(client):
    res = await client.get("/api/v1/pokemons/0")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BAD_REQUEST"


async def test_get_non_integer_returns_400(client):
    res = await client.get("/api/v1/pokemons/pikachu")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_delete_returns_204_then_404(client):
    await client.post("/api/v1/pokemons", json=PIKACHU)

    first = await client.delete("/api/v1/pokemons/25")
    second = await client.delete("/api/v1/pokemons/25")

    assert first.status_code == 204
    assert first.content == b""
    assert second.status_code == 404


async def test_storage_failure_returns_500_unknown(broken_client):
    res = await broken_client.get("/api/v1/pokemons")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "UNKNOWN_ERROR"
    assert "memory" not in error["message"]


async def test_storage_failure_on_create_returns_500(broken_client):
    res = await broken_client.post("/api/v1/pokemons", json=PIKACHU)
    assert res.status_code == 500
