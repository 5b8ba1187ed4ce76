"""Remote Backend — PokemonRepository over an Airtable-style HTTP table.

Invariants:
    - Table fields: number (integer), name (text), types (list of text)
    - insert: filtered read by number first; non-empty → DuplicateNumberError; else create
    - fetch_one / delete: filtered read first; empty → NumberNotFoundError
    - fetch_all: server-side sort by number, following the offset cursor to the end
    - Every httpx error, non-2xx status, malformed body, or invalid stored value → StorageError
    - No retries: a failure surfaces immediately

Design Decisions:
    - The remote has no uniqueness constraint, so insert and delete are check-then-act
      and NOT atomic: two concurrent inserts of the same number can both see an empty
      read and both create, leaving duplicates. Accepted and documented; no
      conditional-write layer
    - pydantic models for response bodies: one place where wire-shape drift becomes StorageError
    - Timeouts come from the httpx client; nothing here blocks without one
"""

import logging

import httpx
from pydantic import BaseModel, ValidationError

from pokedex.core.domain_types import (
    Pokemon, PokemonName, PokemonNumber, PokemonTypes,
)
from pokedex.core.errors import (
    DuplicateNumberError, InvalidValueError, NumberNotFoundError, StorageError,
)

logger = logging.getLogger(__name__)

BACKEND = "airtable"
DEFAULT_BASE_URL = "https://api.airtable.com/v0"


# ─── Wire Shapes ─────────────────────────────────────────────────

class AirtableFields(BaseModel):
    number: int
    name: str
    types: list[str]


class AirtableRecord(BaseModel):
    id: str
    fields: AirtableFields


class AirtableRecordList(BaseModel):
    records: list[AirtableRecord]
    offset: str | None = None


def _fields_of(number: PokemonNumber, name: PokemonName, types: PokemonTypes) -> dict:
    return {"number": number.value, "name": name.value, "types": types.to_list()}


# ─── Repository ──────────────────────────────────────────────────

class AirtableRepository:
    """PokemonRepository backed by a remote table reached over HTTP."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @classmethod
    async def connect(
        cls,
        api_key: str,
        workspace_id: str,
        *,
        table: str = "pokemons",
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AirtableRepository":
        """Build the client and probe the table. Failure here is fatal at startup."""
        client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/{workspace_id}/{table}",
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )
        repo = cls(client)
        try:
            await repo._list({"maxRecords": 1}, "connect")
        except StorageError:
            await client.aclose()
            raise
        logger.info(
            f"Airtable repository ready (table {table})", extra={"backend": BACKEND},
        )
        return repo

    async def _request(
        self, method: str, operation: str, url: str = "", **kwargs,
    ) -> dict:
        """One HTTP call; any transport, status or JSON failure becomes StorageError."""
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Airtable returned HTTP {e.response.status_code}",
                extra={"backend": BACKEND, "operation": operation},
            )
            raise StorageError(
                f"HTTP {e.response.status_code}", operation, BACKEND,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                f"Airtable request failed: {e!r}",
                extra={"backend": BACKEND, "operation": operation},
            )
            raise StorageError("network failure", operation, BACKEND) from e
        except ValueError as e:
            logger.error(
                f"Airtable body is not JSON: {e}",
                extra={"backend": BACKEND, "operation": operation},
            )
            raise StorageError("malformed response", operation, BACKEND) from e

    async def _list(self, params: dict, operation: str) -> list[AirtableRecord]:
        """GET records matching params, following offset pages."""
        records: list[AirtableRecord] = []
        page_params = dict(params)
        while True:
            body = await self._request("GET", operation, params=page_params)
            page = self._parse(AirtableRecordList, body, operation)
            records.extend(page.records)
            if not page.offset or "maxRecords" in params:
                return records
            page_params["offset"] = page.offset

    async def _find(self, number: PokemonNumber, operation: str) -> list[AirtableRecord]:
        return await self._list(
            {"filterByFormula": f"number = {number.value}"}, operation,
        )

    @staticmethod
    def _parse(model: type[BaseModel], body, operation: str):
        try:
            return model.model_validate(body)
        except ValidationError as e:
            logger.error(
                f"Airtable body has unexpected shape: {e.error_count()} error(s)",
                extra={"backend": BACKEND, "operation": operation},
            )
            raise StorageError("unexpected response shape", operation, BACKEND) from e

    @staticmethod
    def _to_pokemon(record: AirtableRecord, operation: str) -> Pokemon:
        try:
            return Pokemon.from_primitives(
                record.fields.number, record.fields.name, record.fields.types,
            )
        except InvalidValueError as e:
            logger.error(
                f"Stored record {record.id} is invalid: {e.message}",
                extra={"backend": BACKEND, "operation": operation,
                       "pokemon_number": record.fields.number},
            )
            raise StorageError("stored record failed validation", operation, BACKEND) from e

    async def insert(
        self, number: PokemonNumber, name: PokemonName, types: PokemonTypes,
    ) -> Pokemon:
        # Check-then-act: not atomic, see module docstring
        if await self._find(number, "insert"):
            raise DuplicateNumberError(number.value)
        body = await self._request(
            "POST", "insert",
            json={"records": [{"fields": _fields_of(number, name, types)}]},
        )
        created = self._parse(AirtableRecordList, body, "insert")
        if not created.records:
            raise StorageError("create returned no record", "insert", BACKEND)
        return self._to_pokemon(created.records[0], "insert")

    async def fetch_all(self) -> list[Pokemon]:
        records = await self._list(
            {"sort[0][field]": "number", "sort[0][direction]": "asc"}, "fetch_all",
        )
        return [self._to_pokemon(r, "fetch_all") for r in records]

    async def fetch_one(self, number: PokemonNumber) -> Pokemon:
        records = await self._find(number, "fetch_one")
        if not records:
            raise NumberNotFoundError(number.value)
        return self._to_pokemon(records[0], "fetch_one")

    async def delete(self, number: PokemonNumber) -> None:
        records = await self._find(number, "delete")
        if not records:
            raise NumberNotFoundError(number.value)
        await self._request("DELETE", "delete", f"/{records[0].id}")

    async def close(self) -> None:
        await self._client.aclose()
