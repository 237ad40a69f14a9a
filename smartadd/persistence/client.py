# smartadd/persistence/client.py
# Async REST client for the admin collections (create, update, list) over httpx

from __future__ import annotations

from typing import Any

import httpx

from .credentials import Credentials
from ..ai.utils import extract_service_message
from ..core.debug import debug_error, debug_payload
from ..core.entities import Collection, Entity
from ..core.exceptions import PersistenceError
from ..core.verbose import vlog_http

DEFAULT_TIMEOUT = 30.0


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    return extract_service_message(body) or f"{fallback} (HTTP {response.status_code})"


# * Bearer-authenticated JSON client; every non-2xx becomes PersistenceError
class RestStore:
    def __init__(
        self,
        base_url: str,
        credentials: Credentials,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={**credentials.auth_headers(), "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RestStore":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self, method: str, path: str, fallback: str, json_body: Any = None
    ) -> Any:
        if json_body is not None:
            debug_payload(f"{method} {path} body", json_body)
        try:
            response = await self._client.request(method, path, json=json_body)
        except httpx.HTTPError as e:
            debug_error(e, f"{method} {path}")
            vlog_http(method, path)
            raise PersistenceError(f"{fallback}: {e}") from e

        vlog_http(method, path, response.status_code)
        if not response.is_success:
            raise PersistenceError(_error_message(response, fallback), response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise PersistenceError(f"{fallback}: response was not valid JSON") from e

    # * POST one entry to the collection; returns the created record
    async def create(self, collection: Collection, entry: Entity) -> Entity:
        data = await self._request(
            "POST", collection.path, f"Failed to create {collection.entity_name.lower()}", entry
        )
        return data if isinstance(data, dict) else dict(entry)

    # * PUT the full updated record to {path}/{id}
    async def update(self, collection: Collection, entry_id: Any, body: Entity) -> Entity:
        data = await self._request(
            "PUT",
            collection.item_path(entry_id),
            f"Failed to update {collection.entity_name.lower()}",
            body,
        )
        return data if isinstance(data, dict) else {**body, "id": entry_id}

    async def list(self, collection: Collection) -> list[Entity]:
        data = await self._request("GET", collection.path, f"Failed to load {collection.name}")
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            for key in collection.list_keys:
                if isinstance(data.get(key), list):
                    return data[key]
        return []

    async def fetch_json(self, path: str) -> Any:
        return await self._request("GET", path, f"Failed to load {path}")
