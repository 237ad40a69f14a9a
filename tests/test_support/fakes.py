# tests/test_support/fakes.py
# Scripted generation backend & in-memory store for controller and CLI tests

import asyncio
import json
from typing import Any, Optional

from smartadd.ai.clients.base import BaseGenerationClient
from smartadd.ai.types import GenerationRequest
from smartadd.ai.utils import APICallContext
from smartadd.core.entities import Collection
from smartadd.core.exceptions import PersistenceError


# * Generation client returning scripted payloads (last one repeats)
class FakeGenerator(BaseGenerationClient):

    backend_name = "fake"

    def __init__(
        self,
        *payloads: Any,
        error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
        log: Optional[list] = None,
    ):
        self.payloads = list(payloads)
        self.error = error
        self.gate = gate
        self.requests: list[GenerationRequest] = []
        self.targets: list[str] = []
        self.closed = False
        self.log = log if log is not None else []

    async def make_call(self, request: GenerationRequest, target: str) -> APICallContext:
        self.requests.append(request)
        self.targets.append(target)
        self.log.append(("generate", request.prompt))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        payload = self.payloads.pop(0) if len(self.payloads) > 1 else self.payloads[0]
        raw = payload if isinstance(payload, str) else json.dumps(payload)
        return APICallContext(raw_text=raw, backend_name=self.backend_name, target=target)

    async def aclose(self) -> None:
        self.closed = True


# * In-memory store recording every call in order
class FakeStore:
    def __init__(
        self,
        fail_on_create: Optional[int] = None,
        fail_update: bool = False,
        records: Optional[list[dict]] = None,
        log: Optional[list] = None,
    ):
        self.fail_on_create = fail_on_create
        self.fail_update = fail_update
        self.records = records or []
        self.create_calls: list[dict] = []
        self.update_calls: list[tuple[Any, dict]] = []
        self.list_calls = 0
        self.closed = False
        self.log = log if log is not None else []

    async def create(self, collection: Collection, entry: dict) -> dict:
        index = len(self.create_calls)
        self.create_calls.append(entry)
        self.log.append(("create", index))
        if self.fail_on_create == index:
            raise PersistenceError("Database unavailable", status_code=500)
        return {**entry, "id": f"new-{index + 1}"}

    async def update(self, collection: Collection, entry_id: Any, body: dict) -> dict:
        self.update_calls.append((entry_id, body))
        self.log.append(("update", entry_id))
        if self.fail_update:
            raise PersistenceError("Record is locked", status_code=409)
        return {**body, "id": entry_id}

    async def list(self, collection: Collection) -> list[dict]:
        self.list_calls += 1
        self.log.append(("list", collection.name))
        return list(self.records)

    async def aclose(self) -> None:
        self.closed = True
