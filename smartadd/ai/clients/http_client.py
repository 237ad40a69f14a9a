# smartadd/ai/clients/http_client.py
# Generation client for the admin smart-generate endpoint over httpx

from __future__ import annotations

import httpx

from .base import BaseGenerationClient
from ..types import GenerationRequest
from ..utils import APICallContext, extract_service_message
from ...core.exceptions import GenerationServiceError
from ...core.verbose import vlog_http
from ...persistence.credentials import Credentials

DEFAULT_SMART_PATH = "/api/admin/ai-smart-generate"


# * POSTs {prompt, sectionType} to the smart endpoint (or a per-collection create endpoint)
class HttpGenerationClient(BaseGenerationClient):

    backend_name = "http"

    def __init__(
        self,
        base_url: str,
        credentials: Credentials,
        smart_path: str = DEFAULT_SMART_PATH,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.smart_path = smart_path
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=credentials.auth_headers(),
            timeout=timeout,
            transport=transport,
        )

    def resolve_target(self, request: GenerationRequest) -> str:
        return request.target_path or self.smart_path

    async def make_call(self, request: GenerationRequest, target: str) -> APICallContext:
        try:
            response = await self._client.post(target, json=request.to_payload())
        except httpx.TimeoutException as e:
            raise GenerationServiceError(f"Generation request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise GenerationServiceError(f"Generation request failed: {e}") from e

        vlog_http("POST", target, response.status_code)
        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = extract_service_message(body) or "Failed to generate content"
            raise GenerationServiceError(message, status_code=response.status_code)

        return APICallContext(raw_text=response.text, backend_name=self.backend_name, target=target)

    async def aclose(self) -> None:
        await self._client.aclose()
