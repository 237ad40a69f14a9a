# smartadd/ai/clients/openai_client.py
# Direct generation against an OpenAI-compatible chat completions API

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from .base import BaseGenerationClient
from ..prompts import build_create_prompt, build_smart_prompt
from ..types import GenerationRequest
from ..utils import APICallContext
from ...core.entities import list_collections
from ...core.exceptions import GenerationServiceError, MissingCredentialError
from ...core.debug import debug_ai
from ...core.verbose import vlog_think
from ...persistence.credentials import AI_API_KEY_ENV, Credentials

if TYPE_CHECKING:
    from ...persistence.client import RestStore


# * Builds the smart prompt from existing records & asks the model for the result envelope
class OpenAIGenerationClient(BaseGenerationClient):

    backend_name = "openai"

    def __init__(
        self,
        credentials: Credentials,
        store: "RestStore | None" = None,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        temperature: float = 0.3,
        timeout: float = 60.0,
    ):
        self.credentials = credentials
        self.store = store
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.timeout = timeout
        self._client: Any = None

    def preflight(self) -> None:
        if not self.credentials.ai_api_key:
            raise MissingCredentialError(
                f"Missing AI API key. Set {AI_API_KEY_ENV} in your environment or .env file",
                env_var=AI_API_KEY_ENV,
            )

    def resolve_target(self, request: GenerationRequest) -> str:
        return self.model

    def _get_client(self) -> Any:
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(
                api_key=self.credentials.ai_api_key,
                base_url=self.base_url or None,
                timeout=self.timeout,
            )
        return self._client

    # existing records give the model something to match updates against
    async def _existing_records(self, section_type: str) -> list[dict[str, Any]]:
        collection = next((c for c in list_collections() if c.section_type == section_type), None)
        if collection is None or self.store is None:
            return []
        records = await self.store.list(collection)
        vlog_think(f"Loaded {len(records)} existing {collection.name} records for matching")
        return records

    async def build_prompt(self, request: GenerationRequest) -> str:
        if request.target_path:
            collection = next(
                (c for c in list_collections() if c.section_type == request.section_type), None
            )
            entity_name = collection.entity_name if collection else request.section_type
            return build_create_prompt(request.section_type, entity_name, request.prompt)
        existing = await self._existing_records(request.section_type)
        return build_smart_prompt(request.section_type, existing, request.prompt)

    # * Make chat completions call & map provider errors
    async def make_call(self, request: GenerationRequest, target: str) -> APICallContext:
        import openai

        prompt = await self.build_prompt(request)
        debug_ai(f"Built {len(prompt)}-char prompt for {request.section_type}")
        client = self._get_client()

        try:
            resp = await client.chat.completions.create(
                model=target,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except openai.RateLimitError as e:
            raise GenerationServiceError(f"AI rate limit exceeded: {e}", status_code=429) from e
        except openai.APIStatusError as e:
            raise GenerationServiceError(
                f"AI API error ({e.status_code}): {e.message}", status_code=e.status_code
            ) from e
        except openai.APIConnectionError as e:
            raise GenerationServiceError(f"AI connection error: {e}") from e

        content = resp.choices[0].message.content if resp.choices else None
        return APICallContext(raw_text=content or "", backend_name=self.backend_name, target=target)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
