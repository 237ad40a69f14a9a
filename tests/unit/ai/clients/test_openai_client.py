# tests/unit/ai/clients/test_openai_client.py
# Unit tests for the OpenAI-compatible generation client (SDK mocked)

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from smartadd.ai.clients.openai_client import OpenAIGenerationClient
from smartadd.ai.types import GenerationRequest
from smartadd.core.exceptions import GenerationServiceError, MissingCredentialError
from smartadd.persistence.credentials import Credentials
from tests.test_support.fakes import FakeStore


CHAT_URL = "https://api.openai.com/v1/chat/completions"


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client_with(create_mock, store=None):
    client = OpenAIGenerationClient(Credentials(token="t", ai_api_key="sk-test"), store=store)
    sdk = MagicMock()
    sdk.chat.completions.create = create_mock
    sdk.close = AsyncMock()
    client._client = sdk
    return client


class TestPreflight:
    # * Missing AI key fails before any call
    def test_missing_key(self):
        client = OpenAIGenerationClient(Credentials(token="t"))
        with pytest.raises(MissingCredentialError) as exc:
            asyncio.run(client.generate(GenerationRequest("x", "staff")))
        assert exc.value.env_var == "SMARTADD_AI_API_KEY"


class TestCall:
    # * Smart prompt includes the existing records loaded from the store
    def test_smart_prompt_with_existing_records(self):
        store = FakeStore(records=[{"id": "abc", "full_name": "Prof. Sharma"}])
        create = AsyncMock(return_value=_completion(json.dumps({"entries": [{"full_name": "A"}]})))
        client = _client_with(create, store)

        payload = asyncio.run(client.generate(GenerationRequest("Add A", "staff")))
        assert payload == {"entries": [{"full_name": "A"}]}
        assert store.log == [("list", "staff")]

        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["temperature"] == 0.3
        prompt = kwargs["messages"][0]["content"]
        assert "Prof. Sharma" in prompt
        assert prompt.endswith("Add A")

    # * Routed requests use the create-only prompt & skip the record lookup
    def test_create_prompt_when_routed(self):
        store = FakeStore()
        create = AsyncMock(return_value=_completion('{"entries": [{"course_name": "BSc"}]}'))
        client = _client_with(create, store)

        request = GenerationRequest("BSc", "courses", target_path="/api/admin/ai-generate-course")
        asyncio.run(client.generate(request))
        prompt = create.call_args.kwargs["messages"][0]["content"]
        assert "Generate one or more Course records" in prompt
        assert store.list_calls == 0

    def test_empty_content_is_invalid_json(self):
        client = _client_with(AsyncMock(return_value=_completion(None)))
        with pytest.raises(GenerationServiceError, match="invalid JSON"):
            asyncio.run(client.generate(GenerationRequest("x", "events")))

    def test_aclose_closes_sdk_client(self):
        client = _client_with(AsyncMock())
        sdk = client._client
        asyncio.run(client.aclose())
        sdk.close.assert_awaited_once()


class TestErrorMapping:
    def test_rate_limit(self):
        response = httpx.Response(429, request=httpx.Request("POST", CHAT_URL))
        error = openai.RateLimitError("slow down", response=response, body=None)
        client = _client_with(AsyncMock(side_effect=error))
        with pytest.raises(GenerationServiceError) as exc:
            asyncio.run(client.generate(GenerationRequest("x", "events")))
        assert exc.value.status_code == 429

    def test_status_error(self):
        response = httpx.Response(401, request=httpx.Request("POST", CHAT_URL))
        error = openai.AuthenticationError("bad key", response=response, body=None)
        client = _client_with(AsyncMock(side_effect=error))
        with pytest.raises(GenerationServiceError, match=r"AI API error \(401\)"):
            asyncio.run(client.generate(GenerationRequest("x", "events")))

    def test_connection_error(self):
        error = openai.APIConnectionError(request=httpx.Request("POST", CHAT_URL))
        client = _client_with(AsyncMock(side_effect=error))
        with pytest.raises(GenerationServiceError, match="AI connection error"):
            asyncio.run(client.generate(GenerationRequest("x", "events")))
