# tests/unit/ai/clients/test_http_client.py
# Unit tests for the admin smart-generate client (httpx MockTransport)

import asyncio
import json

import httpx
import pytest

from smartadd.ai.clients.http_client import DEFAULT_SMART_PATH, HttpGenerationClient
from smartadd.ai.types import GenerationRequest
from smartadd.core.exceptions import GenerationServiceError
from smartadd.persistence.credentials import Credentials


def _client(handler):
    return HttpGenerationClient(
        "http://admin.test/",
        Credentials(token="secret-token"),
        transport=httpx.MockTransport(handler),
    )


def _generate(client, request):
    async def run():
        try:
            return await client.generate(request)
        finally:
            await client.aclose()

    return asyncio.run(run())


class TestRequest:
    # * Verify the POST carries the prompt, section type & bearer token
    def test_posts_prompt_and_section(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"entries": [{"title": "Fest"}]})

        payload = _generate(_client(handler), GenerationRequest("Add annual fest", "events"))
        assert payload == {"entries": [{"title": "Fest"}]}
        assert seen["url"] == f"http://admin.test{DEFAULT_SMART_PATH}"
        assert seen["auth"] == "Bearer secret-token"
        assert seen["body"] == {"prompt": "Add annual fest", "sectionType": "events"}

    # * Routed requests go to the per-collection create endpoint
    def test_target_path_override(self):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, json={"entries": [{"course_name": "BSc"}]})

        request = GenerationRequest("BSc", "courses", target_path="/api/admin/ai-generate-course")
        _generate(_client(handler), request)
        assert seen == ["/api/admin/ai-generate-course"]

    def test_fenced_json_body(self):
        def handler(request):
            return httpx.Response(200, text='```json\n{"entries": [{"a": 1}]}\n```')

        assert _generate(_client(handler), GenerationRequest("x", "events")) == {
            "entries": [{"a": 1}]
        }


class TestErrors:
    # * Service {message} is surfaced w/ the status code
    def test_service_message(self):
        def handler(request):
            return httpx.Response(401, json={"message": "Invalid admin token"})

        with pytest.raises(GenerationServiceError) as exc:
            _generate(_client(handler), GenerationRequest("x", "staff"))
        assert str(exc.value) == "Invalid admin token"
        assert exc.value.status_code == 401

    def test_fallback_message(self):
        def handler(request):
            return httpx.Response(502, text="<html>bad gateway</html>")

        with pytest.raises(GenerationServiceError) as exc:
            _generate(_client(handler), GenerationRequest("x", "staff"))
        assert str(exc.value) == "Failed to generate content"
        assert exc.value.status_code == 502

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(GenerationServiceError, match="timed out"):
            _generate(_client(handler), GenerationRequest("x", "staff"))

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GenerationServiceError, match="request failed"):
            _generate(_client(handler), GenerationRequest("x", "staff"))

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="Sorry, I can't help with that")

        with pytest.raises(GenerationServiceError, match="http backend returned invalid JSON"):
            _generate(_client(handler), GenerationRequest("x", "staff"))
