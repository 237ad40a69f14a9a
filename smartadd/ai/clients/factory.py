# smartadd/ai/clients/factory.py
# Generation client factory routing to the configured backend

from __future__ import annotations

from typing import Callable, Type, TYPE_CHECKING

from .base import BaseGenerationClient
from ...core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from ...config.settings import SmartAddSettings
    from ...persistence.client import RestStore
    from ...persistence.credentials import Credentials


# lazy client factory for the admin smart endpoint (tests can monkeypatch this)
def _get_http_client_class() -> Type[BaseGenerationClient]:
    from .http_client import HttpGenerationClient

    return HttpGenerationClient


# lazy client factory for direct OpenAI-compatible generation (tests can monkeypatch this)
def _get_openai_client_class() -> Type[BaseGenerationClient]:
    from .openai_client import OpenAIGenerationClient

    return OpenAIGenerationClient


# * Registry mapping backend IDs to client factory functions
CLIENT_REGISTRY: dict[str, Callable[[], Type[BaseGenerationClient]]] = {
    "http": _get_http_client_class,
    "openai": _get_openai_client_class,
}


# * Build the generation client for settings.generation_backend
def create_generation_client(
    settings: "SmartAddSettings",
    credentials: "Credentials",
    store: "RestStore | None" = None,
) -> BaseGenerationClient:
    client_factory = CLIENT_REGISTRY.get(settings.generation_backend)
    if client_factory is None:
        valid = ", ".join(sorted(CLIENT_REGISTRY))
        raise ConfigurationError(
            f"Unknown generation backend '{settings.generation_backend}'. Valid backends: {valid}"
        )

    client_class = client_factory()
    if settings.generation_backend == "openai":
        return client_class(  # type: ignore[call-arg]
            credentials=credentials,
            store=store,
            model=settings.model,
            base_url=settings.ai_base_url or None,
            temperature=settings.temperature,
            timeout=settings.request_timeout,
        )
    return client_class(  # type: ignore[call-arg]
        base_url=settings.api_base_url,
        credentials=credentials,
        smart_path=settings.smart_generate_path,
        timeout=settings.request_timeout,
    )
