# smartadd/ai/clients/__init__.py
# Generation backends (admin smart endpoint, OpenAI-compatible direct)

from .base import BaseGenerationClient
from .factory import create_generation_client

__all__ = ["BaseGenerationClient", "create_generation_client"]
