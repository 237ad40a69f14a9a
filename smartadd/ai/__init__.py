# smartadd/ai/__init__.py
# Generation result types, payload classification & backend clients

from .types import CreateResult, FieldChange, GenerationRequest, GenerationResult, UpdateResult
from .classify import classify_payload

__all__ = [
    "CreateResult",
    "FieldChange",
    "GenerationRequest",
    "GenerationResult",
    "UpdateResult",
    "classify_payload",
]
