# smartadd/ai/types.py
# Generation request & result types shared by clients, classifier & controller

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from ..core.entities import Entity


# * Request sent to a generation backend
@dataclass(slots=True)
class GenerationRequest:
    prompt: str
    section_type: str
    target_path: str | None = None  # endpoint override (keyword routing)

    def to_payload(self) -> dict[str, str]:
        return {"prompt": self.prompt, "sectionType": self.section_type}


# * Single field before/after pair of an UPDATE proposal
@dataclass(frozen=True, slots=True)
class FieldChange:
    field_name: str
    old_value: Any
    new_value: Any


# * CREATE variant: one or more records w/o a persisted id
@dataclass(slots=True)
class CreateResult:
    entries: list[Entity]
    confidence: float | None = None
    explanation: str = ""
    degraded: bool = False  # payload matched no known shape & was wrapped as one entry

    @property
    def operation(self) -> Literal["create"]:
        return "create"


# * UPDATE variant: matched existing record plus ordered field changes
@dataclass(slots=True)
class UpdateResult:
    matched_entry: Entity
    changes: list[FieldChange] = field(default_factory=list)
    confidence: float = 0.0
    explanation: str = ""

    @property
    def operation(self) -> Literal["update"]:
        return "update"

    @property
    def entry_id(self) -> Any:
        return self.matched_entry.get("id")

    def changes_map(self) -> dict[str, dict[str, Any]]:
        return {c.field_name: {"old": c.old_value, "new": c.new_value} for c in self.changes}


GenerationResult = Union[CreateResult, UpdateResult]
