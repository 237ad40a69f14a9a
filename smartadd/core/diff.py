# smartadd/core/diff.py
# Pure before/after formatting for UPDATE previews (no rich, no I/O)

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from ..ai.types import FieldChange, GenerationResult

# sentinel shown in place of null / empty values
EMPTY = "Empty"

# confidence at or above this is shown as high
HIGH_CONFIDENCE = 85.0

# substrings that mark bookkeeping keys in a matched-entry summary
_SUMMARY_SKIP = ("id", "created", "updated", "key")
_SUMMARY_VALUE_FIELDS = ("title", "content", "category")
_SUMMARY_LIMIT = 4


# * "course_name" -> "Course Name"; already formatted labels are returned unchanged
def format_field_name(key: str) -> str:
    words = key.replace("_", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)


def is_empty_value(value: Any) -> bool:
    return value is None or value == ""


# * Render one value for display (EMPTY, Yes/No, compact JSON or str)
def render_value(value: Any) -> str:
    if is_empty_value(value):
        return EMPTY
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


@dataclass(frozen=True, slots=True)
class DiffRow:
    field: str
    label: str
    before: str
    after: str
    before_empty: bool
    after_empty: bool


# * One row per change, in the order the service returned them
def build_rows(changes: Iterable["FieldChange"]) -> list[DiffRow]:
    return [
        DiffRow(
            field=c.field_name,
            label=format_field_name(c.field_name),
            before=render_value(c.old_value),
            after=render_value(c.new_value),
            before_empty=is_empty_value(c.old_value),
            after_empty=is_empty_value(c.new_value),
        )
        for c in changes
    ]


# * Short (label, value) summary of the record an update targets
def summarize_matched_entry(entry: dict[str, Any]) -> list[tuple[str, str]]:
    nested = entry.get("value")
    if isinstance(nested, dict):
        pairs = [
            (format_field_name(k), render_value(nested[k]))
            for k in _SUMMARY_VALUE_FIELDS
            if not is_empty_value(nested.get(k))
        ]
        if pairs:
            return pairs

    pairs = []
    for key, value in entry.items():
        if any(part in key.lower() for part in _SUMMARY_SKIP):
            continue
        pairs.append((format_field_name(key), render_value(value)))
        if len(pairs) >= _SUMMARY_LIMIT:
            break
    return pairs


def confidence_tier(confidence: float | None) -> str | None:
    if confidence is None:
        return None
    return "high" if confidence >= HIGH_CONFIDENCE else "moderate"


# * Confirm button text: "Apply 2 Changes" / "Add 1 Entry"
def confirm_label(result: "GenerationResult", count: int | None = None) -> str:
    if result.operation == "update":
        n = len(result.changes) if count is None else count
        return f"Apply {n} Change{'' if n == 1 else 's'}"
    n = len(result.entries) if count is None else count
    return f"Add {n} {'Entry' if n == 1 else 'Entries'}"
