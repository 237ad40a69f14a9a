# smartadd/ai/classify.py
# Classify generation service payloads into CREATE or UPDATE results

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from .types import CreateResult, FieldChange, GenerationResult, UpdateResult
from ..core.exceptions import GenerationServiceError, UnrecognizedResultShapeError
from ..core.verbose import log_warning, vlog_think

if TYPE_CHECKING:
    from ..core.entities import Collection, Entity


# keys that belong to the smart-generate envelope rather than to an entity
ENVELOPE_KEYS: frozenset[str] = frozenset(
    {"operation", "confidence", "matched_entry", "changes", "entries", "explanation", "sectionType"}
)


def _coerce_confidence(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(max(0, min(100, value)))
    if isinstance(value, str):
        try:
            return float(max(0.0, min(100.0, float(value.strip().rstrip("%")))))
        except ValueError:
            return None
    return None


def _coerce_entries(items: list[Any], collection: "Collection | None") -> list["Entity"]:
    entries: list["Entity"] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise GenerationServiceError(
                f"AI returned an invalid entry at position {i + 1} "
                f"(expected an object, got {type(item).__name__})"
            )
        entries.append(collection.apply_aliases(item) if collection else dict(item))
    return entries


def _lookup_old(matched: "Entity", field_name: str) -> Any:
    if field_name in matched:
        return matched[field_name]
    nested = matched.get("value")
    if isinstance(nested, dict):
        return nested.get(field_name)
    return None


# * Convert the {field: {old, new}} map into ordered FieldChange rows
def parse_changes(raw: Any, matched: "Entity") -> list[FieldChange]:
    if not isinstance(raw, dict):
        return []
    changes: list[FieldChange] = []
    for field_name, change in raw.items():
        if isinstance(change, dict) and ("new" in change or "old" in change):
            old = change["old"] if "old" in change else _lookup_old(matched, field_name)
            changes.append(FieldChange(str(field_name), old, change.get("new")))
        else:
            # bare value: treat as the new value
            changes.append(FieldChange(str(field_name), _lookup_old(matched, field_name), change))
    return changes


def _list_keys(collection: "Collection | None") -> list[str]:
    keys = ["entries"]
    if collection:
        keys.extend(k for k in collection.list_keys if k not in keys)
    return keys


# * Classify a decoded payload: update tag + matched entry -> UpdateResult, else CreateResult
def classify_payload(
    payload: Any,
    collection: "Collection | None" = None,
    *,
    strict: bool = False,
) -> GenerationResult:
    if isinstance(payload, list):
        entries = _coerce_entries(payload, collection)
        if not entries:
            raise GenerationServiceError("AI returned no entries")
        return CreateResult(entries=entries)

    if not isinstance(payload, dict):
        raise GenerationServiceError(
            f"AI response is not a JSON object (got {type(payload).__name__})"
        )

    operation = payload.get("operation")
    op_tag = operation.strip().lower() if isinstance(operation, str) else None
    confidence = _coerce_confidence(payload.get("confidence"))
    explanation = str(payload.get("explanation") or "")

    if op_tag == "update":
        matched = payload.get("matched_entry")
        if isinstance(matched, dict):
            return UpdateResult(
                matched_entry=dict(matched),
                changes=parse_changes(payload.get("changes"), matched),
                confidence=confidence or 0.0,
                explanation=explanation,
            )
        proposed = payload.get("entries")
        if isinstance(proposed, list) and proposed:
            vlog_think("Update reported without a matched entry; using proposed entries")
            return CreateResult(
                entries=_coerce_entries(proposed, collection),
                confidence=confidence,
                explanation=explanation,
            )
        raise GenerationServiceError("AI detected an update but found no matching entry")

    for key in _list_keys(collection):
        value = payload.get(key)
        if isinstance(value, list):
            entries = _coerce_entries(value, collection)
            if not entries:
                raise GenerationServiceError("AI returned no entries")
            return CreateResult(entries=entries, confidence=confidence, explanation=explanation)

    # single-entity payloads: strip envelope keys & wrap as one entry
    entity = {k: v for k, v in payload.items() if k not in ENVELOPE_KEYS}
    if not entity:
        raise GenerationServiceError("AI returned no entries")
    if collection:
        entity = collection.apply_aliases(entity)

    looks_valid = collection is not None and not collection.missing_fields(entity)
    if op_tag == "create" or looks_valid:
        return CreateResult(entries=[entity], confidence=confidence, explanation=explanation)

    if strict:
        raise UnrecognizedResultShapeError(
            "AI response matched neither the create nor the update shape", payload=payload
        )
    log_warning(
        "Unrecognized AI response shape; previewing it as a single entry",
        f"Keys: {', '.join(sorted(payload.keys()))}",
    )
    return CreateResult(
        entries=[entity], confidence=confidence, explanation=explanation, degraded=True
    )
