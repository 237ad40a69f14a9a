# smartadd/core/entities.py
# Collection registry: per-entity required fields, wire normalization & REST paths

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# type alias for a single domain record as exchanged w/ the backend
Entity = dict[str, Any]

# fields managed by the backend store; never sent back in an update body
SERVER_FIELDS: tuple[str, ...] = ("id", "created_at", "updated_at")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


# * Definition of one target collection (courses, staff, info entries, ...)
@dataclass(frozen=True)
class Collection:
    name: str
    entity_name: str
    section_type: str
    path: str
    generate_path: str | None = None
    list_keys: tuple[str, ...] = ("entries",)
    required_fields: tuple[str, ...] = ()
    reference_fields: tuple[str, ...] = ()
    numeric_text_fields: tuple[str, ...] = ()
    field_aliases: dict[str, str] = field(default_factory=dict)
    label_fields: tuple[str, ...] = ("name", "title")
    server_fields: tuple[str, ...] = SERVER_FIELDS

    @property
    def plural_name(self) -> str:
        if self.entity_name.endswith("y"):
            return f"{self.entity_name[:-1]}ies"
        return f"{self.entity_name}s"

    def item_path(self, entry_id: Any) -> str:
        return f"{self.path.rstrip('/')}/{entry_id}"

    # * Rename AI-side aliases to the collection's canonical field names
    def apply_aliases(self, entry: Entity) -> Entity:
        if not self.field_aliases:
            return dict(entry)
        result: Entity = {}
        for key, value in entry.items():
            canonical = self.field_aliases.get(key, key)
            # canonical field already present wins over its alias
            if canonical != key and canonical in entry and not _is_blank(entry[canonical]):
                continue
            result[canonical] = value
        return result

    # * Required fields that are absent or blank
    def missing_fields(self, entry: Entity) -> list[str]:
        return [f for f in self.required_fields if _is_blank(entry.get(f))]

    # human-readable name for an entry (used in messages)
    def entry_label(self, entry: Entity) -> str:
        for key in self.label_fields:
            value = entry.get(key)
            if not _is_blank(value):
                return str(value)
        return self.entity_name

    # numeric text defaults to "0" on create only; updates never add keys the diff didn't show
    def _normalize(self, entry: Entity, fill_defaults: bool) -> Entity:
        body = dict(entry)
        for key in self.numeric_text_fields:
            value = body.get(key)
            if not _is_blank(value):
                body[key] = str(value)
            elif fill_defaults:
                body[key] = "0"
        # foreign keys must be omitted entirely rather than sent as ""
        for key in self.reference_fields:
            if key in body and _is_blank(body[key]):
                del body[key]
        return body

    # * Shape a pending entry into a POST body
    def normalize_for_create(self, entry: Entity) -> Entity:
        body = self._normalize(self.apply_aliases(entry), fill_defaults=True)
        body.pop("id", None)
        return body

    # * Shape an updated record into a PUT body (server-managed fields stripped)
    def normalize_for_update(self, entry: Entity) -> Entity:
        body = self._normalize(entry, fill_defaults=False)
        for key in self.server_fields:
            body.pop(key, None)
        return body


COLLECTIONS: dict[str, Collection] = {
    "courses": Collection(
        name="courses",
        entity_name="Course",
        section_type="courses",
        path="/api/admin/courses",
        generate_path="/api/admin/ai-generate-course",
        required_fields=("course_name", "course_code"),
        reference_fields=("department_id",),
        numeric_text_fields=("total_seats", "fees_per_year"),
        label_fields=("course_name", "course_code"),
    ),
    "staff": Collection(
        name="staff",
        entity_name="Staff Member",
        section_type="staff",
        path="/api/admin/staff",
        generate_path="/api/admin/ai-generate-staff",
        required_fields=("full_name",),
        reference_fields=("department_id",),
        label_fields=("full_name", "employee_id"),
    ),
    "general_info": Collection(
        name="general_info",
        entity_name="Information Entry",
        section_type="general_info",
        path="/api/admin/general-info",
        generate_path="/api/admin/ai-generate-info",
        required_fields=("title", "content"),
        label_fields=("title", "key"),
    ),
    "events": Collection(
        name="events",
        entity_name="Event",
        section_type="events",
        path="/api/admin/events",
        generate_path="/api/admin/ai-generate-event",
        required_fields=("title",),
        reference_fields=("department_id",),
        label_fields=("title", "name"),
    ),
    "holidays": Collection(
        name="holidays",
        entity_name="Holiday",
        section_type="holidays",
        path="/api/court-admin/holidays",
        list_keys=("holidays", "entries"),
        required_fields=("date", "name"),
        label_fields=("name", "date"),
    ),
    "court_fields": Collection(
        name="court_fields",
        entity_name="Court Field",
        section_type="court_field",
        path="/api/court-admin/fields",
        list_keys=("fields", "entries"),
        required_fields=("label",),
        field_aliases={"field_name": "label", "field_value": "value"},
        label_fields=("label",),
    ),
    "dynamic_fields": Collection(
        name="dynamic_fields",
        entity_name="Dynamic Field",
        section_type="dynamic_field",
        path="/api/admin/general-info/fields",
        list_keys=("fields", "entries"),
        required_fields=("label",),
        field_aliases={"field_name": "label", "field_value": "value"},
        label_fields=("label",),
    ),
}


def get_collection(name: str) -> Collection:
    try:
        return COLLECTIONS[name]
    except KeyError:
        from .exceptions import ConfigurationError

        valid = ", ".join(sorted(COLLECTIONS))
        raise ConfigurationError(f"Unknown section '{name}'. Valid sections: {valid}")


def list_collections() -> list[Collection]:
    return list(COLLECTIONS.values())
