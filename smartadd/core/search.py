# smartadd/core/search.py
# Recursive free-text search over the nested general-information corpus

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Literal

from .debug import debug_print

PREVIEW_LIMIT = 100

# array element label & preview fallbacks, in priority order
LABEL_KEYS: tuple[str, ...] = ("name", "title", "department", "event")
PREVIEW_KEYS: tuple[str, ...] = ("description", "requirements", "headName", "timeline", "content")

MatchType = Literal["exact", "partial"]


@dataclass(frozen=True, slots=True)
class SectionDef:
    section_id: str
    title: str
    kind: Literal["mapping", "entries"] = "mapping"


# * Known corpus keys -> routable section id & display title
SECTION_CATALOG: dict[str, SectionDef] = {
    "basicDetails": SectionDef("basic-details", "Basic Details"),
    "aboutHistory": SectionDef("about-history-overview", "About / History / Overview"),
    "administrationManagement": SectionDef("administration-management", "Administration / Management"),
    "admissionEligibility": SectionDef("admission-eligibility", "Admission & Eligibility"),
    "scholarshipsFinancialAid": SectionDef("scholarships-financial-aid", "Scholarships & Financial Aid"),
    "facilitiesInfrastructure": SectionDef("facilities-infrastructure", "Facilities & Infrastructure"),
    "technicalDigitalResources": SectionDef("technical-digital-resources", "Technical & Digital Resources"),
    "studentSupportServices": SectionDef("student-support-services", "Student Support & Services"),
    "achievementsRecognitions": SectionDef("achievements-recognitions", "Achievements & Recognitions"),
    "campusEnvironment": SectionDef("campus-environment", "Campus & Environment"),
    "rulesRegulations": SectionDef("rules-regulations", "Rules & Regulations"),
    "miscellaneous": SectionDef("miscellaneous-info", "Other / Miscellaneous Information"),
    "additionalInfo": SectionDef("additional-info", "Additional Information", kind="entries"),
}


@dataclass(frozen=True, slots=True)
class SearchResult:
    section_id: str
    section_title: str
    field_name: str
    field_value: str
    match_type: MatchType


def _title_case(text: str) -> str:
    return re.sub(r"\b\w", lambda m: m.group().upper(), text)


def _spaced(key: str) -> str:
    return key.replace("_", " ")


def _preview(text: str) -> str:
    if len(text) > PREVIEW_LIMIT:
        return text[:PREVIEW_LIMIT] + "..."
    return text


def _match_type(full_text: str, query: str) -> MatchType:
    return "exact" if full_text.lower() == query else "partial"


# scalar leaves that can be matched as text (bools & None are not content)
def _scalar_text(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def derive_section(key: str) -> SectionDef:
    slug = re.sub(r"(?<!^)(?=[A-Z])", "-", key).replace("_", "-").lower()
    return SectionDef(slug, _title_case(slug.replace("-", " ")))


class _Walker:
    def __init__(self, query: str, section: SectionDef):
        self.query = query
        self.section = section
        self.results: list[SearchResult] = []
        self._path: set[int] = set()

    def emit(self, field_name: str, field_value: str, match_type: MatchType) -> None:
        self.results.append(
            SearchResult(self.section.section_id, self.section.title, field_name, field_value, match_type)
        )

    # * Top-level key of a section: scalars match on the full value, containers recurse
    def visit_top(self, key: str, value: Any) -> None:
        text = _scalar_text(value)
        if text is not None:
            if text and self.query in text.lower():
                self.emit(_title_case(_spaced(key)), _preview(text), _match_type(text, self.query))
            return
        if isinstance(value, (dict, list)):
            self.visit(value, key)

    def visit(self, value: Any, parent_key: str) -> None:
        if not value:
            return
        marker = id(value)
        if marker in self._path:
            debug_print(f"Skipping cyclic reference under '{parent_key}'", "SEARCH")
            return
        self._path.add(marker)
        try:
            if isinstance(value, list):
                self._visit_list(value, parent_key)
            elif isinstance(value, dict):
                self._visit_dict(value, parent_key)
        finally:
            self._path.discard(marker)

    def _visit_list(self, items: list[Any], parent_key: str) -> None:
        for item in items:
            if isinstance(item, str):
                searchable = item
            else:
                try:
                    searchable = json.dumps(item, ensure_ascii=False, default=str)
                except ValueError:
                    debug_print(f"Skipping cyclic array element under '{parent_key}'", "SEARCH")
                    continue
            if self.query not in searchable.lower():
                continue

            label, preview = _spaced(parent_key), _preview(searchable)
            if isinstance(item, dict):
                label = next((str(item[k]) for k in LABEL_KEYS if item.get(k)), label)
                preview = next((_preview(str(item[k])) for k in PREVIEW_KEYS if item.get(k)), preview)
            self.emit(label, preview, _match_type(searchable, self.query))

    def _visit_dict(self, mapping: dict[str, Any], parent_key: str) -> None:
        for key, nested in mapping.items():
            if isinstance(nested, str):
                if self.query in nested.lower():
                    field_name = _title_case(f"{_spaced(parent_key)} - {_spaced(str(key))}")
                    self.emit(field_name, _preview(nested), _match_type(nested, self.query))
            elif isinstance(nested, (dict, list)):
                self.visit(nested, f"{parent_key} {key}")


def _search_entries(walker: _Walker, value: Any) -> None:
    entries = value.get("entries") if isinstance(value, dict) else value
    if not isinstance(entries, list):
        return
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        title = entry.get("title") if isinstance(entry.get("title"), str) else ""
        content = entry.get("content") if isinstance(entry.get("content"), str) else ""
        if walker.query in title.lower() or walker.query in content.lower():
            walker.emit(title, _preview(content), _match_type(title, walker.query))


# * Search every section of the corpus; exact matches first, encounter order kept
def search_corpus(
    query: str,
    corpus: dict[str, Any] | None,
    catalog: dict[str, SectionDef] | None = None,
) -> list[SearchResult]:
    needle = query.strip().lower()
    if not needle or not corpus:
        return []
    catalog = SECTION_CATALOG if catalog is None else catalog

    ordered_keys = [k for k in catalog if k in corpus]
    ordered_keys += [k for k in corpus if k not in catalog]

    results: list[SearchResult] = []
    for key in ordered_keys:
        value = corpus[key]
        section = catalog.get(key) or derive_section(key)
        walker = _Walker(needle, section)
        if section.kind == "entries":
            _search_entries(walker, value)
        elif isinstance(value, dict):
            for field_key, field_value in value.items():
                walker.visit_top(str(field_key), field_value)
        else:
            walker.visit_top(key, value)
        results.extend(walker.results)

    exact = [r for r in results if r.match_type == "exact"]
    partial = [r for r in results if r.match_type == "partial"]
    debug_print(f"Search '{needle}': {len(exact)} exact, {len(partial)} partial", "SEARCH")
    return exact + partial
