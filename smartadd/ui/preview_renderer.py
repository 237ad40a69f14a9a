# smartadd/ui/preview_renderer.py
# Rendering components for the CREATE list & UPDATE diff previews

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.diff import (
    EMPTY,
    build_rows,
    confidence_tier,
    confirm_label,
    format_field_name,
    render_value,
    summarize_matched_entry,
)

if TYPE_CHECKING:
    from ..ai.types import CreateResult, UpdateResult
    from ..core.curator import EntryListCurator
    from ..core.entities import Collection


UPDATE_KEYS_HELP = "[a] apply  [r] regenerate  [c] cancel"
CREATE_KEYS_HELP = "[←/→] navigate  [e] edit  [d] delete  [a] add all  [r] regenerate  [c] cancel"


def _value_text(value: str, is_empty: bool, style: str) -> Text:
    if is_empty:
        return Text(EMPTY, style="smartadd.empty")
    return Text(value, style=style)


class PreviewRenderer:

    def __init__(self, collection: "Collection"):
        self.collection = collection

    # ===== UPDATE PREVIEW =====

    def render_update(self, result: "UpdateResult") -> RenderableType:
        parts: list[RenderableType] = []

        header = Text("Update Detected", style="bold smartadd.accent")
        tier = confidence_tier(result.confidence)
        if tier:
            header.append("  ")
            header.append(
                f"{result.confidence:.0f}% confidence", style=f"smartadd.confidence.{tier}"
            )
        parts.append(header)
        if result.explanation:
            parts.append(Text(result.explanation, style="dim"))
        parts.append(Text(""))

        # matched entry summary
        summary = Table.grid(padding=(0, 2))
        summary.add_column(style="bold")
        summary.add_column()
        for label, value in summarize_matched_entry(result.matched_entry):
            summary.add_row(label, value)
        parts.append(Panel(summary, title="Matched Entry", title_align="left", border_style="smartadd.accent2"))

        # before/after rows in service order
        diff = Table(show_header=True, header_style="bold", expand=True)
        diff.add_column("Field", style="bold", no_wrap=True)
        diff.add_column("Before")
        diff.add_column("After")
        rows = build_rows(result.changes)
        for row in rows:
            diff.add_row(
                row.label,
                _value_text(row.before, row.before_empty, "smartadd.before"),
                _value_text(row.after, row.after_empty, "smartadd.after"),
            )
        if not rows:
            parts.append(Text("No field changes were proposed.", style="warning"))
        else:
            parts.append(diff)

        parts.append(Text(""))
        parts.append(Text(f"{confirm_label(result)}?  {UPDATE_KEYS_HELP}", style="dim italic"))
        return Panel(Group(*parts), title=f"AI Smart Add: {self.collection.entity_name}", border_style="smartadd.accent")

    # ===== CREATE PREVIEW =====

    def render_create(self, result: "CreateResult", pending: "EntryListCurator") -> RenderableType:
        parts: list[RenderableType] = []
        total = len(pending)

        header = Text(
            f"{self.collection.entity_name} {pending.current_index + 1} of {total}",
            style="bold smartadd.accent",
        )
        parts.append(header)
        if result.degraded:
            parts.append(
                Text("Unexpected response format; review this entry carefully.", style="warning")
            )
        if result.explanation:
            parts.append(Text(result.explanation, style="dim"))
        parts.append(Text(""))

        entry = pending.current or {}
        fields = Table.grid(padding=(0, 2))
        fields.add_column(style="bold", no_wrap=True)
        fields.add_column()
        missing = set(self.collection.missing_fields(self.collection.apply_aliases(entry)))
        for key, value in entry.items():
            label = format_field_name(key)
            if key in missing:
                label = f"{label} *"
            fields.add_row(label, render_value(value))
        for key in sorted(missing - set(entry)):
            fields.add_row(f"{format_field_name(key)} *", Text(EMPTY, style="smartadd.empty"))
        parts.append(fields)

        if missing:
            parts.append(Text(""))
            parts.append(Text("* required field is empty", style="warning"))

        parts.append(Text(""))
        parts.append(Text(f"{confirm_label(result, total)}?  {CREATE_KEYS_HELP}", style="dim italic"))
        return Panel(Group(*parts), title=f"AI Smart Add: {self.collection.plural_name}", border_style="smartadd.accent")

    def render(self, result: "CreateResult | UpdateResult", pending: "EntryListCurator") -> RenderableType:
        if result.operation == "update":
            return self.render_update(result)  # type: ignore[arg-type]
        return self.render_create(result, pending)  # type: ignore[arg-type]
