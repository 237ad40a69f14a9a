# smartadd/ui/search_renderer.py
# Rich table rendering for nested search results

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from ..core.search import SearchResult


def render_search_results(query: str, results: list["SearchResult"]) -> Table | Text:
    if not results:
        return Text(f"No matches for '{query}'", style="dim")

    exact = sum(1 for r in results if r.match_type == "exact")
    table = Table(
        title=f"{len(results)} result(s) for '{query}' ({exact} exact)",
        show_header=True,
        header_style="bold",
        expand=True,
    )
    table.add_column("Section", style="smartadd.accent", no_wrap=True)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_column("Match", no_wrap=True)
    for r in results:
        match_style = "success" if r.match_type == "exact" else "dim"
        table.add_row(r.section_title, r.field_name, r.field_value, Text(r.match_type, style=match_style))
    return table
