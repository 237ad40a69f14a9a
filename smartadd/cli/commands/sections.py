# smartadd/cli/commands/sections.py
# List the collections smartadd can add to

from __future__ import annotations

from rich.table import Table

from ..app import app
from ...core.entities import list_collections
from ...smartadd_io.console import console


@app.command()
def sections() -> None:
    """Show supported sections, their endpoints & required fields."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Section", style="smartadd.accent", no_wrap=True)
    table.add_column("Entity")
    table.add_column("Endpoint", style="dim")
    table.add_column("Required")
    for c in list_collections():
        table.add_row(c.name, c.entity_name, c.path, ", ".join(c.required_fields) or "-")
    console.print(table)
