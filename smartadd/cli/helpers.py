# smartadd/cli/helpers.py
# Shared helpers for CLI commands: value coercion & notification printing

from __future__ import annotations

import json
from typing import Any

from ..core.controller import Notification
from ..smartadd_io.console import console

_LEVEL_STYLES = {
    "success": "success",
    "info": "info",
    "warning": "warning",
    "error": "error",
}


# coerce string value to JSON value (numbers, bools, null) or keep raw string
def coerce_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


# * Print a controller notification as a one-line status message
def print_notification(note: Notification) -> None:
    style = _LEVEL_STYLES.get(note.level, "info")
    console.print(f"[{style}]{note.title}:[/] {note.message}")
