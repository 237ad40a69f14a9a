# smartadd/ui/theme.py
# Rich theme definitions for smartadd previews & status output

from __future__ import annotations

from rich.theme import Theme


class SmartAddColors:
    ACCENT_PRIMARY = "#4a90e2"  # sky blue
    ACCENT_SECONDARY = "#2563eb"  # royal blue

    # before/after diff colors
    BEFORE = "#ff6b6b"  # soft red
    AFTER = "#10b981"  # emerald green

    # status colors
    SUCCESS = "#10b981"
    WARNING = "#ffaa00"  # amber
    ERROR = "#ff4444"
    INFO = "#4488ff"
    DIM = "#aaaaaa"
    DEBUG = "#00b5b5"  # dim cyan - consistent for all debug output


# palette per theme name; "mono" keeps output readable on limited terminals
_PALETTES: dict[str, dict[str, str]] = {
    "default": {
        "success": SmartAddColors.SUCCESS,
        "warning": SmartAddColors.WARNING,
        "error": SmartAddColors.ERROR,
        "info": SmartAddColors.INFO,
        "dim": SmartAddColors.DIM,
        "debug": SmartAddColors.DEBUG,
        "smartadd.accent": SmartAddColors.ACCENT_PRIMARY,
        "smartadd.accent2": SmartAddColors.ACCENT_SECONDARY,
        "smartadd.before": SmartAddColors.BEFORE,
        "smartadd.after": SmartAddColors.AFTER,
        "smartadd.empty": f"italic {SmartAddColors.DIM}",
        "smartadd.confidence.high": f"bold {SmartAddColors.SUCCESS}",
        "smartadd.confidence.moderate": f"bold {SmartAddColors.WARNING}",
    },
    "mono": {
        "success": "bold",
        "warning": "bold",
        "error": "bold reverse",
        "info": "none",
        "dim": "dim",
        "debug": "dim",
        "smartadd.accent": "bold",
        "smartadd.accent2": "bold",
        "smartadd.before": "strike",
        "smartadd.after": "bold",
        "smartadd.empty": "italic dim",
        "smartadd.confidence.high": "bold",
        "smartadd.confidence.moderate": "bold",
    },
}


# * Generate Rich theme for the given name (falls back to default)
def get_theme(name: str = "default") -> Theme:
    return Theme(_PALETTES.get(name, _PALETTES["default"]))


def theme_names() -> list[str]:
    return sorted(_PALETTES)
