# smartadd/core/debug.py
# Developer-only output (needs --verbose & dev_mode): raw payloads, swallowed errors

from typing import Any

from .output import OutputLevel, emit, enabled_for


def is_debug_enabled() -> bool:
    return enabled_for(OutputLevel.DEBUG)


def debug_print(message: str, category: str = "DEBUG") -> None:
    emit(OutputLevel.DEBUG, category, message)


def debug_ai(message: str) -> None:
    emit(OutputLevel.DEBUG, "AI", message)


# * Exception type & text, prefixed w/ where it was caught
def debug_error(error: Exception, context: str = "") -> None:
    text = f"{type(error).__name__}: {error}"
    emit(OutputLevel.DEBUG, "ERROR", f"{context} - {text}" if context else text)


# raw AI envelopes & request bodies
def debug_payload(label: str, data: Any) -> None:
    emit(OutputLevel.DEBUG, "JSON", label, data=data)
