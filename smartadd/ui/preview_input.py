# smartadd/ui/preview_input.py
# Key handling for the interactive preview: maps readchar keys to preview actions

from __future__ import annotations

from enum import Enum

from readchar import key


class PreviewAction(str, Enum):
    APPLY = "apply"
    REGENERATE = "regenerate"
    CANCEL = "cancel"
    NEXT = "next"
    PREVIOUS = "previous"
    EDIT = "edit"
    DELETE = "delete"
    NONE = "none"


_COMMON_KEYS: dict[str, PreviewAction] = {
    "a": PreviewAction.APPLY,
    key.ENTER: PreviewAction.APPLY,
    "r": PreviewAction.REGENERATE,
    "c": PreviewAction.CANCEL,
    "q": PreviewAction.CANCEL,
    key.ESC: PreviewAction.CANCEL,
}

_CREATE_KEYS: dict[str, PreviewAction] = {
    key.RIGHT: PreviewAction.NEXT,
    "l": PreviewAction.NEXT,
    key.LEFT: PreviewAction.PREVIOUS,
    "h": PreviewAction.PREVIOUS,
    "e": PreviewAction.EDIT,
    "d": PreviewAction.DELETE,
}


class PreviewInputHandler:

    def __init__(self, operation: str):
        self.operation = operation

    # * Resolve one key press; unknown keys map to NONE
    def handle_key(self, k: str) -> PreviewAction:
        if k == key.CTRL_C:
            raise KeyboardInterrupt
        lowered = k.lower() if len(k) == 1 else k
        if self.operation == "create" and lowered in _CREATE_KEYS:
            return _CREATE_KEYS[lowered]
        return _COMMON_KEYS.get(lowered, PreviewAction.NONE)
