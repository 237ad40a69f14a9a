# smartadd/core/curator.py
# Pending entry list w/ a clamped cursor: navigate, edit & delete CREATE candidates

from __future__ import annotations

from typing import Any

from .entities import Entity


# * Ordered candidate entries plus cursor (0 <= current_index < max(1, len))
class EntryListCurator:
    def __init__(self, entries: list[Entity] | None = None):
        self._entries: list[Entity] = [dict(e) for e in entries or []]
        self._index = 0

    @property
    def entries(self) -> list[Entity]:
        return self._entries

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current(self) -> Entity | None:
        if not self._entries:
            return None
        return self._entries[self._index]

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def _clamp(self, index: int) -> int:
        if not self._entries:
            return 0
        return max(0, min(index, len(self._entries) - 1))

    def next(self) -> int:
        self._index = self._clamp(self._index + 1)
        return self._index

    def previous(self) -> int:
        self._index = self._clamp(self._index - 1)
        return self._index

    def go_to(self, index: int) -> int:
        self._index = self._clamp(index)
        return self._index

    # * Replace the entry under the cursor
    def edit_current(self, entry: Entity) -> None:
        if not self._entries:
            return
        self._entries[self._index] = dict(entry)

    def update_current_field(self, field_name: str, value: Any) -> None:
        if not self._entries:
            return
        self._entries[self._index][field_name] = value

    # * Remove the entry under the cursor; True when the list became empty
    def delete_current(self) -> bool:
        if not self._entries:
            return False
        del self._entries[self._index]
        self._index = self._clamp(self._index)
        return not self._entries

    def replace_all(self, entries: list[Entity]) -> None:
        self._entries = [dict(e) for e in entries]
        self._index = 0

    def clear(self) -> None:
        self._entries = []
        self._index = 0
