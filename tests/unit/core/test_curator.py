# tests/unit/core/test_curator.py
# Unit tests for pending entry navigation, editing & deletion

import random

from smartadd.core.curator import EntryListCurator


def _entries(n):
    return [{"title": f"Entry {i}"} for i in range(n)]


def _assert_cursor_valid(curator):
    assert 0 <= curator.current_index < max(1, len(curator))


class TestNavigation:
    # * next/previous clamp at the ends instead of wrapping
    def test_clamps_at_bounds(self):
        curator = EntryListCurator(_entries(3))
        curator.previous()
        assert curator.current_index == 0
        curator.next()
        curator.next()
        curator.next()
        assert curator.current_index == 2

    def test_go_to_clamps(self):
        curator = EntryListCurator(_entries(3))
        assert curator.go_to(10) == 2
        assert curator.go_to(-4) == 0

    def test_empty_list_navigation_is_noop(self):
        curator = EntryListCurator()
        assert curator.next() == 0
        assert curator.previous() == 0
        assert curator.current is None


class TestEditing:
    def test_edit_current_replaces_in_place(self):
        curator = EntryListCurator(_entries(2))
        curator.next()
        curator.edit_current({"title": "Edited"})
        assert curator.entries[1] == {"title": "Edited"}
        assert curator.current_index == 1

    def test_update_field(self):
        curator = EntryListCurator(_entries(1))
        curator.update_current_field("content", "Body")
        assert curator.current == {"title": "Entry 0", "content": "Body"}

    # * Source entries are copied, not aliased
    def test_entries_are_copied(self):
        source = _entries(1)
        curator = EntryListCurator(source)
        curator.update_current_field("title", "changed")
        assert source[0]["title"] == "Entry 0"


class TestDeletion:
    # * Deleting the last item clamps the cursor to the new end
    def test_delete_last_clamps(self):
        curator = EntryListCurator(_entries(3))
        curator.go_to(2)
        assert curator.delete_current() is False
        assert curator.current_index == 1
        assert len(curator) == 2

    # * Deleting every entry reports the list as empty
    def test_delete_to_empty(self):
        curator = EntryListCurator(_entries(2))
        assert curator.delete_current() is False
        assert curator.delete_current() is True
        assert curator.is_empty
        assert curator.current_index == 0

    def test_delete_on_empty_is_idempotent(self):
        curator = EntryListCurator()
        assert curator.delete_current() is False
        assert curator.delete_current() is False


# * Cursor invariant holds for any sequence of operations
def test_cursor_invariant_under_random_operations():
    rng = random.Random(42)
    curator = EntryListCurator(_entries(6))
    for _ in range(300):
        op = rng.choice(["next", "previous", "delete", "edit", "goto"])
        if op == "next":
            curator.next()
        elif op == "previous":
            curator.previous()
        elif op == "delete":
            curator.delete_current()
        elif op == "edit":
            curator.edit_current({"title": "e"})
        else:
            curator.go_to(rng.randint(-3, 10))
        _assert_cursor_valid(curator)
        if curator.is_empty:
            curator.replace_all(_entries(rng.randint(1, 5)))
