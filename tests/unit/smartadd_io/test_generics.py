# tests/unit/smartadd_io/test_generics.py
# Unit tests for JSON/text file helpers & console management

import pytest

from smartadd.core.exceptions import FileReadError, JSONParsingError
from smartadd.smartadd_io.console import apply_theme, configure_console, get_console, reset_console
from smartadd.smartadd_io.generics import read_json_safe, read_text_safe, write_json_safe
from smartadd.ui.theme import get_theme, theme_names


class TestJsonFiles:
    # * Verify write creates parent dirs & keeps non-ASCII text
    def test_write_then_read(self, tmp_path):
        path = tmp_path / "nested" / "corpus.json"
        write_json_safe({"basicDetails": {"city": "हिसार"}}, path)
        assert "हिसार" in path.read_text(encoding="utf-8")
        assert read_json_safe(path) == {"basicDetails": {"city": "हिसार"}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileReadError) as exc:
            read_json_safe(tmp_path / "missing.json")
        assert exc.value.path == tmp_path / "missing.json"

    # * Malformed JSON reports a numbered snippet w/ the failing line marked
    def test_malformed_json_snippet(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{\n  "a": 1,\n  "b": \n}\n')
        with pytest.raises(JSONParsingError) as exc:
            read_json_safe(path)
        message = str(exc.value)
        assert "Invalid JSON in" in message
        assert ">>> " in message

    def test_read_text(self, tmp_path):
        path = tmp_path / "prompt.txt"
        path.write_text("Add BSc Physics", encoding="utf-8")
        assert read_text_safe(path) == "Add BSc Physics"
        with pytest.raises(FileReadError):
            read_text_safe(tmp_path / "nope.txt")


class TestConsole:
    # * Reconfiguring swaps the console behind the shared proxy
    def test_configure_and_reset(self):
        recorded = configure_console(width=60, record=True)
        assert get_console() is recorded
        assert recorded.width == 60
        fresh = reset_console()
        assert get_console() is fresh

    def test_apply_theme_styles(self, recording_console):
        apply_theme("mono")
        recording_console.print("[smartadd.before]old[/] [smartadd.after]new[/]")
        assert recording_console.export_text().strip() == "old new"


class TestTheme:
    def test_names(self):
        assert theme_names() == ["default", "mono"]

    def test_unknown_name_falls_back(self):
        assert get_theme("neon").styles.keys() == get_theme("default").styles.keys()
