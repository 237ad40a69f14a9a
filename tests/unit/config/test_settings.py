# tests/unit/config/test_settings.py
# Unit tests for configuration management including load/save, defaults & validation

import json
from types import SimpleNamespace

import pytest

from smartadd.config.settings import SettingsManager, SmartAddSettings, get_settings
from smartadd.core.exceptions import SettingsValidationError


# * Test SmartAddSettings dataclass behavior
class TestSmartAddSettings:

    # * Test default values are correctly set
    def test_defaults(self):
        settings = SmartAddSettings()
        assert settings.api_base_url == "http://localhost:5000"
        assert settings.smart_generate_path == "/api/admin/ai-smart-generate"
        assert settings.general_info_path == "/api/admin/general-info-all"
        assert settings.generation_backend == "http"
        assert settings.refetch_delay == 0.5
        assert settings.strict_result_shape is False
        assert settings.keyword_routing is False
        assert settings.theme == "default"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"api_base_url": "admin.test"},
            {"smart_generate_path": "api/x"},
            {"generation_backend": "ollama"},
            {"temperature": 3.0},
            {"temperature": True},
            {"request_timeout": 0},
            {"refetch_delay": 0},
            {"refetch_delay": 30},
            {"keyword_routing": "yes"},
            {"theme": "neon"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            SmartAddSettings(**kwargs)


# * Test SettingsManager load/save
class TestSettingsManager:

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = SettingsManager(tmp_path / "none" / "config.json")
        assert manager.load() == SmartAddSettings()

    # * Invalid config falls back to defaults w/ a warning
    def test_invalid_file_uses_defaults(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text('{"refetch_delay": -1}')
        manager = SettingsManager(path)
        assert manager.load() == SmartAddSettings()
        assert "Invalid config file" in capsys.readouterr().out

    def test_malformed_json_uses_defaults(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert SettingsManager(path).load() == SmartAddSettings()
        assert "Using default settings" in capsys.readouterr().out

    def test_set_persists(self, tmp_path):
        path = tmp_path / "config.json"
        manager = SettingsManager(path)
        manager.set("keyword_routing", True)
        assert json.loads(path.read_text())["keyword_routing"] is True
        assert SettingsManager(path).load().keyword_routing is True

    # * Invalid values are rejected & nothing is written
    def test_set_invalid_value(self, tmp_path):
        path = tmp_path / "config.json"
        manager = SettingsManager(path)
        with pytest.raises(SettingsValidationError) as exc:
            manager.set("refetch_delay", 0)
        assert exc.value.setting_name == "refetch_delay"
        assert not path.exists()

    def test_set_unknown_key(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown setting"):
            SettingsManager(tmp_path / "c.json").set("colour", "red")

    def test_reset(self, tmp_path):
        manager = SettingsManager(tmp_path / "config.json")
        manager.set("theme", "mono")
        manager.reset()
        assert manager.get("theme") == "default"

    # * Isolated fixture config is what the global manager sees
    def test_global_manager_isolated(self):
        from smartadd.config.settings import settings_manager

        assert settings_manager.load().api_base_url == "http://admin.test"


class TestGetSettings:
    def test_prefers_provided(self):
        provided = SmartAddSettings(theme="mono")
        assert get_settings(SimpleNamespace(obj=None), provided) is provided

    # * Settings on a parent context are found
    def test_parent_context(self):
        settings = SmartAddSettings(dev_mode=True)
        root = SimpleNamespace(obj=settings, parent=None)
        child = SimpleNamespace(obj=None, parent=root)
        assert get_settings(child) is settings

    def test_falls_back_to_disk(self):
        assert get_settings(SimpleNamespace(obj=None)).api_base_url == "http://admin.test"
