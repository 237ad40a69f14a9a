# tests/conftest.py
# Pytest configuration w/ isolation fixtures for deterministic test runs

import json
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    # Patch Path.home() to isolated temp directory
    fake_home = tmp_path / "fake_home"
    fake_home.mkdir()

    smartadd_dir = fake_home / ".smartadd"
    smartadd_dir.mkdir()

    # minimal config.json w/ test defaults
    config_data = {
        "api_base_url": "http://admin.test",
        "generation_backend": "http",
        "refetch_delay": 0.01,
        "interactive": True,
        "dev_mode": False,
    }
    config_file = smartadd_dir / "config.json"
    with open(config_file, "w") as f:
        json.dump(config_data, f, indent=2)

    monkeypatch.setattr(Path, "home", lambda: fake_home)

    # ! reset global settings_manager state & point it at the isolated location
    from smartadd.config.settings import settings_manager

    settings_manager._settings = None
    settings_manager.config_path = config_file

    # credentials never leak in from the developer's environment
    monkeypatch.delenv("SMARTADD_ADMIN_TOKEN", raising=False)
    monkeypatch.delenv("SMARTADD_AI_API_KEY", raising=False)

    # ! reset output manager to NullOutputManager for test isolation
    from smartadd.core.output import reset_output_manager

    reset_output_manager()
    yield fake_home
    reset_output_manager()


@pytest.fixture(autouse=True)
def block_network():
    # Block all network calls by default w/ pytest-socket
    # unix sockets stay allowed: asyncio event loops need a socketpair
    try:
        pytest_socket = pytest.importorskip("pytest_socket")
        pytest_socket.disable_socket(allow_unix_socket=True)
    except pytest.skip.Exception:
        # pytest-socket not installed, skip network blocking
        pass


@pytest.fixture
def mock_env_vars(monkeypatch):
    # Seed test environment w/ credentials
    test_env = {
        "SMARTADD_ADMIN_TOKEN": "test-admin-token",
        "SMARTADD_AI_API_KEY": "test-ai-key",
    }
    for key, value in test_env.items():
        monkeypatch.setenv(key, value)
    return test_env


@pytest.fixture
def recording_console():
    # themed console that records output for export_text()
    from smartadd.smartadd_io.console import configure_console, reset_console
    from smartadd.ui.theme import get_theme

    recorded = configure_console(width=120, record=True, theme=get_theme())
    yield recorded
    reset_console()


@pytest.fixture
def wide_console():
    # wide console so CliRunner output doesn't wrap table cells
    from smartadd.smartadd_io.console import configure_console, reset_console

    configure_console(width=200)
    yield
    reset_console()


@pytest.fixture
def no_sleep():
    # records refetch waits instead of sleeping
    calls: list[float] = []

    async def _sleep(delay: float) -> None:
        calls.append(delay)

    _sleep.calls = calls  # type: ignore[attr-defined]
    return _sleep


@pytest.fixture
def general_info_corpus():
    # Nested general-information corpus shaped like /api/admin/general-info-all
    return {
        "basicDetails": {
            "college_name": "Govt College Hisar",
            "established_year": 1950,
            "principal_name": "Dr. Library Sharma",
        },
        "aboutHistory": {
            "overview": "Founded as a small library reading room, the college grew into a campus.",
        },
        "facilitiesInfrastructure": {
            "library": {
                "timings": "Library",
                "books": "40,000 volumes",
            },
            "labs": [
                {"name": "Physics Lab", "description": "Optics benches and a library of instruments"},
                {"department": "Chemistry", "headName": "Dr. Rao"},
            ],
        },
        "administrationManagement": {
            "departmentHeads": [
                {"department": "History", "headName": "Dr. Mehta"},
            ],
        },
        "additionalInfo": {
            "entries": [
                {"title": "Library", "content": "Open 9 AM to 6 PM on weekdays"},
                {"title": "Canteen", "content": "Serves lunch near the library block"},
            ]
        },
    }
