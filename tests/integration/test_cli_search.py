# tests/integration/test_cli_search.py
# Integration tests for `smartadd search` over a JSON file & the admin API

import json

import pytest
from typer.testing import CliRunner

from smartadd.cli.app import app


ENV = {"NO_COLOR": "1", "TERM": "dumb"}


@pytest.fixture
def corpus_file(tmp_path, general_info_corpus):
    path = tmp_path / "general-info.json"
    path.write_text(json.dumps(general_info_corpus), encoding="utf-8")
    return path


# * Results from a local corpus file, exact matches first
def test_search_data_file(corpus_file, wide_console):
    result = CliRunner().invoke(app, ["search", "library", "--data", str(corpus_file)], env=ENV)
    assert result.exit_code == 0, result.output
    assert "6 result(s) for 'library' (2 exact)" in result.output
    assert result.output.index("Library - Timings") < result.output.index("Principal Name")
    assert "Facilities & Infrastructure" in result.output


def test_search_no_matches(corpus_file, wide_console):
    result = CliRunner().invoke(app, ["search", "swimming", "-d", str(corpus_file)], env=ENV)
    assert result.exit_code == 0
    assert "No matches for 'swimming'" in result.output


def test_search_non_object_data(tmp_path, wide_console):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]")
    result = CliRunner().invoke(app, ["search", "x", "-d", str(path)], env=ENV)
    assert result.exit_code == 1
    assert "Search Error" in result.output


def test_search_malformed_json(tmp_path, wide_console):
    path = tmp_path / "bad.json"
    path.write_text('{"basicDetails": ')
    result = CliRunner().invoke(app, ["search", "x", "-d", str(path)], env=ENV)
    assert result.exit_code == 1
    assert "JSON Parsing Error" in result.output


# * Without --data the corpus is fetched from the admin API
def test_search_fetches_from_api(monkeypatch, mock_env_vars, general_info_corpus, wide_console):
    seen = {}

    async def fake_fetch(settings, credentials):
        seen["path"] = settings.general_info_path
        seen["token"] = credentials.token
        return general_info_corpus

    monkeypatch.setattr("smartadd.cli.commands.search.fetch_corpus", fake_fetch)
    result = CliRunner().invoke(app, ["search", "mehta"], env=ENV)
    assert result.exit_code == 0, result.output
    assert seen == {"path": "/api/admin/general-info-all", "token": "test-admin-token"}
    assert "History" in result.output


def test_search_api_requires_token(wide_console):
    result = CliRunner().invoke(app, ["search", "library"], env=ENV)
    assert result.exit_code == 1
    assert "Configuration Error" in result.output


# * --log-file appends a trace of the run, bracketed by run markers
def test_search_log_file(corpus_file, tmp_path, wide_console):
    log_file = tmp_path / "trace.log"
    result = CliRunner().invoke(
        app, ["--log-file", str(log_file), "search", "library", "-d", str(corpus_file)], env=ENV
    )
    assert result.exit_code == 0, result.output
    text = log_file.read_text()
    assert "smartadd search started" in text
    assert f"[FILE] Read: {corpus_file}" in text
    assert "finished" in text
