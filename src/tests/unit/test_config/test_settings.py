"""Tests for application settings."""

from pathlib import Path

from mcp_get.config.settings import (
    BUNDLED_PACKAGE_LIST,
    DEFAULT_ANALYTICS_URL,
    get_settings,
)


def test_defaults(monkeypatch):
    for var in (
        "MCP_GET_CLAUDE_CONFIG",
        "MCP_GET_PREFERENCES_FILE",
        "MCP_GET_PACKAGE_LIST",
        "MCP_GET_ANALYTICS_URL",
        "MCP_GET_RESTART_DELAY",
        "MCP_GET_LOG_LEVEL",
        "MCP_GET_LOG_FILE_PATH",
    ):
        monkeypatch.delenv(var, raising=False)

    settings = get_settings()

    assert settings.claude_config is None
    assert settings.preferences_file is None
    assert settings.package_list == BUNDLED_PACKAGE_LIST
    assert settings.analytics_url == DEFAULT_ANALYTICS_URL
    assert settings.restart_delay == 2.0
    assert settings.logging.level == "WARNING"
    assert settings.get_log_file_path() is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("MCP_GET_CLAUDE_CONFIG", str(tmp_path / "config.json"))
    monkeypatch.setenv("MCP_GET_RESTART_DELAY", "0.5")
    monkeypatch.setenv("MCP_GET_ANALYTICS_URL", "http://localhost:3000")
    monkeypatch.setenv("MCP_GET_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("MCP_GET_LOG_FILE_PATH", str(tmp_path / "mcp-get.log"))

    settings = get_settings()

    assert settings.claude_config == Path(tmp_path / "config.json")
    assert settings.restart_delay == 0.5
    assert settings.analytics_url == "http://localhost:3000"
    assert settings.logging.level == "DEBUG"
    assert settings.get_log_file_path() == tmp_path / "mcp-get.log"


def test_settings_are_not_cached(monkeypatch):
    monkeypatch.setenv("MCP_GET_RESTART_DELAY", "1")
    first = get_settings()
    monkeypatch.setenv("MCP_GET_RESTART_DELAY", "3")

    assert first.restart_delay == 1.0
    assert get_settings().restart_delay == 3.0
