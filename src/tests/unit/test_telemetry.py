"""Tests for consent-gated installation analytics."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from mcp_get.config.preferences import PreferenceStore
from mcp_get.telemetry import TelemetryError, TelemetryReporter

from conftest import ScriptedPrompter


def mock_client_session(status: int = 200, reason: str = "OK"):
    """Build a ClientSession replacement whose post() yields a response."""
    response = MagicMock()
    response.status = status
    response.reason = reason

    session = MagicMock()
    session.post.return_value.__aenter__.return_value = response

    client_cls = MagicMock()
    client_cls.return_value.__aenter__.return_value = session
    return client_cls, session


@pytest.fixture
def store(preferences_file) -> PreferenceStore:
    return PreferenceStore(preferences_file)


class TestAnalyticsConsent:
    """Test the consent check."""

    def test_stored_consent_is_used_without_prompt(self, store):
        store.write_preferences({"allowAnalytics": False})
        prompter = ScriptedPrompter()

        assert TelemetryReporter(store, prompter).check_analytics_consent() is False
        assert prompter.questions == []

    def test_first_answer_is_persisted(self, store, preferences_file):
        store.write_preferences({"theme": "dark"})
        prompter = ScriptedPrompter(confirms=[False])
        reporter = TelemetryReporter(store, prompter)

        assert reporter.check_analytics_consent() is False
        assert json.loads(preferences_file.read_text()) == {
            "theme": "dark",
            "allowAnalytics": False,
        }

        # Re-read from disk, no second prompt
        assert reporter.check_analytics_consent() is False
        assert len(prompter.questions) == 1

    def test_non_boolean_value_prompts_again(self, store):
        store.write_preferences({"allowAnalytics": "yes"})
        prompter = ScriptedPrompter(confirms=[True])

        assert TelemetryReporter(store, prompter).check_analytics_consent() is True
        assert store.read_preferences()["allowAnalytics"] is True

    def test_unsaved_answer_still_applies(self, preferences_file):
        preferences_file.parent.write_text("")
        prompter = ScriptedPrompter(confirms=[True])
        reporter = TelemetryReporter(PreferenceStore(preferences_file), prompter)

        with patch("mcp_get.telemetry.logger") as mock_logger:
            assert reporter.check_analytics_consent() is True

        mock_logger.warning.assert_called_once()
        assert preferences_file.parent.is_file()


class TestReport:
    """Test the outbound install event."""

    def test_install_url(self, store):
        reporter = TelemetryReporter(store, ScriptedPrompter(), base_url="https://example.com/")

        assert (
            reporter.install_url("@scope/server")
            == "https://example.com/api/packages/@scope/server/install"
        )

    @pytest.mark.asyncio
    async def test_report_posts_json_header(self, store):
        client_cls, session = mock_client_session(200)
        reporter = TelemetryReporter(store, ScriptedPrompter())

        with patch("mcp_get.telemetry.aiohttp.ClientSession", client_cls):
            await reporter.report("foo")

        session.post.assert_called_once_with(
            "https://mcp-get.com/api/packages/foo/install",
            headers={"Content-Type": "application/json"},
        )

    @pytest.mark.asyncio
    async def test_non_success_status_raises_internally(self, store):
        client_cls, _ = mock_client_session(503, "Service Unavailable")
        reporter = TelemetryReporter(store, ScriptedPrompter())

        with patch("mcp_get.telemetry.aiohttp.ClientSession", client_cls):
            with pytest.raises(TelemetryError):
                await reporter._post_install("foo")

    @pytest.mark.asyncio
    async def test_report_swallows_http_failure(self, store):
        client_cls, _ = mock_client_session(500, "Internal Server Error")
        reporter = TelemetryReporter(store, ScriptedPrompter())

        with patch("mcp_get.telemetry.aiohttp.ClientSession", client_cls):
            await reporter.report("foo")

    @pytest.mark.asyncio
    async def test_report_swallows_network_failure(self, store):
        reporter = TelemetryReporter(store, ScriptedPrompter())

        with patch.object(
            reporter,
            "_post_install",
            new=AsyncMock(side_effect=aiohttp.ClientConnectionError("offline")),
        ):
            await reporter.report("foo")

    @pytest.mark.asyncio
    async def test_report_if_allowed_respects_refusal(self, store):
        store.write_preferences({"allowAnalytics": False})
        reporter = TelemetryReporter(store, ScriptedPrompter())

        with patch.object(reporter, "_post_install", new=AsyncMock()) as mock_post:
            assert await reporter.report_if_allowed("foo") is False

        mock_post.assert_not_called()
