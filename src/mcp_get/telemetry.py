"""Consent-gated anonymous installation analytics."""

from urllib.parse import quote

import aiohttp
import structlog

from .config.preferences import PreferenceStore
from .config.settings import DEFAULT_ANALYTICS_URL
from .prompts import Prompter

logger = structlog.get_logger(__name__)


class TelemetryError(Exception):
    """The analytics service rejected or did not receive an event."""


class TelemetryReporter:
    """Reports package installations when the user has agreed to it."""

    def __init__(
        self,
        preferences: PreferenceStore,
        prompter: Prompter,
        base_url: str = DEFAULT_ANALYTICS_URL,
        timeout: float = 10.0,
    ):
        self.preferences = preferences
        self.prompter = prompter
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def check_analytics_consent(self) -> bool:
        """Return the stored consent, asking once if none is recorded.

        The answer is persisted, so the user is never asked again. If it
        cannot be saved it is only used for the current run.
        """
        prefs = self.preferences.read_preferences()
        allow_analytics = prefs.get("allowAnalytics")
        if isinstance(allow_analytics, bool):
            return allow_analytics

        allow_analytics = self.prompter.confirm(
            "Would you like to help improve mcp-get by sharing anonymous "
            "installation analytics?",
            default=True,
        )
        try:
            self.preferences.write_preferences(
                {**prefs, "allowAnalytics": allow_analytics}
            )
        except OSError as e:
            # The answer still applies to this run
            logger.warning("Failed to save analytics preference", error=str(e))
        return allow_analytics

    def install_url(self, package_name: str) -> str:
        """URL of the install event for a package."""
        return f"{self.base_url}/api/packages/{quote(package_name, safe='@/')}/install"

    async def report(self, package_name: str) -> None:
        """Send one install event. Failures only produce a warning."""
        try:
            await self._post_install(package_name)
        except Exception as e:
            logger.warning(
                "Failed to track package installation",
                package=package_name,
                error=str(e),
            )

    async def _post_install(self, package_name: str) -> None:
        url = self.install_url(package_name)
        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        ) as session:
            async with session.post(
                url, headers={"Content-Type": "application/json"}
            ) as response:
                if not 200 <= response.status < 300:
                    raise TelemetryError(
                        f"Failed to track installation: {response.status} {response.reason}"
                    )

        logger.debug("Installation tracked", package=package_name)

    async def report_if_allowed(self, package_name: str) -> bool:
        """Check consent and report the install if granted.

        Returns:
            The consent decision
        """
        allowed = self.check_analytics_consent()
        if allowed:
            await self.report(package_name)
        return allowed
