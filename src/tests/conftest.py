"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from mcp_get.catalog import PackageCatalog
from mcp_get.config.host_config import HostConfigStore
from mcp_get.config.preferences import PreferenceStore
from mcp_get.config.settings import Settings
from mcp_get.installation.manager import InstallationManager
from mcp_get.management.host_process import HostProcessController
from mcp_get.prompts import Prompter
from mcp_get.telemetry import TelemetryReporter


class ScriptedPrompter(Prompter):
    """Prompter that replays canned answers and records every question."""

    def __init__(
        self,
        confirms: Optional[List[bool]] = None,
        texts: Optional[List[Optional[str]]] = None,
    ):
        self.confirms = list(confirms or [])
        self.texts = list(texts or [])
        self.questions: List[str] = []
        self.messages: List[str] = []

    def confirm(self, message: str, default: bool = True) -> bool:
        self.questions.append(message)
        if not self.confirms:
            raise AssertionError(f"Unexpected confirm prompt: {message}")
        return self.confirms.pop(0)

    def ask_text(self, message: str, name: str, required: bool = True) -> Optional[str]:
        self.questions.append(message)
        if not self.texts:
            raise AssertionError(f"Unexpected text prompt: {message}")
        value = self.texts.pop(0)
        if not value and not required:
            return None
        return value

    def echo(self, message: str = "") -> None:
        self.messages.append(message)

    @property
    def output(self) -> str:
        return "\n".join(self.messages)


class FakeHostController(HostProcessController):
    """Host controller that never touches real processes."""

    def __init__(self, running: bool = False, fail_restart: bool = False):
        super().__init__(restart_delay=0)
        self.running = running
        self.fail_restart = fail_restart
        self.restart_calls = 0

    def _matches(self, process) -> bool:
        return False

    async def is_host_running(self) -> bool:
        return self.running

    async def restart_host(self) -> None:
        self.restart_calls += 1
        if self.fail_restart:
            raise OSError("kill failed")


@pytest.fixture
def sample_catalog_records() -> List[Dict[str, Any]]:
    """A small package list covering both runtimes and env var shapes."""
    return [
        {
            "name": "foo/bar",
            "description": "Foo bar server",
            "runtime": "node",
            "requiredEnvVars": {
                "TOKEN": {"description": "API token", "required": True}
            },
        },
        {
            "name": "plain-server",
            "description": "Server without configuration",
            "runtime": "node",
        },
        {
            "name": "py-server",
            "description": "Python server",
            "runtime": "python",
        },
        {
            "name": "mixed-server",
            "description": "Server with optional settings",
            "runtime": "node",
            "requiredEnvVars": {
                "MIXED_KEY": {"description": "API key", "required": True},
                "MIXED_REGION": {"description": "Region", "required": False},
            },
        },
    ]


@pytest.fixture
def catalog_file(tmp_path: Path, sample_catalog_records) -> Path:
    path = tmp_path / "package-list.json"
    path.write_text(json.dumps(sample_catalog_records))
    return path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "Claude" / "claude_desktop_config.json"


@pytest.fixture
def preferences_file(tmp_path: Path) -> Path:
    return tmp_path / ".mcp-get" / "preferences.json"


@pytest.fixture
def settings(config_file, preferences_file, catalog_file) -> Settings:
    return Settings(
        claude_config=config_file,
        preferences_file=preferences_file,
        package_list=catalog_file,
        restart_delay=0,
    )


@pytest.fixture
def make_manager(settings, monkeypatch):
    """Build an InstallationManager wired to temp files and fakes."""
    monkeypatch.delenv("TOKEN", raising=False)

    def _make(
        prompter: Prompter,
        host: Optional[HostProcessController] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> InstallationManager:
        config_store = HostConfigStore(settings.claude_config)
        manager = InstallationManager(
            settings=settings,
            prompter=prompter,
            config_store=config_store,
            catalog=PackageCatalog(settings.package_list),
            host_controller=host or FakeHostController(),
            telemetry=TelemetryReporter(
                PreferenceStore(settings.preferences_file), prompter
            ),
        )
        if environ is not None:
            manager.resolver.environ = environ
        return manager

    return _make
