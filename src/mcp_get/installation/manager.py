"""Installation lifecycle management for MCP server packages."""

from dataclasses import replace
from typing import Any, Dict, Optional

import structlog

from ..catalog import Package, PackageCatalog
from ..config.exceptions import PackageNotFoundError
from ..config.host_config import HostConfigStore, sanitize_server_name
from ..config.preferences import PreferenceStore
from ..config.settings import Settings, get_settings
from ..management.host_process import (
    HostProcessController,
    get_host_controller,
    prompt_for_restart,
)
from ..prompts import ClickPrompter, Prompter
from ..telemetry import TelemetryReporter
from .env_resolver import EnvironmentResolver
from .runtime import check_uv_installed, prompt_for_uv_install

logger = structlog.get_logger(__name__)


def _configured_servers(config: Dict[str, Any]) -> Dict[str, Any]:
    servers = config.get("mcpServers")
    return servers if isinstance(servers, dict) else {}


class InstallationManager:
    """Installs and uninstalls packages in the Claude desktop config.

    Telemetry and the restart prompt are best-effort; a failure to update
    the config itself is logged and re-raised to the caller.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        prompter: Optional[Prompter] = None,
        config_store: Optional[HostConfigStore] = None,
        catalog: Optional[PackageCatalog] = None,
        host_controller: Optional[HostProcessController] = None,
        telemetry: Optional[TelemetryReporter] = None,
        resolver: Optional[EnvironmentResolver] = None,
    ):
        self.settings = settings or get_settings()
        self.prompter = prompter or ClickPrompter()
        self.config_store = config_store or HostConfigStore(self.settings.claude_config)
        self.catalog = catalog or PackageCatalog(self.settings.package_list)
        self.host_controller = host_controller or get_host_controller(
            restart_delay=self.settings.restart_delay
        )
        self.telemetry = telemetry or TelemetryReporter(
            PreferenceStore(self.settings.preferences_file),
            self.prompter,
            base_url=self.settings.analytics_url,
            timeout=self.settings.analytics_timeout,
        )
        self.resolver = resolver or EnvironmentResolver(
            self.prompter, self.config_store.get_config_path()
        )

    async def install_package(self, package: Package) -> None:
        """Register a package with Claude and offer to restart it."""
        log = logger.bind(package=package.name)
        try:
            if package.runtime == "python":
                await self._ensure_uv()

            env_vars = self.resolver.resolve(package)

            self.config_store.install_mcp_server(package.name, env_vars, package.runtime)
            self.prompter.echo("Updated Claude desktop configuration")
            log.info("Package installed", runtime=package.runtime)

            await self.telemetry.report_if_allowed(package.name)

            await prompt_for_restart(self.host_controller, self.prompter)
        except Exception as e:
            log.error("Failed to install package", error=str(e))
            raise

    async def uninstall_package(self, package_name: str) -> None:
        """Remove a package's server entry and offer to restart Claude."""
        log = logger.bind(package=package_name)
        try:
            config = self.config_store.read_config()
            server_name = sanitize_server_name(package_name)
            servers = config.get("mcpServers")

            if not isinstance(servers, dict) or server_name not in servers:
                self.prompter.echo(f"Package {package_name} is not installed.")
                return

            del servers[server_name]
            self.config_store.write_config(config)
            self.prompter.echo(f"\nUninstalled {package_name}")
            log.info("Package uninstalled", server_name=server_name)

            await prompt_for_restart(self.host_controller, self.prompter)
        except Exception as e:
            log.error("Failed to uninstall package", error=str(e))
            raise

    def is_package_installed(self, package_name: str) -> bool:
        """Check the raw package name against the configured servers.

        Unlike uninstall, the name is not sanitized, so names containing
        ``/`` are reported as not installed.
        """
        config = self.config_store.read_config()
        return package_name in _configured_servers(config)

    def get_package_details(self, package_name: str) -> Package:
        """Look up a package and mark whether it is currently installed.

        Raises:
            PackageNotFoundError: If the catalog has no such package
        """
        package = self.catalog.get(package_name)
        if package is None:
            raise PackageNotFoundError(package_name)

        return replace(package, is_installed=self.is_package_installed(package_name))

    def list_installed_servers(self) -> Dict[str, Any]:
        """Return the server entries currently in the Claude config."""
        return dict(_configured_servers(self.config_store.read_config()))

    async def _ensure_uv(self) -> None:
        if await check_uv_installed():
            return

        installed = await prompt_for_uv_install(self.prompter)
        if not installed:
            self.prompter.echo(
                "Proceeding with installation, but uvx commands may fail..."
            )
            logger.warning("uv missing, continuing installation")
