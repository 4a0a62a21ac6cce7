"""Access to the Claude desktop configuration document."""

import json
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from .exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

CONFIG_FILENAME = "claude_desktop_config.json"


def get_default_config_path() -> Path:
    """Return the platform-specific path of the Claude desktop config."""
    system = platform.system().lower()

    if system == "windows":
        app_data = os.environ.get("APPDATA") or str(
            Path.home() / "AppData" / "Roaming"
        )
        return Path(app_data) / "Claude" / CONFIG_FILENAME
    if system == "darwin":
        return (
            Path.home() / "Library" / "Application Support" / "Claude" / CONFIG_FILENAME
        )
    return Path.home() / ".config" / "Claude" / CONFIG_FILENAME


def sanitize_server_name(package_name: str) -> str:
    """Turn a package name into its key in the ``mcpServers`` map.

    Install and uninstall must both go through this function, otherwise
    installed packages can no longer be found by name.
    """
    return package_name.replace("/", "-")


def build_server_entry(
    package_name: str, env: Optional[Dict[str, str]], runtime: Optional[str]
) -> Dict[str, Any]:
    """Build the registration record Claude uses to launch a server."""
    if runtime == "python":
        entry: Dict[str, Any] = {"command": "uvx", "args": [package_name]}
    else:
        entry = {"command": "npx", "args": ["-y", package_name]}

    if runtime:
        entry["runtime"] = runtime
    if env:
        entry["env"] = dict(env)
    return entry


class HostConfigStore:
    """Reads and writes the server registrations in the Claude config."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = Path(config_file) if config_file else get_default_config_path()

    def get_config_path(self) -> Path:
        """Return the path of the config document this store edits."""
        return self.config_file

    def read_config(self) -> Dict[str, Any]:
        """Load the config document.

        Returns:
            The parsed document, or an empty dict when the file does not exist

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to read Claude config: {str(e)}",
                {"path": str(self.config_file)},
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Claude config must be a JSON object",
                {"path": str(self.config_file)},
            )
        return data

    def write_config(self, config: Dict[str, Any]) -> None:
        """Overwrite the config document.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(config, f, indent=2)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to write Claude config: {str(e)}",
                {"path": str(self.config_file)},
            )

        logger.debug("Claude config written", path=str(self.config_file))

    def install_mcp_server(
        self,
        package_name: str,
        env: Optional[Dict[str, str]] = None,
        runtime: Optional[str] = None,
    ) -> None:
        """Register a package under its sanitized name and persist the config."""
        config = self.read_config()
        servers = config.get("mcpServers")
        if not isinstance(servers, dict):
            servers = {}
            config["mcpServers"] = servers

        server_name = sanitize_server_name(package_name)
        servers[server_name] = build_server_entry(package_name, env, runtime)
        self.write_config(config)

        logger.info(
            "Server registered",
            package=package_name,
            server_name=server_name,
            env_vars=sorted(env) if env else [],
        )
