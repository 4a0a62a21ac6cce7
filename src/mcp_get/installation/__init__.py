"""Installation and uninstallation of MCP server packages."""

from .env_resolver import EnvAction, EnvironmentResolver, plan_env_actions
from .manager import InstallationManager

__all__ = [
    "EnvAction",
    "EnvironmentResolver",
    "InstallationManager",
    "plan_env_actions",
]
