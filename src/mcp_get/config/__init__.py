"""Configuration, preferences and logging for mcp-get."""

from .exceptions import ConfigurationError, PackageNotFoundError
from .host_config import HostConfigStore, sanitize_server_name
from .preferences import PreferenceStore
from .settings import Settings, get_settings

__all__ = [
    "ConfigurationError",
    "HostConfigStore",
    "PackageNotFoundError",
    "PreferenceStore",
    "Settings",
    "get_settings",
    "sanitize_server_name",
]
