"""Exceptions shared by the configuration and catalog layers."""

from typing import Any, Dict, Optional


class ConfigurationError(Exception):
    """Configuration-related error with user-friendly messages."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize configuration error with message and optional details."""
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error message with details if available."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class PackageNotFoundError(ConfigurationError):
    """Raised when a package name has no entry in the catalog."""

    def __init__(self, package_name: str):
        super().__init__(
            f"Package {package_name} not found", {"package": package_name}
        )
        self.package_name = package_name

    def __str__(self) -> str:
        return self.message
