"""Package catalog loading and lookup."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from .config.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EnvVarRequirement:
    """A variable a package needs in its environment."""

    description: str
    required: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnvVarRequirement":
        """Create requirement from its catalog record."""
        return cls(
            description=data.get("description", ""),
            required=bool(data.get("required", True)),
        )


@dataclass(frozen=True)
class Package:
    """An installable MCP server as described by the catalog."""

    name: str
    runtime: str
    description: str = ""
    vendor: str = ""
    source_url: str = ""
    homepage: str = ""
    license: str = ""
    required_env_vars: Optional[Dict[str, EnvVarRequirement]] = None
    is_installed: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Package":
        """Create package from a catalog record (camelCase keys)."""
        env_vars = data.get("requiredEnvVars")
        required_env_vars = None
        if env_vars:
            required_env_vars = {
                key: EnvVarRequirement.from_dict(value)
                for key, value in env_vars.items()
            }

        return cls(
            name=data["name"],
            runtime=data.get("runtime", "node"),
            description=data.get("description", ""),
            vendor=data.get("vendor", ""),
            source_url=data.get("sourceUrl", ""),
            homepage=data.get("homepage", ""),
            license=data.get("license", ""),
            required_env_vars=required_env_vars,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a catalog-style dictionary."""
        data: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "vendor": self.vendor,
            "sourceUrl": self.source_url,
            "homepage": self.homepage,
            "license": self.license,
            "runtime": self.runtime,
        }
        if self.required_env_vars:
            data["requiredEnvVars"] = {
                key: {"description": req.description, "required": req.required}
                for key, req in self.required_env_vars.items()
            }
        if self.is_installed is not None:
            data["isInstalled"] = self.is_installed
        return data


class PackageCatalog:
    """Read-only view over the package list JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[Package]:
        """Read every package from the catalog file.

        Raises:
            ConfigurationError: If the catalog is missing or malformed
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to load package list: {str(e)}", {"path": str(self.path)}
            )

        if not isinstance(records, list):
            raise ConfigurationError(
                "Package list must be a JSON array", {"path": str(self.path)}
            )

        try:
            packages = [Package.from_dict(record) for record in records]
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigurationError(
                f"Invalid package record: {str(e)}", {"path": str(self.path)}
            )

        logger.debug("Package list loaded", count=len(packages))
        return packages

    def get(self, name: str) -> Optional[Package]:
        """Find a package by exact name."""
        for package in self.load():
            if package.name == name:
                return package
        return None

    def search(self, query: str) -> List[Package]:
        """Case-insensitive substring search over names and descriptions."""
        needle = query.lower()
        return [
            package
            for package in self.load()
            if needle in package.name.lower() or needle in package.description.lower()
        ]
