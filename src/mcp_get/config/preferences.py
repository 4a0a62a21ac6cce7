"""Per-user preference storage for mcp-get."""

import json
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


def get_default_preferences_path() -> Path:
    """Return the platform-specific location of the preferences file."""
    if platform.system().lower() == "windows":
        app_data = os.environ.get("APPDATA") or str(
            Path.home() / "AppData" / "Roaming"
        )
        return Path(app_data) / "mcp-get" / "preferences.json"

    return Path.home() / ".mcp-get" / "preferences.json"


class PreferenceStore:
    """Reads and writes the single-record preferences document.

    The file is the only source of truth: nothing is cached between calls,
    so every read reflects what is currently on disk.
    """

    def __init__(self, preferences_file: Optional[Path] = None):
        self.preferences_file = (
            Path(preferences_file) if preferences_file else get_default_preferences_path()
        )

    def read_preferences(self) -> Dict[str, Any]:
        """Load preferences, returning an empty dict when missing or invalid."""
        if not self.preferences_file.exists():
            return {}

        try:
            with open(self.preferences_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.debug(
                "Ignoring unreadable preferences file",
                path=str(self.preferences_file),
                error=str(e),
            )
            return {}

        if not isinstance(data, dict):
            return {}
        return data

    def write_preferences(self, preferences: Dict[str, Any]) -> None:
        """Persist preferences, creating the parent directory if needed."""
        self.preferences_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.preferences_file, "w", encoding="utf-8") as f:
            json.dump(preferences, f, indent=2)

        logger.debug("Preferences saved", path=str(self.preferences_file))
