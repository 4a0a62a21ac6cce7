"""Application configuration settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


DEFAULT_ANALYTICS_URL = "https://mcp-get.com"
BUNDLED_PACKAGE_LIST = Path(__file__).resolve().parent.parent / "packages" / "package-list.json"


class LoggingConfig(BaseSettings):
    """Logging configuration settings."""

    level: str = Field(default="WARNING", description="Log level")
    file_path: Optional[str] = Field(default=None, description="Log file path")
    json_format: bool = Field(default=False, description="Use JSON log format")

    class Config:
        env_prefix = "MCP_GET_LOG_"


class Settings(BaseSettings):
    """Main application settings.

    Every path left unset falls back to the platform default computed by the
    store that owns it.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    claude_config: Optional[Path] = Field(
        default=None, description="Claude desktop config file override"
    )
    preferences_file: Optional[Path] = Field(
        default=None, description="Preferences file override"
    )
    package_list: Path = Field(
        default=BUNDLED_PACKAGE_LIST, description="Package catalog JSON file"
    )
    analytics_url: str = Field(
        default=DEFAULT_ANALYTICS_URL, description="Installation analytics service"
    )
    analytics_timeout: float = Field(
        default=10.0, description="Analytics request timeout in seconds"
    )
    restart_delay: float = Field(
        default=2.0, description="Pause between closing and relaunching Claude"
    )

    class Config:
        env_prefix = "MCP_GET_"

    def get_log_file_path(self) -> Optional[Path]:
        """Get the log file path if configured."""
        if self.logging.file_path:
            return Path(self.logging.file_path).expanduser()
        return None


def get_settings() -> Settings:
    """Build settings from the current environment.

    Settings are not cached so that environment changes between operations
    are always picked up.
    """
    return Settings()
