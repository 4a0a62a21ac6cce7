"""Version information for mcp-get."""

__version__ = "1.0.0"
