"""mcp-get: install MCP server packages into the Claude desktop app."""

from .__version__ import __version__

__all__ = ["__version__"]
