"""Allow ``python -m mcp_get``."""

from .main import main

main()
