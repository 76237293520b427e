"""GitBook MCP server: GitBook documentation for AI assistants."""

__version__ = "1.0.0"
