"""Organization and user MCP tools."""

import json

from mcp.server.fastmcp import FastMCP

from gitbook_mcp.client import GitBookClient


def register_organization_tools(server: FastMCP, client: GitBookClient) -> None:
    """Register organization-related tools with the MCP server."""

    @server.tool()
    async def list_organizations() -> str:
        """List all GitBook organizations accessible with the current API token."""
        result = await client.list_organizations()
        return json.dumps(result, indent=2, default=str)

    @server.tool()
    async def get_current_user() -> str:
        """Get the GitBook user that owns the current API token."""
        result = await client.get_current_user()
        return json.dumps(result, indent=2, default=str)
