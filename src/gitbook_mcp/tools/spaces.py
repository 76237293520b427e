"""Space-related MCP tools."""

import json

from mcp.server.fastmcp import FastMCP

from gitbook_mcp.client import GitBookClient


def register_space_tools(server: FastMCP, client: GitBookClient) -> None:
    """Register space-related tools with the MCP server."""

    @server.tool()
    async def list_spaces(organization_id: str | None = None) -> str:
        """List the spaces of a GitBook organization.

        Args:
            organization_id: The organization ID (defaults to the configured organization)
        """
        result = await client.list_spaces(organization_id)
        return json.dumps(result, indent=2, default=str)

    @server.tool()
    async def get_space(space_id: str | None = None) -> str:
        """Get detailed information about a GitBook space.

        Args:
            space_id: The space ID (defaults to the configured space)
        """
        result = await client.get_space(space_id)
        return json.dumps(result, indent=2, default=str)

    @server.tool()
    async def get_space_content(space_id: str | None = None) -> str:
        """Get the page structure of a GitBook space.

        Args:
            space_id: The space ID (defaults to the configured space)
        """
        result = await client.get_space_content(space_id)
        return json.dumps(result, indent=2, default=str)

    @server.tool()
    async def search_content(query: str, space_id: str | None = None) -> str:
        """Search for content within a GitBook space.

        Args:
            query: The search query
            space_id: The space ID (defaults to the configured space)
        """
        result = await client.search_content(query, space_id)
        return json.dumps(result, indent=2, default=str)
