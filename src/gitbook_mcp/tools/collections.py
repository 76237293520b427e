"""Collection-related MCP tools."""

import json

from mcp.server.fastmcp import FastMCP

from gitbook_mcp.client import GitBookClient


def register_collection_tools(server: FastMCP, client: GitBookClient) -> None:
    """Register collection-related tools with the MCP server."""

    @server.tool()
    async def list_collections(organization_id: str | None = None) -> str:
        """List the collections of a GitBook organization.

        Args:
            organization_id: The organization ID (defaults to the configured organization)
        """
        result = await client.list_collections(organization_id)
        return json.dumps(result, indent=2, default=str)

    @server.tool()
    async def get_collection(collection_id: str) -> str:
        """Get detailed information about a collection.

        Args:
            collection_id: The ID of the collection
        """
        result = await client.get_collection(collection_id)
        return json.dumps(result, indent=2, default=str)

    @server.tool()
    async def get_collection_spaces(collection_id: str) -> str:
        """List the spaces in a collection.

        Args:
            collection_id: The ID of the collection
        """
        result = await client.list_collection_spaces(collection_id)
        return json.dumps(result, indent=2, default=str)
