"""File-related MCP tools."""

import json

from mcp.server.fastmcp import FastMCP

from gitbook_mcp.client import GitBookClient


def register_file_tools(server: FastMCP, client: GitBookClient) -> None:
    """Register file-related tools with the MCP server."""

    @server.tool()
    async def get_space_files(space_id: str | None = None) -> str:
        """List all files uploaded to a GitBook space.

        Args:
            space_id: The space ID (defaults to the configured space)
        """
        result = await client.list_space_files(space_id)
        return json.dumps(result, indent=2, default=str)

    @server.tool()
    async def get_file(file_id: str, space_id: str | None = None) -> str:
        """Get details of a file, including its download URL.

        Args:
            file_id: The ID of the file
            space_id: The space ID (defaults to the configured space)
        """
        result = await client.get_file(file_id, space_id)
        return json.dumps(result, indent=2, default=str)
