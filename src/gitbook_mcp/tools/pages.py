"""Page-related MCP tools."""

import json
from typing import Literal

from mcp.server.fastmcp import FastMCP

from gitbook_mcp.client import GitBookClient


def register_page_tools(server: FastMCP, client: GitBookClient) -> None:
    """Register page-related tools with the MCP server."""

    @server.tool()
    async def get_page_content(
        page_id: str,
        space_id: str | None = None,
        format: Literal["document", "markdown"] | None = None,
        metadata: bool | None = None,
        computed: bool | None = None,
    ) -> str:
        """Get the content of a page in a GitBook space.

        Args:
            page_id: The ID of the page
            space_id: The space ID (defaults to the configured space)
            format: Document format to return, "document" or "markdown"
            metadata: Whether to include revision metadata
            computed: Whether to include computed revision data
        """
        result = await client.get_page_content(
            page_id,
            space_id,
            format=format,
            metadata=metadata,
            computed=computed,
        )
        return json.dumps(result, indent=2, default=str)

    @server.tool()
    async def get_page_by_path(page_path: str, space_id: str | None = None) -> str:
        """Get a page by its path, e.g. "getting-started/installation".

        Args:
            page_path: The path of the page within the space
            space_id: The space ID (defaults to the configured space)
        """
        result = await client.get_page_by_path(page_path, space_id)
        return json.dumps(result, indent=2, default=str)
