"""MCP resources addressed by ``gitbook://`` URIs."""

import json

from mcp.server.fastmcp import FastMCP

from gitbook_mcp.client import GitBookClient


def register_resources(server: FastMCP, client: GitBookClient) -> None:
    """Register GitBook resources with the MCP server."""

    @server.resource(
        "gitbook://organizations",
        name="organizations",
        description="All organizations accessible with the API token",
        mime_type="application/json",
    )
    async def organizations() -> str:
        result = await client.list_organizations()
        return json.dumps(result, indent=2, default=str)

    @server.resource(
        "gitbook://spaces",
        name="default-spaces",
        description="All spaces of the configured default organization",
        mime_type="application/json",
    )
    async def default_spaces() -> str:
        result = await client.list_spaces()
        return json.dumps(result, indent=2, default=str)

    @server.resource(
        "gitbook://spaces/{organization_id}",
        name="spaces",
        description="All spaces of an organization",
        mime_type="application/json",
    )
    async def spaces(organization_id: str) -> str:
        result = await client.list_spaces(organization_id)
        return json.dumps(result, indent=2, default=str)

    @server.resource(
        "gitbook://space/{space_id}",
        name="space",
        description="Metadata of a space",
        mime_type="application/json",
    )
    async def space(space_id: str) -> str:
        result = await client.get_space(space_id)
        return json.dumps(result, indent=2, default=str)

    @server.resource(
        "gitbook://space/{space_id}/content",
        name="space-content",
        description="Page structure of a space",
        mime_type="application/json",
    )
    async def space_content(space_id: str) -> str:
        result = await client.get_space_content(space_id)
        return json.dumps(result, indent=2, default=str)
