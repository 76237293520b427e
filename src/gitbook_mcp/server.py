"""GitBook MCP Server — exposes GitBook documentation to AI assistants."""

import argparse
import sys
from pathlib import Path

import httpx
import structlog
from mcp.server.fastmcp import FastMCP

from gitbook_mcp import __version__
from gitbook_mcp.client import GitBookClient
from gitbook_mcp.config import GitBookConfig, configure_logging, load_settings, resolve_config
from gitbook_mcp.exceptions import MissingConfigurationError
from gitbook_mcp.prompts import register_prompts
from gitbook_mcp.resources import register_resources
from gitbook_mcp.tools.collections import register_collection_tools
from gitbook_mcp.tools.files import register_file_tools
from gitbook_mcp.tools.organizations import register_organization_tools
from gitbook_mcp.tools.pages import register_page_tools
from gitbook_mcp.tools.spaces import register_space_tools

logger = structlog.get_logger(__name__)

INSTRUCTIONS = """Read and search GitBook documentation.

Use list_organizations and list_spaces to discover content, get_space_content
to browse a space's pages, search_content to find pages, and get_page_content
(format="markdown") to read them. Space and organization IDs may be omitted
when the server has defaults configured.
"""


def create_server(
    config: GitBookConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[FastMCP, GitBookClient]:
    """Create and configure the MCP server.

    Raises:
        MissingConfigurationError: If the configuration has no API token.
    """
    client = GitBookClient(config, transport=transport)
    server = FastMCP("gitbook", instructions=INSTRUCTIONS)

    # Register all tools
    register_organization_tools(server, client)
    register_space_tools(server, client)
    register_page_tools(server, client)
    register_file_tools(server, client)
    register_collection_tools(server, client)

    register_resources(server, client)
    register_prompts(server, config)

    return server, client


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="gitbook-mcp",
        description="GitBook MCP Server",
        epilog="The API token is read from the GITBOOK_API_TOKEN environment variable.",
    )
    parser.add_argument(
        "--organization-id",
        help="Default organization ID (overrides instruction files and GITBOOK_ORGANIZATION_ID)",
    )
    parser.add_argument(
        "--space-id",
        help="Default space ID (overrides instruction files and GITBOOK_SPACE_ID)",
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=None,
        help="Directory searched for instruction and .env files (default: current directory)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: GITBOOK_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


async def run(config: GitBookConfig) -> None:
    """Run the MCP server over stdio."""
    server, client = create_server(config)
    try:
        await server.run_stdio_async()
    finally:
        await client.close()


def main(argv: list[str] | None = None) -> None:
    """Entry point for the gitbook-mcp command."""
    import asyncio

    args = parse_args(argv)
    project_dir = args.project_dir if args.project_dir is not None else Path.cwd()
    settings = load_settings(project_dir)
    configure_logging(args.log_level or settings.log_level, settings.log_format)

    config = resolve_config(
        args.organization_id,
        args.space_id,
        settings=settings,
        project_dir=project_dir,
    )
    if not config.api_token:
        print(f"Error: {MissingConfigurationError('api_token')}", file=sys.stderr)
        sys.exit(1)

    logger.info(
        "gitbook_mcp_starting",
        organization_id=config.organization_id,
        space_id=config.space_id,
    )
    asyncio.run(run(config))


if __name__ == "__main__":
    main()
