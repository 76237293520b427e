"""GitBook REST API client with bearer-token authentication."""

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from gitbook_mcp import __version__
from gitbook_mcp.config import GITBOOK_API_URL, GitBookConfig, resolve_identifier
from gitbook_mcp.exceptions import MissingConfigurationError, UpstreamRequestError

logger = structlog.get_logger(__name__)

USER_AGENT = f"gitbook-mcp/{__version__}"


def _segment(value: str) -> str:
    return quote(value, safe="")


class GitBookClient:
    """HTTP client for the GitBook REST API.

    Each method issues exactly one request. Optional organization and space
    identifiers fall back to the defaults in the configuration.
    """

    def __init__(
        self,
        config: GitBookConfig,
        *,
        base_url: str = GITBOOK_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.api_token:
            raise MissingConfigurationError("api_token")
        self.config = config
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=30.0, transport=transport
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    def _organization(self, organization_id: str | None) -> str:
        return _segment(
            resolve_identifier(organization_id, self.config.organization_id, "organization_id")
        )

    def _space(self, space_id: str | None) -> str:
        return _segment(resolve_identifier(space_id, self.config.space_id, "space_id"))

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        extra_headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated API request and return the decoded JSON body.

        Raises:
            UpstreamRequestError: If the API answers with a non-2xx status.
        """
        headers = {
            "Authorization": f"Bearer {self.config.api_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if extra_headers:
            headers.update(extra_headers)

        logger.debug("gitbook_request", method=method, endpoint=endpoint)
        response = await self._client.request(
            method, endpoint, headers=headers, params=params, json=body
        )
        if response.is_success:
            return response.json()
        raise self._error_from(response)

    @staticmethod
    def _error_from(response: httpx.Response) -> UpstreamRequestError:
        """Map a failed response to an error, preferring the API's own message."""
        try:
            error = response.json()["error"]
            code, detail = error["code"], error["message"]
        except (ValueError, KeyError, TypeError):
            logger.warning(
                "gitbook_request_failed",
                status_code=response.status_code,
                url=str(response.request.url),
            )
            return UpstreamRequestError(response.status_code, response.reason_phrase)

        logger.warning(
            "gitbook_request_failed",
            status_code=response.status_code,
            url=str(response.request.url),
            code=code,
        )
        return UpstreamRequestError(
            response.status_code, response.reason_phrase, code=code, detail=detail
        )

    # --- User endpoints ---

    async def get_current_user(self) -> dict:
        """Get the user that owns the API token."""
        return await self.request("/user")

    # --- Organization endpoints ---

    async def list_organizations(self) -> list:
        """List organizations the token can access."""
        result = await self.request("/orgs")
        return result["items"]

    # --- Space endpoints ---

    async def list_spaces(self, organization_id: str | None = None) -> list:
        """List spaces of an organization."""
        result = await self.request(f"/orgs/{self._organization(organization_id)}/spaces")
        return result["items"]

    async def get_space(self, space_id: str | None = None) -> dict:
        """Get space metadata."""
        return await self.request(f"/spaces/{self._space(space_id)}")

    async def get_space_content(self, space_id: str | None = None) -> list:
        """Get the page tree of the space's current revision."""
        result = await self.request(f"/spaces/{self._space(space_id)}/content")
        return result.get("pages", [])

    async def search_content(self, query: str, space_id: str | None = None) -> dict:
        """Search the content of a space."""
        return await self.request(
            f"/spaces/{self._space(space_id)}/search", params={"query": query}
        )

    # --- Page endpoints ---

    async def get_page_content(
        self,
        page_id: str,
        space_id: str | None = None,
        format: str | None = None,
        metadata: bool | None = None,
        computed: bool | None = None,
    ) -> dict:
        """Get a page by ID, optionally as markdown."""
        params: dict[str, str | bool] = {}
        if format is not None:
            params["format"] = format
        if metadata is not None:
            params["metadata"] = metadata
        if computed is not None:
            params["computed"] = computed
        return await self.request(
            f"/spaces/{self._space(space_id)}/content/page/{_segment(page_id)}",
            params=params or None,
        )

    async def get_page_by_path(self, page_path: str, space_id: str | None = None) -> dict:
        """Get a page by its path in the space."""
        return await self.request(
            f"/spaces/{self._space(space_id)}/content/path/{_segment(page_path.strip('/'))}"
        )

    # --- File endpoints ---

    async def list_space_files(self, space_id: str | None = None) -> list:
        """List files uploaded to a space."""
        result = await self.request(f"/spaces/{self._space(space_id)}/content/files")
        return result["items"]

    async def get_file(self, file_id: str, space_id: str | None = None) -> dict:
        """Get a file's metadata and download URL."""
        return await self.request(
            f"/spaces/{self._space(space_id)}/content/files/{_segment(file_id)}"
        )

    # --- Collection endpoints ---

    async def list_collections(self, organization_id: str | None = None) -> list:
        """List collections of an organization."""
        result = await self.request(
            f"/orgs/{self._organization(organization_id)}/collections"
        )
        return result["items"]

    async def get_collection(self, collection_id: str) -> dict:
        """Get collection metadata."""
        return await self.request(f"/collections/{_segment(collection_id)}")

    async def list_collection_spaces(self, collection_id: str) -> list:
        """List spaces in a collection."""
        result = await self.request(f"/collections/{_segment(collection_id)}/spaces")
        return result["items"]
