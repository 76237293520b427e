"""Exception hierarchy for the GitBook MCP server."""


class GitBookMCPError(Exception):
    """Base exception for all GitBook MCP errors."""

    def __init__(self, message: str) -> None:
        """Initialize exception with a display message."""
        self.message = message
        super().__init__(self.message)


# field -> (CLI flag, environment variable, instruction file key)
_CONFIG_SOURCES = {
    "api_token": (None, "GITBOOK_API_TOKEN", None),
    "organization_id": (
        "--organization-id",
        "GITBOOK_ORGANIZATION_ID",
        "GITBOOK_ORGANIZATION_ID: <id>",
    ),
    "space_id": ("--space-id", "GITBOOK_SPACE_ID", "GITBOOK_SPACE_ID: <id>"),
}


class MissingConfigurationError(GitBookMCPError):
    """A required value could not be resolved from any configuration source."""

    def __init__(self, field: str) -> None:
        """Initialize with the name of the unresolved field."""
        self.field = field
        flag, env_var, file_key = _CONFIG_SOURCES[field]
        if flag is None:
            message = (
                f"{env_var} is required. Provide it in one of three ways: "
                f"(1) set the {env_var} environment variable, "
                f"(2) add {env_var}=<token> to a .env.local or .env file, "
                f"(3) add it to the env block of your MCP client configuration. "
                "Get a token from https://app.gitbook.com/account/developer"
            )
        else:
            message = (
                f"No {field} was provided and no default is configured. "
                f"Pass {field} explicitly, or configure a default in one of three ways: "
                f"(1) start the server with {flag}=<id>, "
                f"(2) add '{file_key}' to a project instruction file "
                "such as .github/copilot-instructions.md, "
                f"(3) set the {env_var} environment variable."
            )
        super().__init__(message)


class UpstreamRequestError(GitBookMCPError):
    """The GitBook API answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        reason: str,
        *,
        code: int | str | None = None,
        detail: str | None = None,
    ) -> None:
        """Initialize with the HTTP status and the structured API error, if any."""
        self.status_code = status_code
        self.reason = reason
        self.code = code
        self.detail = detail
        if code is not None and detail is not None:
            super().__init__(f"{code} - {detail}")
        else:
            super().__init__(f"{status_code} {reason}")
