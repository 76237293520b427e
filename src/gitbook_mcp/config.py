"""Configuration resolution for the GitBook MCP server.

Every field of the effective configuration is resolved independently, highest
precedence first:

1. explicit command line flag
2. the first project instruction file that mentions a value for the field
3. ``.env.local``, then ``.env``, then the process environment
"""

import logging
import re
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from gitbook_mcp.exceptions import MissingConfigurationError

logger = structlog.get_logger(__name__)

GITBOOK_API_URL = "https://api.gitbook.com/v1"

# Checked in this order; globs expand in name order.
INSTRUCTION_FILES = (
    ".github/copilot-instructions.md",
    ".cursorrules",
    ".cursor/rules/*.md",
    ".cursor/rules/*.mdc",
    ".windsurfrules",
    ".clinerules",
    "CLAUDE.md",
    "AGENTS.md",
    "GEMINI.md",
)

_SEP = r"[ \t_-]*"
_VALUE = r"[`'\"*]*[ \t]*[:=][ \t]*[`'\"*]*[ \t]*([A-Za-z0-9][\w-]*)"


def _key_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"\b{key}{_VALUE}", re.IGNORECASE)


IDENTIFIER_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    "organization_id": (
        _key_pattern(f"gitbook{_SEP}organization{_SEP}id"),
        _key_pattern(f"gitbook{_SEP}org{_SEP}id"),
        _key_pattern(f"organization{_SEP}id"),
        _key_pattern(f"org{_SEP}id"),
    ),
    "space_id": (
        _key_pattern(f"gitbook{_SEP}space{_SEP}id"),
        _key_pattern(f"space{_SEP}id"),
    ),
}

# https://app.gitbook.com/o/<organizationId>/s/<spaceId>
GITBOOK_URL_PATTERN = re.compile(
    r"app\.gitbook\.com/o/([A-Za-z0-9][\w-]*)(?:/s/([A-Za-z0-9][\w-]*))?",
    re.IGNORECASE,
)


class GitBookSettings(BaseSettings):
    """Settings read from the environment and ``.env`` files."""

    model_config = SettingsConfigDict(
        env_prefix="GITBOOK_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_token: str | None = None
    organization_id: str | None = None
    space_id: str | None = None

    # Logging
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Let ``.env.local`` and ``.env`` override the process environment."""
        return init_settings, dotenv_settings, env_settings, file_secret_settings

    @field_validator("api_token", "organization_id", "space_id", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        """Treat empty or whitespace-only values as unset."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, value: Any) -> Any:
        """Accept any casing, e.g. ``JSON``."""
        if isinstance(value, str):
            return value.strip().lower()
        return value


@dataclass(frozen=True)
class GitBookConfig:
    """Effective configuration, built once at startup."""

    api_token: str | None = field(default=None, repr=False)
    organization_id: str | None = None
    space_id: str | None = None


def load_settings(project_dir: Path | None = None) -> GitBookSettings:
    """Load environment settings, reading ``.env`` files from ``project_dir``."""
    base = project_dir if project_dir is not None else Path.cwd()
    return GitBookSettings(_env_file=(base / ".env", base / ".env.local"))


def extract_identifiers(text: str) -> dict[str, str]:
    """Pull GitBook identifiers out of free-form instruction text.

    Key patterns are tried in order and the first match wins. A GitBook app
    URL is used for any field that no key pattern matched.
    """
    found: dict[str, str] = {}
    for name, patterns in IDENTIFIER_PATTERNS.items():
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                found[name] = match.group(1)
                break

    url_match = GITBOOK_URL_PATTERN.search(text)
    if url_match:
        found.setdefault("organization_id", url_match.group(1))
        if url_match.group(2):
            found.setdefault("space_id", url_match.group(2))
    return found


def instruction_files(project_dir: Path) -> list[Path]:
    """List existing instruction files in search order."""
    paths: list[Path] = []
    for entry in INSTRUCTION_FILES:
        if "*" in entry:
            paths.extend(sorted(project_dir.glob(entry)))
        else:
            paths.append(project_dir / entry)
    return [path for path in paths if path.is_file()]


def find_instruction_defaults(project_dir: Path) -> dict[str, tuple[str, Path]]:
    """Map each field to the first (value, file) found in the instruction files."""
    found: dict[str, tuple[str, Path]] = {}
    for path in instruction_files(project_dir):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("instruction_file_unreadable", path=str(path), error=str(exc))
            continue
        for name, value in extract_identifiers(text).items():
            found.setdefault(name, (value, path))
        if len(found) == len(IDENTIFIER_PATTERNS):
            break
    return found


def _pick(
    name: str,
    cli_value: str | None,
    from_files: dict[str, tuple[str, Path]],
    env_value: str | None,
) -> str | None:
    if cli_value:
        logger.debug("config_value_resolved", field=name, source="cli")
        return cli_value
    if name in from_files:
        value, path = from_files[name]
        logger.debug("config_value_resolved", field=name, source=str(path))
        return value
    if env_value:
        logger.debug("config_value_resolved", field=name, source="environment")
        return env_value
    return None


def resolve_config(
    cli_organization_id: str | None = None,
    cli_space_id: str | None = None,
    *,
    settings: GitBookSettings | None = None,
    project_dir: Path | None = None,
) -> GitBookConfig:
    """Build the effective configuration. Never raises for missing values."""
    project_dir = project_dir if project_dir is not None else Path.cwd()
    if settings is None:
        settings = load_settings(project_dir)
    from_files = find_instruction_defaults(project_dir)

    return GitBookConfig(
        api_token=settings.api_token,
        organization_id=_pick(
            "organization_id", cli_organization_id, from_files, settings.organization_id
        ),
        space_id=_pick("space_id", cli_space_id, from_files, settings.space_id),
    )


def resolve_identifier(explicit: str | None, default: str | None, name: str) -> str:
    """Return the explicit value, else the configured default.

    Raises:
        MissingConfigurationError: If neither is available.
    """
    if explicit:
        return explicit
    if default:
        return default
    raise MissingConfigurationError(name)


def configure_logging(level: str = "WARNING", fmt: str = "console") -> None:
    """Configure structured logging with structlog.

    Output goes to stderr; stdout is reserved for the MCP stdio transport.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
