"""Tests for configuration resolution."""

import json
from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from gitbook_mcp.config import (
    GitBookSettings,
    configure_logging,
    extract_identifiers,
    find_instruction_defaults,
    instruction_files,
    load_settings,
    resolve_config,
    resolve_identifier,
)
from gitbook_mcp.exceptions import MissingConfigurationError


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestExtractIdentifiers:
    """Test suite for pattern extraction from instruction text."""

    def test_env_style_keys(self) -> None:
        text = "GITBOOK_ORGANIZATION_ID=org_abc\nGITBOOK_SPACE_ID=space_xyz\n"
        assert extract_identifiers(text) == {
            "organization_id": "org_abc",
            "space_id": "space_xyz",
        }

    def test_markdown_keys_are_case_insensitive(self) -> None:
        text = "## GitBook\n- **GitBook Organization ID**: `ORG123`\n- **Space id**: SPC-9\n"
        assert extract_identifiers(text) == {"organization_id": "ORG123", "space_id": "SPC-9"}

    def test_synonym_keys(self) -> None:
        assert extract_identifiers("org id: o1") == {"organization_id": "o1"}
        assert extract_identifiers("Organization ID = o2") == {"organization_id": "o2"}

    def test_specific_key_wins_over_generic(self) -> None:
        text = "space id: generic\ngitbook space id: specific\n"
        assert extract_identifiers(text)["space_id"] == "specific"

    def test_url_supplies_both_fields(self) -> None:
        text = "Docs live at https://app.gitbook.com/o/orgFromUrl/s/spaceFromUrl/intro"
        assert extract_identifiers(text) == {
            "organization_id": "orgFromUrl",
            "space_id": "spaceFromUrl",
        }

    def test_url_without_space(self) -> None:
        assert extract_identifiers("https://app.gitbook.com/o/onlyOrg/home") == {
            "organization_id": "onlyOrg"
        }

    def test_key_wins_over_url(self) -> None:
        text = "GITBOOK_SPACE_ID: keyed\nhttps://app.gitbook.com/o/o1/s/fromUrl\n"
        assert extract_identifiers(text) == {"organization_id": "o1", "space_id": "keyed"}

    def test_placeholders_are_ignored(self) -> None:
        assert extract_identifiers("GITBOOK_SPACE_ID: <id>") == {}

    def test_value_must_be_on_the_key_line(self) -> None:
        assert extract_identifiers("**Space ID**:\nTODO fill in later\n") == {}
        assert extract_identifiers("GITBOOK_ORGANIZATION_ID=\norg_next_line\n") == {}

    def test_no_match(self) -> None:
        assert extract_identifiers("Nothing about documentation here.") == {}


class TestInstructionFiles:
    """Test suite for the instruction file search."""

    def test_search_order(self, tmp_path: Path) -> None:
        write(tmp_path / "CLAUDE.md", "GITBOOK_SPACE_ID: from_claude")
        write(tmp_path / ".github" / "copilot-instructions.md", "GITBOOK_SPACE_ID: from_copilot")
        write(tmp_path / ".cursor" / "rules" / "b.mdc", "x")
        write(tmp_path / ".cursor" / "rules" / "a.md", "x")

        names = [path.relative_to(tmp_path).as_posix() for path in instruction_files(tmp_path)]
        assert names == [
            ".github/copilot-instructions.md",
            ".cursor/rules/a.md",
            ".cursor/rules/b.mdc",
            "CLAUDE.md",
        ]
        value, path = find_instruction_defaults(tmp_path)["space_id"]
        assert value == "from_copilot"
        assert path.name == "copilot-instructions.md"

    def test_fields_resolve_independently(self, tmp_path: Path) -> None:
        write(tmp_path / ".cursorrules", "GITBOOK_SPACE_ID: space_a")
        write(tmp_path / "AGENTS.md", "GITBOOK_ORGANIZATION_ID: org_b\nGITBOOK_SPACE_ID: space_b")

        found = find_instruction_defaults(tmp_path)
        assert found["space_id"][0] == "space_a"
        assert found["organization_id"][0] == "org_b"

    def test_missing_directory_contents(self, tmp_path: Path) -> None:
        assert find_instruction_defaults(tmp_path) == {}

    def test_unreadable_file_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "CLAUDE.md").write_bytes(b"\xff\xfe\xfa not utf-8")
        write(tmp_path / "AGENTS.md", "GITBOOK_SPACE_ID: good")
        assert find_instruction_defaults(tmp_path)["space_id"][0] == "good"


class TestGitBookSettings:
    """Test suite for the environment layer."""

    def test_reads_prefixed_environment(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITBOOK_API_TOKEN", "gb_env")
        monkeypatch.setenv("GITBOOK_SPACE_ID", "space_env")
        settings = load_settings(clean_env)
        assert settings.api_token == "gb_env"
        assert settings.space_id == "space_env"
        assert settings.organization_id is None

    def test_blank_values_are_unset(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITBOOK_ORGANIZATION_ID", "   ")
        assert load_settings(clean_env).organization_id is None

    def test_env_local_overrides_env_file(self, clean_env: Path) -> None:
        write(clean_env / ".env", "GITBOOK_API_TOKEN=from_env\nGITBOOK_SPACE_ID=space_env\n")
        write(clean_env / ".env.local", "GITBOOK_API_TOKEN=from_env_local\n")
        settings = load_settings(clean_env)
        assert settings.api_token == "from_env_local"
        assert settings.space_id == "space_env"

    def test_env_files_override_process_environment(
        self, clean_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write(clean_env / ".env.local", "GITBOOK_API_TOKEN=from_file\n")
        monkeypatch.setenv("GITBOOK_API_TOKEN", "from_process")
        monkeypatch.setenv("GITBOOK_SPACE_ID", "space_process")
        settings = load_settings(clean_env)
        assert settings.api_token == "from_file"
        # Keys missing from the files still come from the process
        assert settings.space_id == "space_process"

    def test_env_file_overrides_process_environment(
        self, clean_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write(clean_env / ".env", "GITBOOK_ORGANIZATION_ID=org_file\n")
        monkeypatch.setenv("GITBOOK_ORGANIZATION_ID", "org_process")
        assert load_settings(clean_env).organization_id == "org_file"

    def test_log_format_is_case_insensitive(
        self, clean_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITBOOK_LOG_FORMAT", "JSON")
        assert load_settings(clean_env).log_format == "json"

    def test_unknown_log_format_is_rejected(
        self, clean_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITBOOK_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            load_settings(clean_env)


class TestConfigureLogging:
    """Test suite for the logging setup."""

    @pytest.mark.usefixtures("reset_logging")
    def test_logs_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO")
        structlog.get_logger("gitbook_mcp.test").info("space_listed", space_id="space_1")

        out, err = capsys.readouterr()
        assert out == ""
        assert "space_listed" in err
        assert "space_id=space_1" in err

    @pytest.mark.usefixtures("reset_logging")
    def test_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO", "json")
        structlog.get_logger("gitbook_mcp.test").info("space_listed", space_id="space_1")

        out, err = capsys.readouterr()
        assert out == ""
        record = json.loads(err.strip().splitlines()[-1])
        assert record["event"] == "space_listed"
        assert record["space_id"] == "space_1"
        assert record["level"] == "info"

    @pytest.mark.usefixtures("reset_logging")
    def test_level_filters_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("WARNING")
        structlog.get_logger("gitbook_mcp.test").info("quiet_event")

        assert "quiet_event" not in capsys.readouterr().err


class TestResolveConfig:
    """Test suite for source precedence."""

    def test_precedence_per_field(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITBOOK_ORGANIZATION_ID", "org_env")
        write(clean_env / "CLAUDE.md", "GITBOOK_ORGANIZATION_ID: org_file")

        # CLI wins over file and environment
        config = resolve_config("org_cli", project_dir=clean_env)
        assert config.organization_id == "org_cli"

        # Without the CLI value the file wins
        config = resolve_config(project_dir=clean_env)
        assert config.organization_id == "org_file"

        # Without the file the environment wins
        (clean_env / "CLAUDE.md").unlink()
        config = resolve_config(project_dir=clean_env)
        assert config.organization_id == "org_env"

        # Without any source the field is unset
        monkeypatch.delenv("GITBOOK_ORGANIZATION_ID")
        config = resolve_config(project_dir=clean_env)
        assert config.organization_id is None

    def test_cli_flag_beats_environment(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITBOOK_ORGANIZATION_ID", "org_2")
        config = resolve_config(cli_organization_id="org_1", project_dir=clean_env)
        assert config.organization_id == "org_1"

    def test_fields_use_different_sources(self, clean_env: Path) -> None:
        write(clean_env / ".github" / "copilot-instructions.md", "GITBOOK_SPACE_ID: space_file")
        settings = GitBookSettings(
            _env_file=None, api_token="gb_test", organization_id="org_env", space_id="space_env"
        )
        config = resolve_config(settings=settings, project_dir=clean_env)
        assert config.api_token == "gb_test"
        assert config.organization_id == "org_env"
        assert config.space_id == "space_file"

    def test_missing_token_does_not_raise(self, clean_env: Path) -> None:
        config = resolve_config(project_dir=clean_env)
        assert config.api_token is None

    def test_config_is_immutable(self, clean_env: Path) -> None:
        config = resolve_config("org_1", project_dir=clean_env)
        with pytest.raises(AttributeError):
            config.organization_id = "other"  # type: ignore[misc]

    def test_repr_hides_token(self) -> None:
        settings = GitBookSettings(_env_file=None, api_token="gb_secret")
        config = resolve_config(settings=settings, project_dir=Path("/nonexistent"))
        assert "gb_secret" not in repr(config)


class TestResolveIdentifier:
    """Test suite for default substitution."""

    def test_explicit_value_wins(self) -> None:
        assert resolve_identifier("explicit", "default", "space_id") == "explicit"

    def test_falls_back_to_default(self) -> None:
        assert resolve_identifier(None, "default", "space_id") == "default"

    def test_missing_names_every_source(self) -> None:
        with pytest.raises(MissingConfigurationError) as exc_info:
            resolve_identifier(None, None, "organization_id")

        message = str(exc_info.value)
        assert exc_info.value.field == "organization_id"
        assert "--organization-id" in message
        assert "instruction file" in message
        assert "GITBOOK_ORGANIZATION_ID environment variable" in message

    def test_missing_space_message(self) -> None:
        with pytest.raises(MissingConfigurationError) as exc_info:
            resolve_identifier("", None, "space_id")

        message = str(exc_info.value)
        assert "--space-id" in message
        assert "GITBOOK_SPACE_ID" in message
