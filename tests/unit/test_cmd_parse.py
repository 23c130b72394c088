"""Unit tests for the parse and validate commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from monkimap_search.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _invoke(runner: CliRunner, config: Path, *args: str):
    return runner.invoke(cli, ["--config", str(config), *args])


class TestParseCommand:
    def test_text_output(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(runner, missing_config, "parse", "  kind:park", "images:007 ")
        assert result.exit_code == 0
        assert result.output.strip() == "kind:park images:7"

    def test_debug_output(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(runner, missing_config, "parse", "--format", "debug", "category")
        assert result.exit_code == 0
        assert result.output.strip() == ".word(category)"

    def test_json_output(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(
            runner, missing_config, "parse", "-f", "json", "creator:@remi_bardon", '"a b"'
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"type": "creator", "username": "remi_bardon"},
            {"type": "quoted_string", "value": "a b"},
        ]

    def test_table_output(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(runner, missing_config, "parse", "-f", "table", "properties:benefit:5")
        assert result.exit_code == 0
        assert "Qualifier" in result.output
        assert "properties" in result.output

    def test_format_from_config(self, runner: CliRunner, sample_config: Path) -> None:
        result = _invoke(runner, sample_config, "parse", "draft:only")
        assert result.exit_code == 0
        assert result.output.strip() == ".isDraft(.only)"

    def test_single_filter(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(runner, missing_config, "parse", "--filter", "images:1..10")
        assert result.exit_code == 0
        assert result.output.strip() == "images:1..10"

    def test_single_filter_rejects_two(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(runner, missing_config, "parse", "--filter", "a", "b")
        assert result.exit_code == 1

    def test_parse_error(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(runner, missing_config, "parse", "images:300")
        assert result.exit_code == 1
        assert "Invalid search query" in result.output
        assert "^" in result.output

    def test_parse_error_without_caret(self, runner: CliRunner, sample_config: Path) -> None:
        result = _invoke(runner, sample_config, "parse", "images:300")
        assert result.exit_code == 1
        assert "^" not in result.output

    def test_empty_query(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(runner, missing_config, "parse")
        assert result.exit_code == 0
        assert result.output.strip() == ""


class TestValidateCommand:
    def test_valid(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(
            runner, missing_config, "validate", "properties:feature/big_wall:true", "properties"
        )
        assert result.exit_code == 0
        assert "Valid query" in result.output

    def test_invalid(self, runner: CliRunner, missing_config: Path) -> None:
        result = _invoke(
            runner,
            missing_config,
            "validate",
            "properties:feature/big_wall:true",
            "properties:feature/med",
        )
        assert result.exit_code == 1
        assert "Invalid search query" in result.output

    def test_quiet(self, runner: CliRunner, missing_config: Path) -> None:
        result = runner.invoke(
            cli, ["--config", str(missing_config), "-q", "validate", "draft:maybe"]
        )
        assert result.exit_code == 1
        assert result.output == ""


class TestGlobalOptions:
    def test_bad_config(self, runner: CliRunner, temp_dir: Path) -> None:
        config_path = temp_dir / "bad.toml"
        config_path.write_text("[output]\nformat = 3\n")
        result = _invoke(runner, config_path, "parse", "x")
        assert result.exit_code == 1
        assert "output.format" in result.output

    def test_verbose_shows_missing_config(
        self, runner: CliRunner, missing_config: Path
    ) -> None:
        result = runner.invoke(cli, ["--config", str(missing_config), "-v", "validate", "x"])
        assert result.exit_code == 0
        assert "No config file found" in result.output

    def test_registered_commands(self) -> None:
        assert sorted(cli.commands) == ["parse", "validate"]

    def test_builtin_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "--help"])
        assert result.exit_code == 0
        assert "--format" in result.output

    def test_unknown_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["init-config"])
        assert result.exit_code != 0

    def test_debug_messages_only_with_debug(
        self, runner: CliRunner, missing_config: Path
    ) -> None:
        quiet_run = _invoke(runner, missing_config, "parse", "-f", "debug", "x")
        assert "[DEBUG]" not in quiet_run.output

        result = runner.invoke(
            cli, ["--config", str(missing_config), "--debug", "parse", "-f", "debug", "x"]
        )
        assert result.exit_code == 0
        assert "[DEBUG]" in result.output
        assert ".word(x)" in result.output
