"""Tests for query CLI commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from facetctl.cli import cli


@pytest.mark.usefixtures("_isolated_form")
class TestBuildCommand:
    def test_build(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "query", "build", "price=10..90", "pets=1"])
        assert result.exit_code == 0
        assert result.output == "type=places&price=10..90&pets=1\n"

    def test_build_location(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "query", "build", "near=Paris;48.856614,2.352222,10"]
        )
        data = json.loads(result.output)
        assert data["data"]["values"] == {"near": "Paris;48.856614,2.352222,10"}

    def test_build_nothing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "query", "build"])
        assert result.exit_code == 0
        assert result.output == "type=places\n"

    def test_bad_assignment(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "build", "price"])
        assert result.exit_code == 2
        assert "KEY=WIRE" in result.output

    def test_unknown_filter(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "build", "nope=1"])
        assert result.exit_code == 1


@pytest.mark.usefixtures("_isolated_form")
class TestParseCommand:
    def test_parse(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "query", "parse", "?type=places&price=10..90&pg=2"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["filters"]["price"]["wire"] == "10..90"
        assert data["system"] == {"pg": "2"}

    def test_parse_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "query", "parse", "price=10..90&pets=yes"])
        assert result.output == "price=10..90\npets=1\n"

    def test_parse_warns_on_unknown(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["query", "parse", "bogus=1"])
        assert result.exit_code == 0
        assert "WARNING" in result.output


@pytest.mark.usefixtures("_isolated_form")
class TestClearCommand:
    def test_clear(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "query", "clear", "type=places&price=10..90&pg=2"])
        assert result.output == "pg=2&type=places\n"

    def test_clear_drop_type(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "query", "clear", "type=places&price=10..90&pg=2", "--drop-type"]
        )
        assert result.output == "pg=2\n"
