"""Tests for the filters command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from facetctl.cli import cli


@pytest.mark.usefixtures("_isolated_form")
class TestFiltersCommand:
    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["filters"])
        assert result.exit_code == 0
        assert "price" in result.output
        assert "13 filters" in result.output

    def test_quiet_keys(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "filters"])
        assert result.output.splitlines()[:3] == ["keywords", "guests", "price"]

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "filters"])
        data = json.loads(result.output)["data"]
        assert data["count"] == 13
        assert {f["type"] for f in data["filters"]} >= {"range", "terms", "location"}


class TestNoForm:
    def test_empty_form(
        self, cli_runner: CliRunner, tmp_path: object, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)  # type: ignore[arg-type]
        result = cli_runner.invoke(cli, ["filters"])
        assert result.exit_code == 0
        assert "0 filters" in result.output
