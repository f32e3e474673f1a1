"""Tests for terms CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from facetctl.cli import cli


@pytest.mark.usefixtures("_isolated_form")
class TestShowCommand:
    def test_show(self, cli_runner: CliRunner, terms_file: Path) -> None:
        result = cli_runner.invoke(cli, ["terms", "show", "category", "--terms", str(terms_file)])
        assert result.exit_code == 0
        assert "Food" in result.output
        assert "Restaurants" in result.output
        assert "Hotels" not in result.output
        assert "2 of 5 terms" in result.output

    def test_show_counts_json(
        self, cli_runner: CliRunner, terms_file: Path, counts_file: Path
    ) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "terms",
                "show",
                "category",
                "--terms",
                str(terms_file),
                "--counts",
                str(counts_file),
                "--page",
                "3",
            ],
        )
        assert result.exit_code == 0
        terms = json.loads(result.output)["data"]["terms"]
        assert [t["count"] for t in terms] == [12, 7, 0, 5, 0]

    def test_show_search_quiet(self, cli_runner: CliRunner, terms_file: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["-q", "terms", "show", "category", "--terms", str(terms_file), "--search", "bar"],
        )
        assert result.output == "bars\n"

    def test_page_must_be_positive(self, cli_runner: CliRunner, terms_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["terms", "show", "category", "--terms", str(terms_file), "--page", "0"]
        )
        assert result.exit_code == 2

    def test_missing_payload(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["terms", "show", "category", "--terms", "missing.json"])
        assert result.exit_code == 1
        assert "ERROR" in result.output

    def test_wrong_kind(self, cli_runner: CliRunner, terms_file: Path) -> None:
        result = cli_runner.invoke(cli, ["terms", "show", "price", "--terms", str(terms_file)])
        assert result.exit_code == 1
        assert "not a terms filter" in result.output


@pytest.mark.usefixtures("_isolated_form")
class TestSelectCommand:
    def test_select_quiet(self, cli_runner: CliRunner, terms_file: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["-q", "terms", "select", "category", "italian", "bars", "--terms", str(terms_file)],
        )
        assert result.exit_code == 0
        assert result.output == "italian,bars\n"

    def test_select_with_current(self, cli_runner: CliRunner, terms_file: Path) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "terms",
                "select",
                "category",
                "food",
                "--terms",
                str(terms_file),
                "--current",
                "italian,hotels",
            ],
        )
        data = json.loads(result.output)["data"]
        assert data["selected"] == ["hotels", "food"]
        assert data["wire"] == "hotels,food"

    def test_select_rich(self, cli_runner: CliRunner, terms_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["terms", "select", "category", "italian", "--terms", str(terms_file)]
        )
        assert "selected: italian" in result.output
        assert "summary: Italian" in result.output

    def test_needs_slugs(self, cli_runner: CliRunner, terms_file: Path) -> None:
        result = cli_runner.invoke(cli, ["terms", "select", "category", "--terms", str(terms_file)])
        assert result.exit_code == 2
