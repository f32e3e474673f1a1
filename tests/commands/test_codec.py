"""Tests for codec CLI commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from facetctl.cli import cli


@pytest.mark.usefixtures("_isolated_form")
class TestEncodeCommand:
    def test_encode_range(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["codec", "encode", "price", '{"min": 10, "max": 90}'])
        assert result.exit_code == 0
        assert "10..90" in result.output

    def test_encode_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "codec", "encode", "guests", "4"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["wire"] == 4

    def test_encode_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "codec", "encode", "category", '["a", "b"]'])
        assert result.exit_code == 0
        assert result.output == "a,b\n"

    def test_encode_default_prints_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "codec", "encode", "price", '{"min": 0}'])
        assert result.exit_code == 0
        assert result.output == "\n"

    def test_invalid_json_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["codec", "encode", "price", "{min"])
        assert result.exit_code == 1
        assert "ERROR" in result.output

    def test_unknown_filter_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["codec", "encode", "nope", "1"])
        assert result.exit_code == 1
        assert "nope" in result.output


@pytest.mark.usefixtures("_isolated_form")
class TestDecodeCommand:
    def test_decode_location(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "codec", "decode", "near", "Paris;48.856614,2.352222,10"]
        )
        assert result.exit_code == 0
        value = json.loads(result.output)["data"]["value"]
        assert value["variant"] == "LocationValue"
        assert value["method"] == "radius"
        assert value["radius"] == 10

    def test_decode_without_wire(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["codec", "decode", "price"])
        assert result.exit_code == 0
        assert "wire: null" in result.output

    def test_decode_preset(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "codec", "decode", "when", "this_weekend"])
        assert json.loads(result.output)["data"]["value"] == {
            "variant": "DatePreset",
            "key": "this_weekend",
        }

    def test_normalization_warning(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["codec", "decode", "price", "90"])
        assert result.exit_code == 0
        assert "WARNING" in result.output
        assert "90..100" in result.output


@pytest.mark.usefixtures("_isolated_form")
class TestResetCommand:
    def test_reset_to_configured(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "codec", "reset", "sort"])
        assert result.exit_code == 0
        assert result.output == "latest\n"

    def test_reset_verbose_has_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "codec", "reset", "price"])
        assert result.exit_code == 0
        assert "CodecService.reset" in result.output


class TestExplicitConfig:
    def test_config_flag(self, cli_runner: CliRunner, form_root: object) -> None:
        config = f"{form_root}/facetctl.toml"
        result = cli_runner.invoke(cli, ["-c", config, "-q", "codec", "encode", "pets", "true"])
        assert result.exit_code == 0
        assert result.output == "1\n"

    def test_missing_config(self, cli_runner: CliRunner, tmp_path: object) -> None:
        result = cli_runner.invoke(cli, ["-c", f"{tmp_path}/missing.toml", "filters"])
        assert result.exit_code != 0
        assert "Config file not found" in result.output
