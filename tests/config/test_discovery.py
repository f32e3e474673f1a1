"""Tests for config file discovery and loading."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from facetctl.config.discovery import CONFIG_FILENAME, find_config, load_config


class TestFindConfig:
    def test_in_start_dir(self, form_root: Path) -> None:
        assert find_config(form_root) == (form_root / CONFIG_FILENAME).resolve()

    def test_walks_up(self, form_root: Path) -> None:
        nested = form_root / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == (form_root / CONFIG_FILENAME).resolve()

    def test_not_found(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_env_var(self, form_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = form_root / "other.toml"
        custom.write_text("", encoding="utf-8")
        monkeypatch.setenv("FACETCTL_CONFIG", str(custom))
        assert find_config(form_root) == custom

    def test_env_var_missing_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FACETCTL_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_loads_form(self, form_root: Path) -> None:
        config = load_config(form_root / CONFIG_FILENAME)
        assert config.form.post_type == "places"
        assert len(config.form.filters) == 13

    def test_discovers_from_cwd(self, form_root: Path) -> None:
        assert load_config(cwd=form_root).form.post_type == "places"

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        assert load_config(cwd=tmp_path).form.filters == []

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[form\n", encoding="utf-8")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(path)

    def test_invalid_form(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text('[[form.filters]]\nkey = "x"\ntype = "slider"\n', encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)
