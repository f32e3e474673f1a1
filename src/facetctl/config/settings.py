"""FacetSettings: CLI flags, environment, and ``facetctl.toml`` merged into one object.

Sources, strongest first:
  1. Keyword arguments (the global CLI flags)
  2. ``FACETCTL_*`` environment variables, ``__`` for nested keys
  3. The ``facetctl.toml`` chosen by :meth:`FacetSettings.from_cli`
  4. Defaults baked into the section models

The TOML file is picked before the model is built, and pydantic-settings
builds its sources inside ``__init__``; the chosen path travels between the
two through a context variable.
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from facetctl.config.discovery import find_config, read_toml
from facetctl.config.models import FormConfig, QueryConfig

_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


@contextmanager
def _reading(path: Path | None) -> Iterator[None]:
    token = _active_toml.set(path)
    try:
        yield
    finally:
        _active_toml.reset(token)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Top-level tables of one TOML file as a settings source."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self.toml_path = toml_path
        self._tables: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._tables = read_toml(toml_path)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


class FacetSettings(BaseSettings):
    """Frozen settings for one facetctl invocation.

    ``form`` and ``query`` mirror the TOML sections; the flags mirror the
    root CLI options. The root group stores the result on
    :class:`~facetctl.commands._context.AppContext`.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FACETCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    form: FormConfig = Field(default_factory=FormConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, _active_toml.get())
        return init_settings, env_settings, toml

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> FacetSettings:
        """Resolve the form file and build settings with *cli_flags* on top.

        An explicit *config_path* must exist. Without one, ``facetctl.toml``
        is found by walking up from *cwd* (default: the working directory);
        finding none leaves an empty form.

        Raises:
            click.ClickException: if *config_path* is missing or the TOML is
                invalid.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
        else:
            toml_path = find_config(cwd)

        with _reading(toml_path):
            return cls(config_path=toml_path, **cli_flags)
