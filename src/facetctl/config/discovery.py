"""Config file discovery and loading.

Walk-up finder locates facetctl.toml, the way git finds .git/.
Supports FACETCTL_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from facetctl.config.models import FacetConfig

CONFIG_FILENAME = "facetctl.toml"
CONFIG_ENV_VAR = "FACETCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for facetctl.toml.

    Returns the path to the config file, or None if not found.
    Checks FACETCTL_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as UTF-8 TOML.

    Raises:
        tomllib.TOMLDecodeError: if the file is not valid TOML.
    """
    return tomllib.loads(path.read_text(encoding="utf-8"))


def load_config(path: Path | None = None, cwd: Path | None = None) -> FacetConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns a default (empty form) FacetConfig if no file is found.

    Raises:
        tomllib.TOMLDecodeError: if the file is not valid TOML.
        pydantic.ValidationError: if the form definition is invalid.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return FacetConfig()

    return FacetConfig.model_validate(read_toml(path))
