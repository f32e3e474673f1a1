"""Shared pytest fixtures for facetctl tests."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from facetctl.config.settings import FacetSettings
from facetctl.domain.terms import TermTree
from facetctl.services.telemetry import disable_telemetry

# A form with one filter of every kind. ``category`` and ``tags`` share a
# taxonomy; ``tags`` is single-select and hides zero-count terms.
FORM_TOML = """\
[form]
post_type = "places"

[[form.filters]]
key = "keywords"
type = "keywords"
label = "Search"

[[form.filters]]
key = "guests"
type = "stepper"
range_start = 1
range_end = 10

[[form.filters]]
key = "price"
type = "range"
range_start = 0
range_end = 100

[[form.filters]]
key = "rating"
type = "range"
range_start = 0
range_end = 5
handles = "single"
compare = "greater_than"

[[form.filters]]
key = "category"
type = "terms"
taxonomy = "place_category"
per_page = 2

[[form.filters]]
key = "tags"
type = "terms"
taxonomy = "place_category"
multiple = false
hide_empty_terms = true

[[form.filters]]
key = "opened"
type = "date"

[[form.filters]]
key = "stay"
type = "date"
enable_range = true

[[form.filters]]
key = "when"
type = "availability"
presets = ["this_weekend", "next_week"]

[[form.filters]]
key = "near"
type = "location"
default_search_method = "radius"

[[form.filters]]
key = "pets"
type = "switcher"

[[form.filters]]
key = "open"
type = "open-now"

[[form.filters]]
key = "sort"
type = "order-by"
choices = ["latest", "nearby"]
resets_to = "latest"
"""

FILTER_COUNT = 13


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FACETCTL_* environment out of the tests."""
    monkeypatch.delenv("FACETCTL_CONFIG", raising=False)
    for name in ("FACETCTL_JSON_OUTPUT", "FACETCTL_QUIET", "FACETCTL_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def term_payload() -> list[dict[str, Any]]:
    """food -> restaurants -> italian, food -> bars, plus a root hotels."""
    return [
        {
            "slug": "food",
            "label": "Food",
            "term_taxonomy_id": 1,
            "children": [
                {
                    "slug": "restaurants",
                    "label": "Restaurants",
                    "term_taxonomy_id": 2,
                    "children": [
                        {"slug": "italian", "label": "Italian", "term_taxonomy_id": 3},
                    ],
                },
                {"slug": "bars", "label": "Bars", "term_taxonomy_id": 4},
            ],
        },
        {"slug": "hotels", "label": "Hotels", "term_taxonomy_id": 5, "count": 3},
    ]


@pytest.fixture
def term_tree(term_payload: list[dict[str, Any]]) -> TermTree:
    return TermTree.build(term_payload)


@pytest.fixture
def count_payload() -> dict[str, Any]:
    """Adaptive counts: italian has none; hotels is not reported."""
    return {
        "terms": {"place_category": {"1": 12, "2": 7, "3": 0, "4": 5}},
        "ranges": {"price": {"min": 20, "max": 80}},
    }


@pytest.fixture
def form_root(tmp_path: Path) -> Path:
    """Directory holding facetctl.toml plus term and count payload files."""
    (tmp_path / "facetctl.toml").write_text(FORM_TOML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def terms_file(form_root: Path, term_payload: list[dict[str, Any]]) -> Path:
    path = form_root / "terms.json"
    path.write_text(json.dumps(term_payload), encoding="utf-8")
    return path


@pytest.fixture
def counts_file(form_root: Path, count_payload: dict[str, Any]) -> Path:
    path = form_root / "narrowed.json"
    path.write_text(json.dumps(count_payload), encoding="utf-8")
    return path


@pytest.fixture
def settings(form_root: Path) -> FacetSettings:
    """Settings loaded from the sample form."""
    return FacetSettings.from_cli(config_path=str(form_root / "facetctl.toml"))


@pytest.fixture
def _isolated_form(form_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample form directory so the CLI discovers it.

    Use via ``@pytest.mark.usefixtures("_isolated_form")`` on command test
    classes.
    """
    monkeypatch.chdir(form_root)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` enables telemetry for the rest of the thread; switch it off."""
    yield
    disable_telemetry()
