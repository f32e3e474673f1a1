"""Command group: display and select terms of a hierarchical terms filter."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from facetctl.commands._base import FacetGroup
from facetctl.services.terms import TermsService

if TYPE_CHECKING:
    from facetctl.commands._context import AppContext

_TERMS_EXAMPLES = """\
  facetctl terms show category --terms terms.json
  facetctl terms show category --terms terms.json --counts narrowed.json --page 2
  facetctl terms select category hotels --terms terms.json --current bars"""

_PAYLOAD = click.Path(dir_okay=False, path_type=Path)


@click.group(cls=FacetGroup, examples=_TERMS_EXAMPLES)
@click.pass_obj
def terms(app: AppContext) -> None:
    """Inspect term lists and term selections."""


@terms.command(
    examples="""\
  facetctl terms show category --terms terms.json
  facetctl terms show category --terms terms.json --page 3
  facetctl terms show category --terms terms.json --search "ital"
  facetctl terms show category --terms terms.json --counts narrowed.json
  facetctl terms show category --terms terms.json --current hotels,bars"""
)
@click.argument("key")
@click.option("--terms", "terms_path", type=_PAYLOAD, required=True, help="Term payload JSON.")
@click.option("--counts", "counts_path", type=_PAYLOAD, default=None, help="Narrowed values JSON.")
@click.option("--current", default=None, help="Current wire value of the filter.")
@click.option("--page", default=1, type=click.IntRange(min=1), help="Pages loaded so far.")
@click.option("--search", default=None, help="Search term labels (ignores --page).")
@click.pass_obj
def show(
    app: AppContext,
    key: str,
    terms_path: Path,
    counts_path: Path | None,
    current: str | None,
    page: int,
    search: str | None,
) -> None:
    """Show the visible terms of filter KEY."""
    svc = TermsService(app.settings)
    result = svc.show(
        key,
        terms_path,
        counts_path=counts_path,
        current=current,
        page=page,
        search=search,
    )
    app.emit(result)


@terms.command(
    examples="""\
  facetctl terms select category italian --terms terms.json
  facetctl terms select category restaurants italian --terms terms.json
  facetctl -q terms select category food --terms terms.json --current italian,bars"""
)
@click.argument("key")
@click.argument("slugs", nargs=-1, required=True)
@click.option("--terms", "terms_path", type=_PAYLOAD, required=True, help="Term payload JSON.")
@click.option("--current", default=None, help="Current wire value of the filter.")
@click.pass_obj
def select(
    app: AppContext,
    key: str,
    slugs: tuple[str, ...],
    terms_path: Path,
    current: str | None,
) -> None:
    """Toggle SLUGS in order on filter KEY and print the new selection."""
    app.emit(TermsService(app.settings).select(key, terms_path, slugs, current=current))
