"""Command group: build, parse, and clear form query strings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from facetctl.commands._base import FacetGroup
from facetctl.services.query import QueryService

if TYPE_CHECKING:
    from facetctl.commands._context import AppContext

_QUERY_EXAMPLES = """\
  facetctl query build price=10..90 category=hotels,bars
  facetctl query parse "type=places&price=10..90&pg=2"
  facetctl query clear "type=places&price=10..90&pg=2\""""


def _parse_assignments(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    assignments: dict[str, str] = {}
    for item in values:
        key, sep, wire = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=WIRE, got {item!r}")
        assignments[key] = wire
    return assignments


@click.group(cls=FacetGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """Work with the form's URL query string."""


@query.command(
    examples="""\
  facetctl query build price=10..90
  facetctl query build "near=Paris;48.856614,2.352222,10" pets=1
  facetctl -q query build keywords="  pizza " price=0..100"""
)
@click.argument("assignments", nargs=-1, callback=_parse_assignments)
@click.pass_obj
def build(app: AppContext, assignments: dict[str, str]) -> None:
    """Build a query string from KEY=WIRE assignments."""
    app.emit(QueryService(app.settings).build(assignments))


@query.command(
    examples="""\
  facetctl query parse "?type=places&price=10..90"
  facetctl --json query parse "category=hotels%2Cbars&pg=3\""""
)
@click.argument("search")
@click.pass_obj
def parse(app: AppContext, search: str) -> None:
    """Decode every filter parameter of SEARCH."""
    app.emit(QueryService(app.settings).parse(search))


@query.command(
    examples="""\
  facetctl query clear "type=places&price=10..90&pg=2"
  facetctl query clear "type=places&price=10..90" --drop-type"""
)
@click.argument("search")
@click.option("--drop-type", is_flag=True, help="Remove the post type parameter as well.")
@click.pass_obj
def clear(app: AppContext, search: str, drop_type: bool) -> None:
    """Remove every filter parameter from SEARCH, keeping pagination."""
    app.emit(QueryService(app.settings).clear(search, keep_post_type=not drop_type))
