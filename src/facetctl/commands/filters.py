"""Command: list the filters configured for the form."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from facetctl.commands._base import FacetCommand
from facetctl.services.codec import CodecService

if TYPE_CHECKING:
    from facetctl.commands._context import AppContext


@click.command(
    cls=FacetCommand,
    examples="""\
  facetctl filters
  facetctl -v filters
  facetctl --json filters
  facetctl -c ./places/facetctl.toml filters""",
)
@click.pass_obj
def filters(app: AppContext) -> None:
    """List the filters defined in facetctl.toml."""
    app.emit(CodecService(app.settings).list_filters())
