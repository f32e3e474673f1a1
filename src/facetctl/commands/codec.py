"""Command group: encode, decode, and reset single filter values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from facetctl.commands._base import FacetGroup
from facetctl.services.codec import CodecService

if TYPE_CHECKING:
    from facetctl.commands._context import AppContext

_CODEC_EXAMPLES = """\
  facetctl codec encode price '{"min": 10, "max": 90}'
  facetctl codec encode near '{"address": "Paris", "method": "radius", "lat": 48.856614, "lng": 2.352222, "radius": 10}'
  facetctl codec decode category "hotels,restaurants"
  facetctl codec decode when this_weekend
  facetctl codec reset price"""


@click.group(cls=FacetGroup, examples=_CODEC_EXAMPLES)
@click.pass_obj
def codec(app: AppContext) -> None:
    """Convert between filter values and wire values."""


@codec.command(
    examples="""\
  facetctl codec encode keywords '"  pizza  "'
  facetctl codec encode guests 3
  facetctl codec encode price '{"min": 10, "max": 90}'
  facetctl codec encode category '["hotels", "restaurants"]'
  facetctl codec encode when '{"start": "2026-01-01", "end": null}'
  facetctl codec encode when '"this_weekend"'
  facetctl codec encode pets true
  facetctl -q codec encode price '{"min": 0, "max": 100}'"""
)
@click.argument("key")
@click.argument("value_json")
@click.pass_obj
def encode(app: AppContext, key: str, value_json: str) -> None:
    """Encode VALUE_JSON for filter KEY.

    VALUE_JSON is a JSON object with the value's fields, or a bare JSON
    scalar for single-field values.
    """
    app.emit(CodecService(app.settings).encode(key, value_json))


@codec.command(
    examples="""\
  facetctl codec decode price 10..90
  facetctl codec decode price 25..
  facetctl codec decode near "Paris;48.856614,2.352222,10"
  facetctl codec decode when 2026-01-01..2026-01-07
  facetctl codec decode sort "nearby(48.85,2.35)"
  facetctl codec decode price"""
)
@click.argument("key")
@click.argument("wire", required=False, default=None)
@click.pass_obj
def decode(app: AppContext, key: str, wire: str | None) -> None:
    """Decode WIRE for filter KEY (omit WIRE for an absent value)."""
    app.emit(CodecService(app.settings).decode(key, wire))


@codec.command(
    examples="""\
  facetctl codec reset price
  facetctl --json codec reset sort"""
)
@click.argument("key")
@click.pass_obj
def reset(app: AppContext, key: str) -> None:
    """Show the value filter KEY returns to when the form is reset."""
    app.emit(CodecService(app.settings).reset(key))
