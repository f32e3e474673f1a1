"""Subcommand modules for facetctl.

Provides register_commands() which uses deferred imports to keep
``facetctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    3 groups (have subcommands) + 1 standalone command.
    """
    # --- Groups ---
    from facetctl.commands.codec import codec
    from facetctl.commands.query import query
    from facetctl.commands.terms import terms

    cli.add_command(codec)
    cli.add_command(query)
    cli.add_command(terms)

    # --- Standalone commands ---
    from facetctl.commands.filters import filters

    cli.add_command(filters)
