"""Click command classes that take an ``examples=`` text block.

``--examples`` is eager: it prints the block and exits before arguments are
checked, so ``facetctl codec encode --examples`` works without KEY or
VALUE_JSON. ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(examples)
    ctx.exit(0)


class _ExamplesMixin(click.Command):
    """Stores ``examples`` and registers the ``--examples`` flag when given."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples.",
                )
            )


class FacetCommand(_ExamplesMixin):
    """A command accepting ``examples=``."""


class FacetGroup(_ExamplesMixin, click.Group):
    """A group accepting ``examples=``; its subcommands are FacetCommands."""

    command_class = FacetCommand
