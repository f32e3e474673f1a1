"""AppContext: the object every facetctl command receives via ``@click.pass_obj``.

Built once by the root group from the resolved settings. It owns the
logging and telemetry switches and the stdout/stderr contract of
:meth:`AppContext.emit`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from facetctl.config.logging import configure_logging
from facetctl.output.formatters import OutputSettings, format_result
from facetctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from facetctl.config.settings import FacetSettings
    from facetctl.services.result import ServiceResult


class AppContext:
    def __init__(self, settings: FacetSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Print *result* in the selected output mode.

        Successes go to stdout with any warnings on stderr, so a quiet wire
        value can be piped. JSON output already carries its warnings.
        Failures go to stderr and exit with status 1.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
