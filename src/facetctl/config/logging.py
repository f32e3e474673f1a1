"""structlog setup for the facetctl CLI.

All log output goes to stderr so wire values and query strings on stdout
stay pipeable. Domain modules use plain ``logging.getLogger(__name__)``;
their records are rendered by the same structlog processors as events
logged through ``structlog.get_logger``.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "facetctl"


def _shared_processors() -> list[structlog.types.Processor]:
    """Processors applied to structlog events and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route facetctl logging to stderr.

    The root logger only passes warnings; the ``facetctl`` logger passes
    DEBUG records too when *verbose* is set, which is where codec
    fallbacks and telemetry spans are reported. Calling this again
    replaces the previous handler.

    Args:
        verbose: Emit facetctl DEBUG records.
        log_json: Render one JSON object per line instead of console text.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
