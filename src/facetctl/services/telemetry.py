"""Per-call timing for service methods.

Off by default: a disabled ``@traced`` call costs one ContextVar read.
``--verbose`` switches it on, after which every traced call is timed,
reported on the ``facetctl.telemetry`` logger, and recorded under
``meta["telemetry"]`` of the returned ServiceResult.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog

from facetctl.services.result import ServiceResult

log = structlog.get_logger("facetctl.telemetry")

_tracing: ContextVar[bool] = ContextVar("_tracing", default=False)


@dataclass
class Span:
    name: str
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds, or 0.0 while the span is still open."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        return data


def _report(span: Span, *, ok: bool) -> None:
    span.end()
    log.debug("service.call", call=span.name, ms=round(span.duration_ms, 2), ok=ok)


def traced[**P](func: Callable[P, ServiceResult]) -> Callable[P, ServiceResult]:
    """Time *func* when tracing is on and attach the span to its result.

    Results are frozen, so the span lands on a copy. Exceptions are
    logged as ``ok=False`` and re-raised unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> ServiceResult:
        if not _tracing.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        try:
            result = func(*args, **kwargs)
        except Exception:
            _report(span, ok=False)
            raise

        span.annotations["warnings"] = len(result.warnings)
        _report(span, ok=result.ok)
        meta = dict(result.meta or {})
        meta["telemetry"] = span.to_dict()
        return result.model_copy(update={"meta": meta})

    return wrapper


def enable_telemetry() -> None:
    _tracing.set(True)


def disable_telemetry() -> None:
    _tracing.set(False)
