"""What every facetctl service method hands back.

A ServiceResult is either a success carrying ``data`` (plus non-fatal
``warnings``) or a failure carrying a ServiceError. Renderers and the CLI
read nothing else.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    UNKNOWN_FILTER = "UNKNOWN_FILTER"
    WRONG_KIND = "WRONG_KIND"
    INVALID_VALUE = "INVALID_VALUE"
    PAYLOAD_ERROR = "PAYLOAD_ERROR"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: False when ``error`` is set.
        op: Operation name shown by renderers, e.g. ``"encode"``.
        data: Operation payload; empty on failure.
        warnings: Problems that did not stop the operation.
        error: Why the operation failed.
        meta: Extras such as the telemetry span under ``--verbose``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Failed result for *op*; keyword arguments become ``error.detail``."""
        error = ServiceError(code=code, message=message, detail=detail)
        return cls(ok=False, op=op, error=error)
