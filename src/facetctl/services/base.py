"""BaseService: shared foundation for all facetctl services.

Every service receives the resolved :class:`FacetSettings` at construction
time and reads the form definition from it. Services never touch the
filesystem except through :mod:`facetctl.infrastructure`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from facetctl.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from facetctl.config.models import FilterConfig, FormConfig, QueryConfig
    from facetctl.config.settings import FacetSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CodecService(BaseService):
            def encode(self, key: str, raw: str) -> ServiceResult:
                config = self._form.get_filter(key)
                if config is None:
                    return self._unknown_filter("encode", key)
                ...
    """

    def __init__(self, settings: FacetSettings) -> None:
        self._settings = settings

    @property
    def _form(self) -> FormConfig:
        return self._settings.form

    @property
    def _query(self) -> QueryConfig:
        return self._settings.query

    def _unknown_filter(self, op: str, key: str) -> ServiceResult:
        return ServiceResult.failure(
            op,
            ErrorCode.UNKNOWN_FILTER,
            f"No filter with key {key!r} in the form",
            key=key,
            known=self._form.keys,
        )

    def _wrong_kind(self, op: str, config: FilterConfig, expected: str) -> ServiceResult:
        return ServiceResult.failure(
            op,
            ErrorCode.WRONG_KIND,
            f"Filter {config.key!r} is a {config.type} filter, not {expected}",
            key=config.key,
            type=config.type,
        )
