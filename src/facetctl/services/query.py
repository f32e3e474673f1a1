"""QueryService: the form's wire values as a URL query string.

Three surfaces:
- build: canonical query string from per-filter wire values
- parse: decode every filter parameter of a query string
- clear: drop the filter parameters, keeping pagination and post type
"""

from __future__ import annotations

from collections.abc import Mapping

from facetctl.domain.query import build_query, clear_query, parse_query
from facetctl.domain.types import WireValue
from facetctl.services.base import BaseService
from facetctl.services.codec import canonical_wire, choice_warnings, codec_for, dump_value
from facetctl.services.result import ServiceResult
from facetctl.services.telemetry import traced


class QueryService(BaseService):
    """Builds, parses, and clears form query strings."""

    @traced
    def build(self, assignments: Mapping[str, WireValue]) -> ServiceResult:
        """Query string for *assignments* (filter key -> raw wire value).

        Each value is decoded and re-encoded with the filter's codec, so
        values at their defaults are dropped and the rest normalized.
        """
        op = "build_query"
        values: dict[str, WireValue] = {}
        for key, wire in assignments.items():
            config = self._form.get_filter(key)
            if config is None:
                return self._unknown_filter(op, key)
            values[key] = canonical_wire(codec_for(config), wire)

        query = build_query(
            values,
            self._form.post_type,
            post_type_param=self._query.post_type_param,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "query": query,
                "values": {k: v for k, v in values.items() if v is not None},
            },
        )

    @traced
    def parse(self, search: str) -> ServiceResult:
        """Decode every filter parameter in *search*.

        Parameters that match no configured filter are reported as
        warnings and skipped.
        """
        parsed = parse_query(
            search,
            post_type_param=self._query.post_type_param,
            system_params=self._query.system_params,
        )
        warnings: list[str] = []
        if (
            parsed.post_type is not None
            and self._form.post_type is not None
            and parsed.post_type != self._form.post_type
        ):
            warnings.append(
                f"Query is for post type {parsed.post_type!r}, "
                f"form is for {self._form.post_type!r}"
            )

        filters: dict[str, dict[str, object]] = {}
        for key, wire in parsed.values.items():
            config = self._form.get_filter(key)
            if config is None:
                warnings.append(f"Unknown filter parameter {key!r} ignored")
                continue
            codec = codec_for(config)
            value = codec.decode(wire)
            encoded = codec.encode(value)
            warnings.extend(choice_warnings(config, encoded))
            filters[key] = {
                "type": config.type,
                "wire": encoded,
                "value": dump_value(value),
            }

        return ServiceResult(
            ok=True,
            op="parse_query",
            data={"post_type": parsed.post_type, "filters": filters, "system": parsed.system},
            warnings=warnings,
        )

    @traced
    def clear(self, search: str, *, keep_post_type: bool = True) -> ServiceResult:
        """Reset the form: strip every filter parameter from *search*."""
        post_type: str | None = None
        if keep_post_type:
            parsed = parse_query(search, post_type_param=self._query.post_type_param)
            post_type = parsed.post_type or self._form.post_type
        query = clear_query(
            search,
            post_type,
            post_type_param=self._query.post_type_param,
            system_params=self._query.system_params,
        )
        return ServiceResult(ok=True, op="clear_query", data={"query": query})
