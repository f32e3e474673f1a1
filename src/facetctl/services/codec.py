"""CodecService: encode, decode, and reset filter values for a configured form.

The codec for each filter is built from its config entry by
:func:`codec_for`, so bounds, handle modes, presets, and defaults all come
from ``facetctl.toml``.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import TypeAdapter, ValidationError

from facetctl.config.models import (
    AvailabilityFilterConfig,
    DateFilterConfig,
    FilterConfig,
    KeywordsFilterConfig,
    LocationFilterConfig,
    OpenNowFilterConfig,
    OrderByFilterConfig,
    RangeFilterConfig,
    StepperFilterConfig,
    SwitcherFilterConfig,
    TermsFilterConfig,
)
from facetctl.domain.codecs import (
    AvailabilityCodec,
    DateCodec,
    DateRangeCodec,
    FilterCodec,
    KeywordsCodec,
    LocationCodec,
    OpenNowCodec,
    OrderByCodec,
    RangeCodec,
    RangeDomain,
    StepperCodec,
    SwitcherCodec,
    TermsCodec,
    sort_key,
)
from facetctl.domain.types import WireValue
from facetctl.services.base import BaseService
from facetctl.services.result import ErrorCode, ServiceResult
from facetctl.services.telemetry import traced


def range_domain(config: RangeFilterConfig) -> RangeDomain:
    return RangeDomain(
        start=config.range_start,
        end=config.range_end,
        handles=config.handles,
        compare=config.compare,
    )


def codec_for(config: FilterConfig) -> FilterCodec[Any]:
    """Build the codec for one filter config entry."""
    match config:
        case KeywordsFilterConfig():
            return KeywordsCodec()
        case StepperFilterConfig():
            return StepperCodec(
                range_start=config.range_start,
                range_end=config.range_end,
                step_size=config.step_size,
                precision=config.precision,
            )
        case RangeFilterConfig():
            return RangeCodec(range_domain(config))
        case TermsFilterConfig():
            return TermsCodec()
        case DateFilterConfig(enable_range=True):
            return DateRangeCodec()
        case DateFilterConfig():
            return DateCodec()
        case AvailabilityFilterConfig():
            return AvailabilityCodec(input_mode=config.input_mode, presets=tuple(config.presets))
        case LocationFilterConfig():
            return LocationCodec(
                default_radius=config.default_radius,
                default_method=config.default_search_method,
            )
        case OpenNowFilterConfig():
            return OpenNowCodec()
        case SwitcherFilterConfig():
            return SwitcherCodec()
        case OrderByFilterConfig():
            return OrderByCodec()
    raise TypeError(f"No codec for filter config {type(config).__name__}")


def dump_value(value: Any) -> dict[str, Any] | None:
    """JSON-ready form of a filter value, tagged with its variant name."""
    if value is None:
        return None
    fields = TypeAdapter(type(value)).dump_python(value, mode="json")
    return {"variant": type(value).__name__, **fields}


def canonical_wire(codec: FilterCodec[Any], wire: WireValue) -> WireValue:
    """Re-encode a decoded wire value, normalizing spacing, order, and defaults."""
    return codec.encode(codec.decode(wire))


def choice_warnings(config: FilterConfig, wire: WireValue) -> list[str]:
    """Warn when an order-by wire value names an ordering the form does not offer."""
    if not isinstance(config, OrderByFilterConfig) or not config.choices or wire is None:
        return []
    key = sort_key(wire)
    if key in config.choices:
        return []
    offered = ", ".join(config.choices)
    return [f"Ordering {key!r} is not one of the configured choices: {offered}"]


class CodecService(BaseService):
    """Filter listing and per-filter value conversion."""

    @traced
    def list_filters(self) -> ServiceResult:
        filters = [f.model_dump(mode="json") for f in self._form.filters]
        return ServiceResult(
            ok=True,
            op="list_filters",
            data={"post_type": self._form.post_type, "count": len(filters), "filters": filters},
        )

    @traced
    def encode(self, key: str, raw_value: str) -> ServiceResult:
        """Encode a JSON-described value for filter *key*.

        *raw_value* is either a JSON object with the value's fields, or a
        bare JSON scalar for kinds with a single field (keywords text,
        stepper number, term slug list, switcher flag, order key, preset).
        """
        op = "encode"
        config = self._form.get_filter(key)
        if config is None:
            return self._unknown_filter(op, key)
        codec = codec_for(config)

        try:
            raw = json.loads(raw_value)
        except json.JSONDecodeError as exc:
            return ServiceResult.failure(
                op, ErrorCode.INVALID_VALUE, f"Value is not valid JSON: {exc.msg}", key=key
            )
        try:
            value = codec.coerce(raw)
        except ValidationError as exc:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_VALUE,
                f"Value does not describe a {config.type} filter value",
                key=key,
                errors=[e["msg"] for e in exc.errors()],
            )

        wire = codec.encode(value)
        return ServiceResult(
            ok=True,
            op=op,
            data={"key": key, "type": config.type, "wire": wire, "value": dump_value(value)},
            warnings=choice_warnings(config, wire),
        )

    @traced
    def decode(self, key: str, wire: WireValue) -> ServiceResult:
        op = "decode"
        config = self._form.get_filter(key)
        if config is None:
            return self._unknown_filter(op, key)
        codec = codec_for(config)
        value = codec.decode(wire)
        encoded = codec.encode(value)

        warnings: list[str] = []
        if wire not in (None, "") and encoded is not None and str(encoded) != str(wire):
            warnings.append(f"Wire value {wire!r} normalizes to {encoded!r}")
        warnings.extend(choice_warnings(config, encoded))
        return ServiceResult(
            ok=True,
            op=op,
            data={"key": key, "type": config.type, "wire": encoded, "value": dump_value(value)},
            warnings=warnings,
        )

    @traced
    def reset(self, key: str) -> ServiceResult:
        """The value filter *key* returns to on form reset."""
        op = "reset"
        config = self._form.get_filter(key)
        if config is None:
            return self._unknown_filter(op, key)
        codec = codec_for(config)
        value = codec.reset(config.resets_to)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "key": key,
                "type": config.type,
                "wire": codec.encode(value),
                "value": dump_value(value),
            },
        )
