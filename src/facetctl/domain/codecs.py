"""Wire codecs, one encode/decode pair per filter kind.

Grammars (byte-for-byte; the search backend parses them):

- keywords:      trimmed text
- stepper:       number at the configured precision
- range:         ``min..max`` | ``min..`` | ``..max``
- terms:         ``slug,slug,...`` in selection order
- date:          ``YYYY-MM-DD``
- date range:    ``start..end`` with either side optional, or a preset key
- location:      ``address;lat,lng,radius`` | ``address;swlat,swlng..nelat,nelng``
- switcher:      ``1``
- order-by:      ``key`` | ``key(lat,lng)``

"Filter absent" is always ``None``, never an empty string.

INVARIANT: ``decode`` never raises. Unparseable numbers and dates fall back
to the domain default; unknown slugs and preset keys are kept verbatim.
"""

from __future__ import annotations

import logging
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, ClassVar

from pydantic import TypeAdapter

from facetctl.domain.types import (
    DateInputMode,
    FilterKind,
    LocationMethod,
    RangeCompare,
    RangeHandles,
    WireValue,
)
from facetctl.domain.values import (
    DatePreset,
    DateRangeValue,
    DateValue,
    KeywordsValue,
    LocationValue,
    OrderByValue,
    RangeValue,
    StepperValue,
    SwitcherValue,
    TermsValue,
)

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = ".."
TERMS_SEPARATOR = ","
LOCATION_SEPARATOR = ";"
COORDINATE_PRECISION = 6
ORDER_BY_PRECISION = 5

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ORDER_BY_PATTERN = re.compile(r"^(?P<key>[^()]+)\((?P<lat>[^,()]*),(?P<lng>[^,()]*)\)$")
_FALSY_WIRE = frozenset({"", "0", "false"})


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Write *value* the way the backend's JavaScript producer does.

    Integral values carry no decimal point and nothing uses exponent
    notation::

        >>> format_number(10.0)
        '10'
        >>> format_number(0.000001)
        '0.000001'
    """
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


def parse_number(token: object) -> int | float | None:
    """Parse a finite number from a wire token; None if it is not one."""
    if isinstance(token, bool):
        return None
    if isinstance(token, (int, float)):
        number = float(token)
    elif isinstance(token, str):
        text = token.strip()
        if not _NUMBER_PATTERN.match(text):
            return None
        number = float(text)
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def round_half_up(value: float, precision: int) -> int | float:
    """Round to *precision* decimals, halves away from zero."""
    quantum = Decimal(1).scaleb(-max(precision, 0))
    rounded = float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))
    return int(rounded) if rounded.is_integer() else rounded


def parse_date(token: str) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` token."""
    text = token.strip()
    if not _DATE_PATTERN.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _wire_text(wire: WireValue) -> str:
    if wire is None:
        return ""
    if isinstance(wire, bool):
        return "1" if wire else ""
    if isinstance(wire, (int, float)):
        return format_number(wire)
    return str(wire).strip()


def _coordinate(value: float, precision: int = COORDINATE_PRECISION) -> str:
    return format_number(round_half_up(value, precision))


# ---------------------------------------------------------------------------
# Base codec
# ---------------------------------------------------------------------------


class FilterCodec[V](ABC):
    """Encode/decode pair for one filter kind.

    Subclasses hold whatever domain context they need (bounds, modes,
    defaults) so ``decode`` can disambiguate partial encodings.
    """

    kind: ClassVar[FilterKind]
    value_type: ClassVar[Any]
    # Field that a bare (non-object) value maps onto in ``coerce``.
    scalar_field: ClassVar[str | None] = None

    @abstractmethod
    def encode(self, value: V) -> WireValue:
        """Wire form of *value*; ``None`` when the filter is absent."""

    @abstractmethod
    def decode(self, wire: WireValue) -> V:
        """Value for *wire*. Never raises."""

    def empty(self) -> V:
        """The value of a cleared filter."""
        return self.decode(None)

    def reset(self, resets_to: WireValue = None) -> V:
        """The value a filter returns to on form reset.

        Without a configured ``resets_to`` the filter is cleared.
        """
        if resets_to is None:
            return self.empty()
        return self.decode(resets_to)

    def coerce(self, raw: Any) -> V:
        """Build a value from plain data (parsed JSON, CLI input).

        Raises:
            pydantic.ValidationError: if *raw* does not describe a value.
        """
        if not isinstance(raw, dict) and self.scalar_field is not None:
            raw = {self.scalar_field: raw}
        return TypeAdapter(self.value_type).validate_python(raw)


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------


class KeywordsCodec(FilterCodec[KeywordsValue]):
    kind = FilterKind.KEYWORDS
    value_type = KeywordsValue
    scalar_field = "text"

    def encode(self, value: KeywordsValue) -> WireValue:
        text = value.text.strip()
        return text or None

    def decode(self, wire: WireValue) -> KeywordsValue:
        return KeywordsValue(text=_wire_text(wire))


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------


class StepperCodec(FilterCodec[StepperValue]):
    """Bounded number sent at a fixed precision (a number on the wire)."""

    kind = FilterKind.STEPPER
    value_type = StepperValue
    scalar_field = "number"

    def __init__(
        self,
        *,
        range_start: float | None = None,
        range_end: float | None = None,
        step_size: float = 1,
        precision: int = 0,
    ) -> None:
        self.range_start = range_start
        self.range_end = range_end
        self.step_size = step_size
        self.precision = precision

    def normalize(self, number: float) -> int | float:
        """Clamp into the configured bounds, then round to precision."""
        if self.range_start is not None and number < self.range_start:
            number = self.range_start
        elif self.range_end is not None and number > self.range_end:
            number = self.range_end
        return round_half_up(number, self.precision)

    def encode(self, value: StepperValue) -> WireValue:
        number = parse_number(value.number)
        if number is None:
            return None
        return self.normalize(number)

    def decode(self, wire: WireValue) -> StepperValue:
        number = parse_number(wire)
        if number is None:
            if wire not in (None, ""):
                logger.debug("Unparseable stepper value %r; treating as unset", wire)
            return StepperValue()
        return StepperValue(number=self.normalize(number))

    def increment(self, value: StepperValue) -> StepperValue:
        return self._step(value, self.step_size)

    def decrement(self, value: StepperValue) -> StepperValue:
        return self._step(value, -self.step_size)

    def _step(self, value: StepperValue, delta: float) -> StepperValue:
        if value.number is None:
            start = self.range_start if self.range_start is not None else 0
            return StepperValue(number=self.normalize(start))
        return StepperValue(number=self.normalize(value.number + delta))


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RangeDomain:
    """Configured bounds and handle mode of a range filter.

    A single ``in_range`` handle fills the slider from ``start`` up to the
    handle, so like ``less_than`` it caps the value. ``greater_than`` and
    ``outside_range`` fill from the handle to ``end``. Two
    ``outside_range`` handles rest together at ``start``.
    """

    start: float
    end: float
    handles: RangeHandles = RangeHandles.DOUBLE
    compare: RangeCompare = RangeCompare.IN_RANGE

    @property
    def single_upper(self) -> bool:
        """True when a single handle bounds the range from above."""
        return self.handles is RangeHandles.SINGLE and self.compare in _UPPER_COMPARES

    def with_bounds(self, start: float, end: float) -> RangeDomain:
        return replace(self, start=start, end=end)

    def default_value(self) -> RangeValue:
        """The unrestricted value, which encodes to None."""
        if self.handles is RangeHandles.DOUBLE:
            if self.compare is RangeCompare.OUTSIDE_RANGE:
                return RangeValue(min=self.start, max=self.start)
            return RangeValue(min=self.start, max=self.end)
        if self.single_upper:
            return RangeValue(max=self.end)
        return RangeValue(min=self.start)


_UPPER_COMPARES = frozenset({RangeCompare.IN_RANGE, RangeCompare.LESS_THAN})


class RangeCodec(FilterCodec[RangeValue]):
    """Numeric range filter.

    One handle encodes as ``min..`` when it is a lower bound and ``..max``
    when it is an upper bound (see :class:`RangeDomain`). A value equal to
    the domain default clears the filter.
    """

    kind = FilterKind.RANGE
    value_type = RangeValue

    def __init__(self, domain: RangeDomain) -> None:
        self.domain = domain

    def empty(self) -> RangeValue:
        return self.domain.default_value()

    def encode(self, value: RangeValue) -> WireValue:
        d = self.domain
        default = d.default_value()
        if d.handles is RangeHandles.DOUBLE:
            low = value.min if value.min is not None else default.min
            high = value.max if value.max is not None else default.max
            if low == default.min and high == default.max:
                return None
            return f"{format_number(low)}{RANGE_SEPARATOR}{format_number(high)}"
        if d.single_upper:
            if value.max is None or value.max == d.end:
                return None
            return f"{RANGE_SEPARATOR}{format_number(value.max)}"
        if value.min is None or value.min == d.start:
            return None
        return f"{format_number(value.min)}{RANGE_SEPARATOR}"

    def decode(self, wire: WireValue) -> RangeValue:
        d = self.domain
        default = d.default_value()
        text = _wire_text(wire)
        if not text:
            return default

        default_low = d.start if default.min is None else default.min
        default_high = d.end if default.max is None else default.max
        if RANGE_SEPARATOR in text:
            low_token, _, high_token = text.partition(RANGE_SEPARATOR)
            low = self._bound(low_token, default_low)
            high = self._bound(high_token, default_high)
        else:
            # Bare number: the value of the only (or first) handle.
            number = parse_number(text)
            if number is None:
                logger.debug("Unparseable range value %r; using domain bounds", text)
                return default
            if d.single_upper:
                low, high = default_low, number
            else:
                low, high = number, max(number, default_high)

        if d.handles is RangeHandles.DOUBLE:
            return RangeValue(min=low, max=high)
        if d.single_upper:
            return RangeValue(max=high)
        return RangeValue(min=low)

    @staticmethod
    def _bound(token: str, fallback: float) -> float:
        number = parse_number(token)
        if number is None:
            if token.strip():
                logger.debug("Unparseable range bound %r; using %s", token, fallback)
            return fallback
        return number


# ---------------------------------------------------------------------------
# Terms
# ---------------------------------------------------------------------------


class TermsCodec(FilterCodec[TermsValue]):
    """Comma-joined term slugs.

    Slugs unknown to the current taxonomy payload are kept, so a term that
    is temporarily missing does not wipe an otherwise valid selection.
    """

    kind = FilterKind.TERMS
    value_type = TermsValue
    scalar_field = "slugs"

    def encode(self, value: TermsValue) -> WireValue:
        slugs = [slug.strip() for slug in value.slugs]
        slugs = [slug for slug in slugs if slug]
        if not slugs:
            return None
        return TERMS_SEPARATOR.join(slugs)

    def decode(self, wire: WireValue | list[Any]) -> TermsValue:
        if isinstance(wire, (list, tuple)):
            tokens = [_wire_text(item) for item in wire]
        else:
            tokens = [token.strip() for token in _wire_text(wire).split(TERMS_SEPARATOR)]
        return TermsValue(slugs=tuple(dict.fromkeys(t for t in tokens if t)))


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


class DateCodec(FilterCodec[DateValue]):
    kind = FilterKind.DATE
    value_type = DateValue

    def encode(self, value: DateValue) -> WireValue:
        return value.start.isoformat() if value.start is not None else None

    def decode(self, wire: WireValue) -> DateValue:
        text = _wire_text(wire).partition(RANGE_SEPARATOR)[0]
        if not text:
            return DateValue()
        parsed = parse_date(text)
        if parsed is None:
            logger.debug("Unparseable date %r; treating as unset", text)
        return DateValue(start=parsed)


class DateRangeCodec(FilterCodec[DateRangeValue | DatePreset]):
    """Date range with optional sides, or an opaque preset key.

    A token without ``..`` is a preset and is never date-parsed, even if
    it happens to look like a date.
    """

    kind = FilterKind.DATE
    value_type = DateRangeValue

    def encode(self, value: DateRangeValue | DatePreset) -> WireValue:
        if isinstance(value, DatePreset):
            return value.key.strip() or None
        if value.start is None and value.end is None:
            return None
        start = value.start.isoformat() if value.start is not None else ""
        end = value.end.isoformat() if value.end is not None else ""
        return f"{start}{RANGE_SEPARATOR}{end}"

    def decode(self, wire: WireValue) -> DateRangeValue | DatePreset:
        text = _wire_text(wire)
        if not text:
            return DateRangeValue()
        if RANGE_SEPARATOR not in text:
            return DatePreset(key=text)
        start_token, _, end_token = text.partition(RANGE_SEPARATOR)
        return DateRangeValue(start=self._side(start_token), end=self._side(end_token))

    def coerce(self, raw: Any) -> DateRangeValue | DatePreset:
        if isinstance(raw, str):
            return DatePreset(key=raw)
        if isinstance(raw, dict) and "key" in raw:
            return TypeAdapter(DatePreset).validate_python(raw)
        return super().coerce(raw)

    @staticmethod
    def _side(token: str) -> date | None:
        if not token.strip():
            return None
        parsed = parse_date(token)
        if parsed is None:
            logger.debug("Unparseable date bound %r; leaving side open", token)
        return parsed


class AvailabilityCodec(DateRangeCodec):
    """Availability filter: a date range, a single date, or a preset.

    In ``date-range`` mode the grammar is exactly :class:`DateRangeCodec`.
    In ``single-date`` mode the wire carries the start date alone; a bare
    token is a preset only when it is one of the configured preset keys
    or is not a date.
    """

    kind = FilterKind.AVAILABILITY

    def __init__(
        self,
        *,
        input_mode: DateInputMode = DateInputMode.DATE_RANGE,
        presets: tuple[str, ...] = (),
    ) -> None:
        self.input_mode = input_mode
        self.presets = presets

    def encode(self, value: DateRangeValue | DatePreset) -> WireValue:
        if self.input_mode is DateInputMode.SINGLE_DATE and isinstance(value, DateRangeValue):
            return value.start.isoformat() if value.start is not None else None
        return super().encode(value)

    def decode(self, wire: WireValue) -> DateRangeValue | DatePreset:
        text = _wire_text(wire)
        if self.input_mode is DateInputMode.SINGLE_DATE and text and text not in self.presets:
            parsed = parse_date(text)
            if parsed is not None:
                return DateRangeValue(start=parsed)
        return super().decode(wire)


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------


class LocationCodec(FilterCodec[LocationValue | None]):
    """Address plus radius or bounding-box geometry.

    The value's ``method`` selects the grammar; coordinates are rounded to
    six decimals. The address is everything before the last ``;`` so
    addresses that contain a semicolon survive a round trip.
    """

    kind = FilterKind.LOCATION
    value_type = LocationValue

    def __init__(
        self,
        *,
        default_radius: float = 10,
        default_method: LocationMethod = LocationMethod.AREA,
    ) -> None:
        self.default_radius = default_radius
        self.default_method = default_method

    def encode(self, value: LocationValue | None) -> WireValue:
        if value is None or not value.address:
            return None
        if value.method is LocationMethod.RADIUS:
            if value.lat is None or value.lng is None:
                logger.debug("Radius location %r has no center; not sent", value.address)
                return None
            radius = value.radius if value.radius is not None else self.default_radius
            return (
                f"{value.address}{LOCATION_SEPARATOR}"
                f"{_coordinate(value.lat)},{_coordinate(value.lng)},{format_number(radius)}"
            )
        bounds = (value.swlat, value.swlng, value.nelat, value.nelng)
        if any(b is None for b in bounds):
            logger.debug("Area location %r has no bounds; not sent", value.address)
            return None
        swlat, swlng, nelat, nelng = (_coordinate(b) for b in bounds)  # type: ignore[arg-type]
        return f"{value.address}{LOCATION_SEPARATOR}{swlat},{swlng}{RANGE_SEPARATOR}{nelat},{nelng}"

    def decode(self, wire: WireValue) -> LocationValue | None:
        text = _wire_text(wire)
        if not text:
            return None
        address, sep, geometry = text.rpartition(LOCATION_SEPARATOR)
        if not sep:
            return LocationValue(address=text, method=self.default_method)

        if RANGE_SEPARATOR in geometry:
            sw, _, ne = geometry.partition(RANGE_SEPARATOR)
            corners = [parse_number(t) for t in (*sw.split(",", 1), *ne.split(",", 1))]
            if len(corners) != 4 or any(c is None for c in corners):
                logger.debug("Unparseable area bounds %r", geometry)
                return LocationValue(address=address, method=LocationMethod.AREA)
            return LocationValue.within(address, *corners)  # type: ignore[arg-type]

        parts = geometry.split(",")
        lat = parse_number(parts[0])
        lng = parse_number(parts[1]) if len(parts) > 1 else None
        if lat is None or lng is None:
            logger.debug("Unparseable radius center %r", geometry)
            return LocationValue(address=address, method=LocationMethod.RADIUS)
        radius = parse_number(parts[2]) if len(parts) > 2 else None
        return LocationValue.around(
            address, lat, lng, radius if radius is not None else self.default_radius
        )

    def coerce(self, raw: Any) -> LocationValue | None:
        if raw is None:
            return None
        return super().coerce(raw)


# ---------------------------------------------------------------------------
# Switcher / open now
# ---------------------------------------------------------------------------


class SwitcherCodec(FilterCodec[SwitcherValue]):
    """On/off toggle. On is the number ``1``; off is absent.

    The backend treats any present value as "on", so ``True``, ``False``
    and ``0`` are never sent.
    """

    kind = FilterKind.SWITCHER
    value_type = SwitcherValue
    scalar_field = "on"

    def encode(self, value: SwitcherValue) -> WireValue:
        return 1 if value.on else None

    def decode(self, wire: WireValue) -> SwitcherValue:
        return SwitcherValue(on=_wire_text(wire).lower() not in _FALSY_WIRE)


class OpenNowCodec(SwitcherCodec):
    kind = FilterKind.OPEN_NOW


# ---------------------------------------------------------------------------
# Order by
# ---------------------------------------------------------------------------


class OrderByCodec(FilterCodec[OrderByValue]):
    """Sort choice, with the reference point for proximity orderings."""

    kind = FilterKind.ORDER_BY
    value_type = OrderByValue
    scalar_field = "key"

    def encode(self, value: OrderByValue) -> WireValue:
        key = value.key.strip()
        if not key:
            return None
        if value.lat is None or value.lng is None:
            return key
        lat = _coordinate(value.lat, ORDER_BY_PRECISION)
        lng = _coordinate(value.lng, ORDER_BY_PRECISION)
        return f"{key}({lat},{lng})"

    def decode(self, wire: WireValue) -> OrderByValue:
        text = _wire_text(wire)
        match = _ORDER_BY_PATTERN.match(text)
        if match is None:
            return OrderByValue(key=text)
        lat = parse_number(match["lat"])
        lng = parse_number(match["lng"])
        if lat is None or lng is None:
            return OrderByValue(key=match["key"])
        return OrderByValue(key=match["key"], lat=lat, lng=lng)


def sort_key(wire: WireValue) -> str:
    """The ordering key without its reference point: ``nearby(1,2)`` -> ``nearby``."""
    return _wire_text(wire).split("(", 1)[0]
