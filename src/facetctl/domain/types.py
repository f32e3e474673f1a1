"""Filter kinds and the enums that parameterise their wire grammars."""

from __future__ import annotations

from enum import StrEnum

# One scalar per filter crosses the wire: a string, a number, or nothing.
type WireValue = str | int | float | None


class FilterKind(StrEnum):
    """Search-form filter types understood by the backend."""

    KEYWORDS = "keywords"
    STEPPER = "stepper"
    RANGE = "range"
    TERMS = "terms"
    DATE = "date"
    AVAILABILITY = "availability"
    LOCATION = "location"
    SWITCHER = "switcher"
    OPEN_NOW = "open-now"
    ORDER_BY = "order-by"


class RangeHandles(StrEnum):
    """Number of slider handles on a range filter."""

    SINGLE = "single"
    DOUBLE = "double"


class RangeCompare(StrEnum):
    """How a range filter compares the handle value(s) against posts."""

    IN_RANGE = "in_range"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    OUTSIDE_RANGE = "outside_range"


class LocationMethod(StrEnum):
    """Location search method; selects the location wire grammar."""

    RADIUS = "radius"
    AREA = "area"


class DateInputMode(StrEnum):
    """Availability filter input mode."""

    SINGLE_DATE = "single-date"
    DATE_RANGE = "date-range"
