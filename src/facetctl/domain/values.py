"""Filter values, one frozen variant per filter kind.

Each variant round-trips through its codec (see :mod:`facetctl.domain.codecs`)
to exactly one wire scalar. Variants carry no wire syntax themselves; the
kind of a value is its class, never the shape of a string.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from facetctl.domain.types import LocationMethod


@dataclass(frozen=True)
class KeywordsValue:
    text: str = ""


@dataclass(frozen=True)
class StepperValue:
    number: float | None = None


@dataclass(frozen=True)
class RangeValue:
    """Numeric range. Single-handle ranges leave the unused side as None."""

    min: float | None = None
    max: float | None = None


@dataclass(frozen=True)
class TermsValue:
    """Ordered term slugs; the first slug is the primary (displayed) one."""

    slugs: tuple[str, ...] = ()


@dataclass(frozen=True)
class DateValue:
    start: date | None = None


@dataclass(frozen=True)
class DateRangeValue:
    """Date range where either side may be open."""

    start: date | None = None
    end: date | None = None

    @property
    def is_partial(self) -> bool:
        return (self.start is None) != (self.end is None)


@dataclass(frozen=True)
class DatePreset:
    """Opaque, server-resolved date choice such as ``this_weekend``."""

    key: str


@dataclass(frozen=True)
class LocationValue:
    """A searched place plus the geometry for the chosen method.

    ``method`` alone decides which geometry is sent. A value may carry
    both a center and a viewport (geocoders return both); the fields the
    method does not use are ignored on encode.
    """

    address: str
    method: LocationMethod = LocationMethod.AREA
    lat: float | None = None
    lng: float | None = None
    radius: float | None = None
    swlat: float | None = None
    swlng: float | None = None
    nelat: float | None = None
    nelng: float | None = None

    @classmethod
    def around(cls, address: str, lat: float, lng: float, radius: float) -> LocationValue:
        """A radius search around a point."""
        return cls(address=address, method=LocationMethod.RADIUS, lat=lat, lng=lng, radius=radius)

    @classmethod
    def within(
        cls,
        address: str,
        swlat: float,
        swlng: float,
        nelat: float,
        nelng: float,
    ) -> LocationValue:
        """A bounding-box search (south-west and north-east corners)."""
        return cls(
            address=address,
            method=LocationMethod.AREA,
            swlat=swlat,
            swlng=swlng,
            nelat=nelat,
            nelng=nelng,
        )


@dataclass(frozen=True)
class SwitcherValue:
    on: bool = False


@dataclass(frozen=True)
class OrderByValue:
    """Sort choice; proximity orderings carry the reference point."""

    key: str = ""
    lat: float | None = None
    lng: float | None = None


type FilterValue = (
    KeywordsValue
    | StepperValue
    | RangeValue
    | TermsValue
    | DateValue
    | DateRangeValue
    | DatePreset
    | LocationValue
    | SwitcherValue
    | OrderByValue
)
