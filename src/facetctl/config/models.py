"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, facetctl.toml only contains the
form's filters and any overrides. A minimal form needs only
``[form] post_type`` and one ``[[form.filters]]`` entry.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator

from facetctl.domain.types import (
    DateInputMode,
    LocationMethod,
    RangeCompare,
    RangeHandles,
    WireValue,
)

# --- [[form.filters]] entries, discriminated on ``type`` ---


class BaseFilterConfig(BaseModel):
    """Fields shared by every filter kind."""

    model_config = {"frozen": True}

    key: str
    label: str = ""
    resets_to: WireValue = None

    @property
    def display_label(self) -> str:
        return self.label or self.key


class KeywordsFilterConfig(BaseFilterConfig):
    type: Literal["keywords"] = "keywords"


class StepperFilterConfig(BaseFilterConfig):
    type: Literal["stepper"] = "stepper"
    range_start: float | None = None
    range_end: float | None = None
    step_size: float = 1
    precision: int = Field(default=0, ge=0)


class RangeFilterConfig(BaseFilterConfig):
    type: Literal["range"] = "range"
    range_start: float = 0
    range_end: float = 100
    step_size: float = 1
    handles: RangeHandles = RangeHandles.DOUBLE
    compare: RangeCompare = RangeCompare.IN_RANGE

    @model_validator(mode="after")
    def check_bounds(self) -> RangeFilterConfig:
        if self.range_start > self.range_end:
            msg = f"range_start ({self.range_start}) is above range_end ({self.range_end})"
            raise ValueError(msg)
        return self


class TermsFilterConfig(BaseFilterConfig):
    type: Literal["terms"] = "terms"
    taxonomy: str
    multiple: bool = True
    per_page: int = Field(default=20, ge=1)
    hide_empty_terms: bool = False


class DateFilterConfig(BaseFilterConfig):
    type: Literal["date"] = "date"
    enable_range: bool = False


class AvailabilityFilterConfig(BaseFilterConfig):
    type: Literal["availability"] = "availability"
    input_mode: DateInputMode = DateInputMode.DATE_RANGE
    presets: list[str] = Field(default_factory=list)


class LocationFilterConfig(BaseFilterConfig):
    type: Literal["location"] = "location"
    default_radius: float = Field(default=10, gt=0)
    default_search_method: LocationMethod = LocationMethod.AREA


class SwitcherFilterConfig(BaseFilterConfig):
    type: Literal["switcher"] = "switcher"


class OpenNowFilterConfig(BaseFilterConfig):
    type: Literal["open-now"] = "open-now"


class OrderByFilterConfig(BaseFilterConfig):
    type: Literal["order-by"] = "order-by"
    choices: list[str] = Field(default_factory=list)


FilterConfig = Annotated[
    KeywordsFilterConfig
    | StepperFilterConfig
    | RangeFilterConfig
    | TermsFilterConfig
    | DateFilterConfig
    | AvailabilityFilterConfig
    | LocationFilterConfig
    | SwitcherFilterConfig
    | OpenNowFilterConfig
    | OrderByFilterConfig,
    Field(discriminator="type"),
]


# --- facetctl.toml sections ---


class FormConfig(BaseModel):
    """[form] section."""

    model_config = {"frozen": True}

    post_type: str | None = None
    filters: list[FilterConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_keys(self) -> FormConfig:
        seen: set[str] = set()
        for f in self.filters:
            if f.key in seen:
                raise ValueError(f"Duplicate filter key: {f.key!r}")
            seen.add(f.key)
        return self

    def get_filter(self, key: str) -> FilterConfig | None:
        return next((f for f in self.filters if f.key == key), None)

    @property
    def keys(self) -> list[str]:
        return [f.key for f in self.filters]


class QueryConfig(BaseModel):
    """[query] section."""

    model_config = {"frozen": True}

    post_type_param: str = "type"
    system_params: list[str] = Field(default_factory=lambda: ["page", "pg"])


class FacetConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    form: FormConfig = Field(default_factory=FormConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
