"""Live result counts overlaid on term trees and ranges.

The search backend reports, for the currently applied filters, how many
results each term would yield and which numeric span each range filter
still covers. The narrower answers read-only questions against the latest
snapshot; it never mutates a selection or a tree.

Count semantics: ``0`` means "selectable, but yields no results";
``None`` means "no narrowing data", and callers fall back to static config.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from facetctl.domain.codecs import RangeDomain
from facetctl.domain.terms import TermNode, TermTree
from facetctl.domain.types import RangeHandles
from facetctl.domain.values import RangeValue

logger = logging.getLogger(__name__)


class NarrowedRange(BaseModel):
    model_config = {"frozen": True}

    min: float | None = None
    max: float | None = None


class NarrowedValues(BaseModel):
    """One snapshot from the adaptive-count endpoint.

    ``terms`` maps taxonomy key -> term_taxonomy_id -> result count.
    ``ranges`` maps filter key -> narrowed bounds.
    """

    model_config = {"frozen": True}

    terms: dict[str, dict[int, int]] = Field(default_factory=dict)
    ranges: dict[str, NarrowedRange] = Field(default_factory=dict)


class AdaptiveNarrower:
    """Holds the latest :class:`NarrowedValues` snapshot."""

    def __init__(self, snapshot: NarrowedValues | None = None) -> None:
        self._snapshot = snapshot

    @property
    def snapshot(self) -> NarrowedValues | None:
        return self._snapshot

    def update(self, snapshot: NarrowedValues | Mapping[str, Any] | None) -> None:
        """Replace the snapshot wholesale; nothing from the previous one survives.

        Raises:
            pydantic.ValidationError: if a mapping snapshot is malformed.
        """
        if snapshot is not None and not isinstance(snapshot, NarrowedValues):
            snapshot = NarrowedValues.model_validate(snapshot)
        self._snapshot = snapshot

    # ------------------------------------------------------------------
    # Terms
    # ------------------------------------------------------------------

    def term_count(self, taxonomy: str, node: TermNode) -> int | None:
        """Live result count for *node*, or None when there is no data.

        Terms missing from a taxonomy's count map have no results; the
        backend only reports non-zero counts.
        """
        if self._snapshot is None or node.term_taxonomy_id is None:
            return None
        counts = self._snapshot.terms.get(taxonomy)
        if counts is None:
            return None
        return counts.get(node.term_taxonomy_id, 0)

    def visible_terms(
        self,
        tree: TermTree,
        taxonomy: str,
        *,
        hide_empty: bool = False,
    ) -> list[TermNode]:
        """Display flattening of *tree*.

        With *hide_empty*, terms counted at zero are omitted along with
        their subtrees. Terms without data are always shown.
        """
        if not hide_empty:
            return tree.flatten()
        visible: list[TermNode] = []

        def walk(nodes: Iterable[TermNode]) -> None:
            for node in nodes:
                if self.term_count(taxonomy, node) == 0:
                    continue
                visible.append(node)
                walk(node.children)

        walk(tree.roots)
        return visible

    # ------------------------------------------------------------------
    # Ranges
    # ------------------------------------------------------------------

    def narrowed_range(self, key: str) -> NarrowedRange | None:
        """Narrowed bounds for *key*, only when both sides are numeric."""
        if self._snapshot is None:
            return None
        narrowed = self._snapshot.ranges.get(key)
        if narrowed is None or narrowed.min is None or narrowed.max is None:
            return None
        return narrowed

    def effective_domain(self, key: str, domain: RangeDomain) -> RangeDomain:
        """The configured domain, narrowed to the live bounds when known."""
        narrowed = self.narrowed_range(key)
        if narrowed is None:
            return domain
        return domain.with_bounds(narrowed.min, narrowed.max)  # type: ignore[arg-type]

    def is_collapsed(self, key: str) -> bool:
        """True when every remaining result shares one value for *key*."""
        narrowed = self.narrowed_range(key)
        return narrowed is not None and narrowed.min == narrowed.max

    def clamp(self, value: RangeValue, domain: RangeDomain) -> RangeValue:
        """Return *value* with each set side clamped into *domain*."""

        def fit(number: float | None) -> float | None:
            if number is None:
                return None
            return min(max(number, domain.start), domain.end)

        if domain.handles is RangeHandles.DOUBLE:
            default = domain.default_value()
            low = fit(value.min if value.min is not None else default.min)
            high = fit(value.max if value.max is not None else default.max)
            if low is not None and high is not None and low > high:
                logger.debug("Range %r inverted after clamping; collapsing", value)
                low = high
            return RangeValue(min=low, max=high)
        return RangeValue(min=fit(value.min), max=fit(value.max))
