"""Incremental "load more" windows over a flattened term list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from facetctl.domain.terms import TermNode


def visible_slice[T](flat: Sequence[T], per_page: int, page: int) -> list[T]:
    """The first ``per_page * page`` items of *flat*.

    Raises:
        ValueError: if *per_page* or *page* is below 1.
    """
    if per_page < 1 or page < 1:
        raise ValueError(f"per_page and page must be positive, got {per_page}, {page}")
    return list(flat[: per_page * page])


@dataclass(frozen=True)
class PageWindow:
    """Current page of a term list; ``load_more`` returns the next window."""

    per_page: int
    page: int = 1

    def __post_init__(self) -> None:
        if self.per_page < 1 or self.page < 1:
            raise ValueError(
                f"per_page and page must be positive, got {self.per_page}, {self.page}"
            )

    @property
    def limit(self) -> int:
        return self.per_page * self.page

    def visible[T](self, flat: Sequence[T]) -> list[T]:
        return visible_slice(flat, self.per_page, self.page)

    def has_more(self, total: int) -> bool:
        return self.limit < total

    def load_more(self) -> PageWindow:
        return PageWindow(per_page=self.per_page, page=self.page + 1)

    def reset(self) -> PageWindow:
        return PageWindow(per_page=self.per_page)


def search_terms(flat: Sequence[TermNode], query: str) -> list[TermNode]:
    """Terms whose label contains *query*, case-insensitively.

    Searches the whole list regardless of the current page. A blank query
    matches nothing.
    """
    needle = query.strip().casefold()
    if not needle:
        return []
    return [node for node in flat if needle in node.label.casefold()]
