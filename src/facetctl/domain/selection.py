"""SelectionEngine: mutual-exclusion rules for hierarchical term selections.

Selecting a term supersedes any selected ancestor, and selecting an ancestor
supersedes any selected descendant, so a selection never holds both ends of
an ancestor-descendant pair.

``apply`` is not commutative: replaying the same toggles in a different
order can produce a different selection. Callers must replay toggles in the
order the user performed them.

INVARIANT: ``apply`` never raises. Slugs absent from the tree behave as
root nodes with no ancestors and no descendants.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from facetctl.domain.terms import TermTree

logger = logging.getLogger(__name__)


class SelectionEngine:
    """Applies toggles to an ordered selection against one term tree."""

    def __init__(self, tree: TermTree) -> None:
        self._tree = tree

    @property
    def tree(self) -> TermTree:
        return self._tree

    def apply(self, current: Sequence[str], toggled: str, *, multiple: bool) -> list[str]:
        """Return the selection that results from toggling *toggled*.

        Single-select replaces the selection with ``[toggled]``. In
        multiple-select mode, a slug already present is removed; otherwise
        it is appended, its ancestors are dropped, and any selected slug
        that descends from it is dropped.
        """
        if toggled not in self._tree:
            logger.debug("Toggled slug %r not in tree; treating as root", toggled)

        if not multiple:
            return [toggled]

        if toggled in current:
            return [slug for slug in current if slug != toggled]

        selection = [*current, toggled]

        # A selected descendant supersedes its ancestors.
        ancestors = {node.slug for node in self._tree.ancestors(toggled)}
        selection = [slug for slug in selection if slug not in ancestors]

        # A selected ancestor supersedes its descendants.
        return [
            slug
            for slug in selection
            if slug == toggled or not self._tree.is_ancestor(toggled, slug)
        ]

    def replay(
        self,
        toggles: Sequence[str],
        *,
        multiple: bool,
        initial: Sequence[str] = (),
    ) -> list[str]:
        """Apply *toggles* in order, starting from *initial*."""
        selection = list(initial)
        for slug in toggles:
            selection = self.apply(selection, slug, multiple=multiple)
        return selection


@dataclass(frozen=True)
class SelectionSummary:
    """What a collapsed filter button shows for a selection."""

    primary_label: str | None
    additional_count: int


def selection_summary(selected: Sequence[str], tree: TermTree) -> SelectionSummary:
    """Primary label (first selected term) and how many more are selected."""
    if not selected:
        return SelectionSummary(primary_label=None, additional_count=0)
    return SelectionSummary(
        primary_label=tree.label_for(selected[0]),
        additional_count=len(selected) - 1,
    )
