"""TermTree: ownership tree built from a server-supplied taxonomy payload.

Each node owns its ordered child list. Parent links are weak back-references
used only for upward traversal; the tree's root list keeps every node alive.
A flat slug index gives O(1) lookup.

The "has selection" hint shown next to collapsed parents is never stored on
the nodes. It is recomputed from (selection, tree shape) on demand, so no
toggle sequence can leave a stale flag behind.

INVARIANT: Every node in the slug index is reachable from the root list.
INVARIANT: depth(root) == 0 and depth(child) == depth(parent) + 1.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

logger = logging.getLogger(__name__)


class TermPayload(BaseModel):
    """One term as returned by the taxonomy endpoint."""

    model_config = ConfigDict(extra="allow")

    slug: str
    label: str = ""
    term_taxonomy_id: int | None = None
    icon: str | None = None
    children: list[TermPayload] = Field(default_factory=list)


_PAYLOAD_ADAPTER: TypeAdapter[list[TermPayload]] = TypeAdapter(list[TermPayload])


@dataclass(eq=False)
class TermNode:
    """A taxonomy term inside a :class:`TermTree`."""

    slug: str
    label: str
    term_taxonomy_id: int | None = None
    icon: str | None = None
    depth: int = 0
    children: list[TermNode] = field(default_factory=list)
    _parent_ref: weakref.ReferenceType[TermNode] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def parent(self) -> TermNode | None:
        """The parent node, or None for roots (non-owning)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_leaf(self) -> bool:
        return not self.children


class TermTree:
    """Read-mostly term hierarchy with a flat slug index."""

    def __init__(self, roots: list[TermNode], index: dict[str, TermNode]) -> None:
        self._roots = roots
        self._index = index

    @classmethod
    def build(cls, payload: Iterable[Mapping[str, Any] | TermPayload]) -> TermTree:
        """Validate a nested term payload and build the tree.

        Parent references and depths are established exactly once here.
        When a slug occurs more than once, the first occurrence wins in
        the index; later duplicates stay in the tree for display only.

        Raises:
            pydantic.ValidationError: if the payload is malformed.
        """
        terms = _PAYLOAD_ADAPTER.validate_python(
            [t.model_dump() if isinstance(t, TermPayload) else t for t in payload]
        )
        index: dict[str, TermNode] = {}

        def setup(term: TermPayload, parent: TermNode | None) -> TermNode:
            node = TermNode(
                slug=term.slug,
                label=term.label or term.slug,
                term_taxonomy_id=term.term_taxonomy_id,
                icon=term.icon,
                depth=parent.depth + 1 if parent is not None else 0,
            )
            if parent is not None:
                node._parent_ref = weakref.ref(parent)
            if node.slug in index:
                logger.warning("Duplicate term slug %r in payload; keeping first", node.slug)
            else:
                index[node.slug] = node
            node.children = [setup(child, node) for child in term.children]
            return node

        roots = [setup(term, None) for term in terms]
        return cls(roots, index)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def roots(self) -> tuple[TermNode, ...]:
        return tuple(self._roots)

    def get(self, slug: str) -> TermNode | None:
        return self._index.get(slug)

    def label_for(self, slug: str) -> str:
        """Display label for *slug*; unknown slugs display as themselves."""
        node = self._index.get(slug)
        return node.label if node is not None else slug

    def __contains__(self, slug: object) -> bool:
        return slug in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[TermNode]:
        return iter(self.flatten())

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def ancestors(self, slug: str) -> list[TermNode]:
        """Ancestors of *slug*, nearest first. Unknown slugs have none."""
        node = self._index.get(slug)
        chain: list[TermNode] = []
        parent = node.parent if node is not None else None
        while parent is not None:
            chain.append(parent)
            parent = parent.parent
        return chain

    def descendants(self, slug: str) -> list[TermNode]:
        """All descendants of *slug* in depth-first order."""
        node = self._index.get(slug)
        if node is None:
            return []
        return _preorder(node.children)

    def is_ancestor(self, ancestor: str, slug: str) -> bool:
        """True if *ancestor* is a strict ancestor of *slug*."""
        return any(node.slug == ancestor for node in self.ancestors(slug))

    def flatten(self) -> list[TermNode]:
        """Every node in display order (depth-first, children after parent)."""
        return _preorder(self._roots)

    # ------------------------------------------------------------------
    # Derived selection hints
    # ------------------------------------------------------------------

    def selection_hints(self, selected: Iterable[str]) -> frozenset[str]:
        """Slugs of every node that has at least one selected descendant."""
        hints: set[str] = set()
        for slug in selected:
            hints.update(node.slug for node in self.ancestors(slug))
        return frozenset(hints)

    def has_selection(self, slug: str, selected: Iterable[str]) -> bool:
        """True if any strict descendant of *slug* is in *selected*."""
        return slug in self.selection_hints(selected)


def _preorder(nodes: list[TermNode]) -> list[TermNode]:
    result: list[TermNode] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        result.append(node)
        stack.extend(reversed(node.children))
    return result
