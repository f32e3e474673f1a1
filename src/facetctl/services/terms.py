"""TermsService: term filter display and selection against a captured payload.

Two surfaces:
- show: the visible, paginated (or searched) term list with live counts
- select: replay toggles against a current selection and encode the result
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from facetctl.config.models import TermsFilterConfig
from facetctl.domain.codecs import TermsCodec
from facetctl.domain.narrowing import AdaptiveNarrower
from facetctl.domain.pagination import PageWindow, search_terms
from facetctl.domain.selection import SelectionEngine, selection_summary
from facetctl.domain.terms import TermTree
from facetctl.domain.values import TermsValue
from facetctl.infrastructure.payloads import PayloadError, read_count_payload, read_term_payload
from facetctl.services.base import BaseService
from facetctl.services.result import ErrorCode, ServiceResult
from facetctl.services.telemetry import traced

logger = logging.getLogger(__name__)


class TermsService(BaseService):
    """Operations on a single ``terms`` filter."""

    def _terms_config(self, op: str, key: str) -> TermsFilterConfig | ServiceResult:
        config = self._form.get_filter(key)
        if config is None:
            return self._unknown_filter(op, key)
        if not isinstance(config, TermsFilterConfig):
            return self._wrong_kind(op, config, "a terms filter")
        return config

    @staticmethod
    def _load_tree(op: str, terms_path: Path) -> TermTree | ServiceResult:
        try:
            return TermTree.build(read_term_payload(terms_path))
        except PayloadError as exc:
            return ServiceResult.failure(
                op, ErrorCode.PAYLOAD_ERROR, exc.reason, path=str(exc.path)
            )
        except ValidationError as exc:
            return ServiceResult.failure(
                op,
                ErrorCode.PAYLOAD_ERROR,
                "Term payload does not match the expected shape",
                path=str(terms_path),
                errors=[e["msg"] for e in exc.errors()],
            )

    # ------------------------------------------------------------------
    # show
    # ------------------------------------------------------------------

    @traced
    def show(
        self,
        key: str,
        terms_path: Path,
        *,
        counts_path: Path | None = None,
        current: str | None = None,
        page: int = 1,
        search: str | None = None,
    ) -> ServiceResult:
        """Visible terms for filter *key*.

        Args:
            key: A ``terms`` filter key.
            terms_path: JSON term payload for the filter's taxonomy.
            counts_path: Optional ``narrowed_values`` snapshot.
            current: Current wire value, for selection markers.
            page: Number of pages loaded so far (1-based).
            search: Label search; bypasses pagination when non-blank.
        """
        op = "show_terms"
        config = self._terms_config(op, key)
        if isinstance(config, ServiceResult):
            return config
        tree = self._load_tree(op, terms_path)
        if isinstance(tree, ServiceResult):
            return tree

        narrower = AdaptiveNarrower()
        if counts_path is not None:
            try:
                narrower.update(read_count_payload(counts_path))
            except PayloadError as exc:
                return ServiceResult.failure(
                    op, ErrorCode.PAYLOAD_ERROR, exc.reason, path=str(exc.path)
                )
            except ValidationError as exc:
                return ServiceResult.failure(
                    op,
                    ErrorCode.PAYLOAD_ERROR,
                    "Count payload does not match the expected shape",
                    path=str(counts_path),
                    errors=[e["msg"] for e in exc.errors()],
                )

        if page < 1:
            return ServiceResult.failure(op, ErrorCode.INVALID_VALUE, "Page must be 1 or more")

        selected = TermsCodec().decode(current).slugs
        hints = tree.selection_hints(selected)
        flat = narrower.visible_terms(tree, config.taxonomy, hide_empty=config.hide_empty_terms)

        searching = bool(search and search.strip())
        if searching:
            shown = search_terms(flat, search or "")
            has_more = False
        else:
            window = PageWindow(per_page=config.per_page, page=page)
            shown = window.visible(flat)
            has_more = window.has_more(len(flat))

        terms: list[dict[str, Any]] = [
            {
                "slug": node.slug,
                "label": node.label,
                "depth": node.depth,
                "count": narrower.term_count(config.taxonomy, node),
                "selected": node.slug in selected,
                "has_selection": node.slug in hints,
            }
            for node in shown
        ]
        summary = selection_summary(selected, tree)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "key": key,
                "taxonomy": config.taxonomy,
                "total": len(flat),
                "page": page,
                "search": search if searching else None,
                "has_more": has_more,
                "terms": terms,
                "selected": list(selected),
                "summary": {
                    "primary_label": summary.primary_label,
                    "additional_count": summary.additional_count,
                },
            },
        )

    # ------------------------------------------------------------------
    # select
    # ------------------------------------------------------------------

    @traced
    def select(
        self,
        key: str,
        terms_path: Path,
        toggles: Sequence[str],
        *,
        current: str | None = None,
    ) -> ServiceResult:
        """Apply *toggles* in order to the selection encoded by *current*."""
        op = "select_terms"
        config = self._terms_config(op, key)
        if isinstance(config, ServiceResult):
            return config
        tree = self._load_tree(op, terms_path)
        if isinstance(tree, ServiceResult):
            return tree

        codec = TermsCodec()
        initial = codec.decode(current).slugs
        warnings = [
            f"Term {slug!r} is not in the payload; kept as a top-level term"
            for slug in dict.fromkeys((*initial, *toggles))
            if slug not in tree
        ]

        selection = SelectionEngine(tree).replay(
            toggles, multiple=config.multiple, initial=initial
        )
        logger.debug("Selection for %s: %s -> %s", key, list(initial), selection)
        summary = selection_summary(selection, tree)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "key": key,
                "multiple": config.multiple,
                "selected": selection,
                "wire": codec.encode(TermsValue(slugs=tuple(selection))),
                "summary": {
                    "primary_label": summary.primary_label,
                    "additional_count": summary.additional_count,
                },
            },
            warnings=warnings,
        )
