"""Form query strings: wire values as URL search parameters.

The post type travels under ``type``; every filter travels under its own
key with no prefix. Pagination parameters (``page``, ``pg``) belong to the
results view and survive a form reset.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlencode

from facetctl.domain.codecs import format_number
from facetctl.domain.types import WireValue

POST_TYPE_PARAM = "type"
SYSTEM_PARAMS: tuple[str, ...] = ("page", "pg")


@dataclass(frozen=True)
class ParsedQuery:
    post_type: str | None = None
    values: dict[str, str] = field(default_factory=dict)
    system: dict[str, str] = field(default_factory=dict)


def _param_text(value: WireValue) -> str:
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (int, float)):
        return format_number(value)
    return "" if value is None else str(value)


def _pairs(search: str) -> list[tuple[str, str]]:
    return parse_qsl(search.lstrip("?"), keep_blank_values=True)


def _encode(pairs: Iterable[tuple[str, str]]) -> str:
    return urlencode(list(pairs), safe="*")


def build_query(
    values: Mapping[str, WireValue],
    post_type: str | None = None,
    *,
    post_type_param: str = POST_TYPE_PARAM,
) -> str:
    """Write the non-empty wire values as a query string (no leading ``?``)."""
    pairs: list[tuple[str, str]] = []
    if post_type:
        pairs.append((post_type_param, post_type))
    for key, value in values.items():
        text = _param_text(value)
        if text:
            pairs.append((key, text))
    return _encode(pairs)


def parse_query(
    search: str,
    *,
    post_type_param: str = POST_TYPE_PARAM,
    system_params: Iterable[str] = SYSTEM_PARAMS,
) -> ParsedQuery:
    """Split a query string into post type, filter values and system params.

    The first post type wins; for a repeated filter key the last value wins.
    """
    system_keys = set(system_params)
    post_type: str | None = None
    values: dict[str, str] = {}
    system: dict[str, str] = {}
    for key, value in _pairs(search):
        if key == post_type_param:
            if post_type is None:
                post_type = value
        elif key in system_keys:
            system[key] = value
        else:
            values[key] = value
    return ParsedQuery(post_type=post_type, values=values, system=system)


def clear_query(
    search: str,
    keep_post_type: str | None = None,
    *,
    post_type_param: str = POST_TYPE_PARAM,
    system_params: Iterable[str] = SYSTEM_PARAMS,
) -> str:
    """Drop every filter parameter from *search*.

    System parameters are kept. The post type is set to *keep_post_type*
    when given and removed otherwise.
    """
    system_keys = set(system_params)
    kept = [(key, value) for key, value in _pairs(search) if key in system_keys]
    if keep_post_type:
        kept.append((post_type_param, keep_post_type))
    return _encode(kept)
