from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..models.canonical import ADDRESS_COMPONENTS, NAME_COMPONENTS, SEMANTIC_MAPPING_RULES, normalize_header
from ..models.errors import InvalidInputError
from ..models.relationships import ColumnRelationships
from .address_combiner import looks_like_address

"""Relationship detector: are name / address split across columns or combined?

Three independent checks:
1. Name split - First Name and Last Name matched by two distinct headers.
   A lone component is not actionable and every captured name component is
   discarded.
2. Address split - any one address component header is enough.
3. Combined address - an "address"-like header whose sampled values look
   like a full address (street keyword + digit, or comma + digit).

Header matching: normalized exact match, or keyword substring where the
header is more than 2 characters longer than the keyword (keeps "Name" from
matching inside "First Name").
"""

__all__ = [
    "header_matches",
    "find_component_headers",
    "detect",
]

logger = logging.getLogger(__name__)


def header_matches(header: Any, keywords: Iterable[str]) -> bool:
    normalized = normalize_header(header)
    if not normalized:
        return False
    for kw in keywords:
        if normalized == kw:
            return True
        if kw in normalized and len(normalized) > len(kw) + 2:
            return True
    return False


def find_component_headers(headers: Sequence[Any], components: dict[str, tuple[str, ...]]) -> dict[str, str]:
    """First matching header for each component, in component declaration order."""
    found: dict[str, str] = {}
    for component, keywords in components.items():
        for header in headers:
            if header_matches(header, keywords):
                found[component] = header
                break
    return found


def _find_combined_address(headers: Sequence[Any], sample_rows: Sequence[Sequence[Any]]) -> str | None:
    keywords = SEMANTIC_MAPPING_RULES["Address"]
    for idx, header in enumerate(headers):
        normalized = normalize_header(header)
        if not normalized or not any(normalized == kw or kw in normalized for kw in keywords):
            continue
        values = [row[idx] for row in sample_rows if idx < len(row) and row[idx]]
        if any(looks_like_address(v) for v in values):
            return header
    return None


def detect(headers: Sequence[Any], sample_rows: Sequence[Sequence[Any]]) -> ColumnRelationships:
    """Inspect headers + sample rows for split or combined name/address fields.

    Raises:
        InvalidInputError: headers or sample_rows not sequences
    """
    if not isinstance(headers, Sequence) or isinstance(headers, str):
        raise InvalidInputError("headers must be an array")
    if not isinstance(sample_rows, Sequence) or isinstance(sample_rows, str):
        raise InvalidInputError("sample_rows must be an array")

    name_components = find_component_headers(headers, NAME_COMPONENTS)
    first = name_components.get("First Name")
    last = name_components.get("Last Name")
    has_name_split = bool(first and last and first != last)
    if not has_name_split:
        if name_components:
            logger.debug(f"name components {name_components} not actionable, discarded")
        name_components = {}

    address_components = find_component_headers(headers, ADDRESS_COMPONENTS)
    combined = _find_combined_address(headers, sample_rows)

    result = ColumnRelationships(
        has_name_split=has_name_split,
        name_components=name_components,
        has_address_split=bool(address_components),
        address_components=address_components,
        has_combined_address=combined is not None,
        combined_address_column=combined,
    )
    logger.debug(result.summary())
    return result
