from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..models.canonical import (
    ADDRESS_COMPONENT_KEYS,
    ADDRESS_COMPONENTS,
    CANONICAL_COLUMNS,
    DERIVED,
    IDENTIFIER_EXCLUDED_FIELDS,
    IDENTIFIER_KEYWORDS,
    ORGANIZATION_KEYWORDS,
    PATTERNS,
    SEMANTIC_MAPPING_RULES,
    normalize_header,
)
from ..models.relationships import ColumnRelationships
from .address_combiner import looks_like_address
from .classifier import TypeTag, column_values, infer_type
from .relationships import detect

"""Column matching strategies.

A strategy turns headers + sample rows into a MappingPlan: the selections
handed to the mapping store plus the combiner inputs for split fields. The
pipeline only depends on the MatchingStrategy protocol, so alternative
strategies (an LLM agent, a user-edited plan) can be swapped in without
touching the row transformer.

KeywordMatchingStrategy precedence, each tier over all canonical columns in
schema order before the next tier starts:

    split fields -> 1. exact header -> 2. keyword substring -> 3. sample content

A header is assigned to at most one canonical column. Identifier-like
headers (id, index, serial, ...) never satisfy Amount, Product Quantity,
Contact Number or Age; organisation headers never satisfy Product Purchased.
An address split replaces an exactly named Address column only when at
least one of its components is named exactly as well.
"""

__all__ = [
    "MappingPlan",
    "MatchingStrategy",
    "KeywordMatchingStrategy",
]

logger = logging.getLogger(__name__)

GENDER_VALUES = frozenset({"M", "F", "MALE", "FEMALE"})

# Address keywords this short ("st", "apt", "unit", "pin") only match whole words
SHORT_KEYWORD_LENGTH = 4


@dataclass(frozen=True)
class MappingPlan:
    selections: dict[str, str]
    name_columns: dict[str, str] = field(default_factory=dict)  # first/last/middle -> header
    address_columns: dict[str, str] = field(default_factory=dict)  # street/.../country -> header
    matched_by: dict[str, str] = field(default_factory=dict)  # canonical -> tier label

    def to_dict(self) -> dict[str, object]:
        return {
            "selections": dict(self.selections),
            "name_columns": dict(self.name_columns),
            "address_columns": dict(self.address_columns),
            "matched_by": dict(self.matched_by),
        }


class MatchingStrategy(Protocol):
    def plan(
        self,
        headers: Sequence[str],
        sample_rows: Sequence[Sequence[Any]],
        relationships: ColumnRelationships | None = None,
    ) -> MappingPlan: ...


def _contains_word(normalized: str, keyword: str) -> bool:
    return re.search(rf"(^|[^a-z0-9]){re.escape(keyword)}($|[^a-z0-9])", normalized) is not None


class KeywordMatchingStrategy:
    """Deterministic three-tier keyword/content matcher."""

    def __init__(
        self,
        rules: dict[str, tuple[str, ...]] | None = None,
        *,
        identifier_keywords: tuple[str, ...] = IDENTIFIER_KEYWORDS,
        organization_keywords: tuple[str, ...] = ORGANIZATION_KEYWORDS,
        min_substring_length: int = 3,
    ) -> None:
        self.rules = rules or SEMANTIC_MAPPING_RULES
        self.identifier_keywords = identifier_keywords
        self.organization_keywords = organization_keywords
        self.min_substring_length = min_substring_length

    # -- exclusions ---------------------------------------------------------
    def is_excluded(self, column: str, header: str) -> bool:
        normalized = normalize_header(header)
        if column in IDENTIFIER_EXCLUDED_FIELDS and any(
            _contains_word(normalized, kw) for kw in self.identifier_keywords
        ):
            return True
        if column == "Product Purchased" and any(
            _contains_word(normalized, kw) for kw in self.organization_keywords
        ):
            return True
        return False

    # -- tiers ----------------------------------------------------------------
    def _exact(self, column: str, header: str, values: list[Any]) -> bool:
        return normalize_header(header) in self.rules.get(column, ())

    def _substring(self, column: str, header: str, values: list[Any]) -> bool:
        normalized = normalize_header(header)
        return any(
            kw in normalized
            for kw in self.rules.get(column, ())
            if len(kw) >= self.min_substring_length
        )

    def _content(self, column: str, header: str, values: list[Any]) -> bool:
        if not values:
            return False
        tag = infer_type(values)
        first = str(values[0]).strip()
        if column == "Date":
            return tag == TypeTag.DATE or bool(PATTERNS["date_iso"].match(first))
        if column == "Email":
            return tag == TypeTag.EMAIL
        if column == "Contact Number":
            return tag == TypeTag.PHONE and not PATTERNS["date_iso"].match(first)
        if column == "Amount":
            return tag == TypeTag.CURRENCY and ("$" in first or "." in first)
        if column == "Gender":
            return all(str(v).strip().upper() in GENDER_VALUES for v in values)
        if column == "Address":
            return any(looks_like_address(v) for v in values)
        return False

    def _run_tier(
        self,
        label: str,
        test: Callable[[str, str, list[Any]], bool],
        headers: Sequence[str],
        values_by_header: dict[str, list[Any]],
        selections: dict[str, str],
        used: set[str],
        matched_by: dict[str, str],
    ) -> None:
        for column in CANONICAL_COLUMNS:
            if selections[column]:
                continue
            for header in headers:
                if not header or header in used or self.is_excluded(column, header):
                    continue
                if test(column, header, values_by_header.get(header, [])):
                    selections[column] = header
                    used.add(header)
                    matched_by[column] = label
                    break

    def _component_match(self, header: str, keywords: tuple[str, ...]) -> bool:
        """Loose component test used when no header names the component exactly.

        Keywords of SHORT_KEYWORD_LENGTH characters or fewer count only as
        whole words, and such a hit is ignored when the header also carries a
        keyword of another field ("Unit Price" is an amount, not a unit).
        Identifier headers never qualify.
        """
        normalized = normalize_header(header)
        if not normalized or any(_contains_word(normalized, kw) for kw in self.identifier_keywords):
            return False
        if any(kw in normalized for kw in keywords if len(kw) > SHORT_KEYWORD_LENGTH):
            return True
        if not any(_contains_word(normalized, kw) for kw in keywords if len(kw) <= SHORT_KEYWORD_LENGTH):
            return False
        return not any(
            self._substring(column, header, [])
            for column in CANONICAL_COLUMNS
            if column not in ("Name", "Address")
        )

    def _resolve_address_components(
        self,
        headers: Sequence[str],
        detected: dict[str, str],
        claimed: set[str],
    ) -> tuple[dict[str, str], bool]:
        """Pick one header per detected address component.

        Per component: an exact keyword match among unclaimed headers, else
        the detected header if unclaimed and it passes `_component_match`,
        else the first unclaimed header that does. A header serves one
        component at most. Also returns whether any component matched exactly.
        """
        taken = set(claimed)
        resolved: dict[str, str] = {}
        any_exact = False
        for label, keywords in ADDRESS_COMPONENTS.items():
            if label not in detected:
                continue
            free = [h for h in headers if h and h not in taken]
            chosen = next((h for h in free if normalize_header(h) in keywords), None)
            if chosen is not None:
                any_exact = True
            elif detected[label] in free and self._component_match(detected[label], keywords):
                chosen = detected[label]
            else:
                chosen = next((h for h in free if self._component_match(h, keywords)), None)
            if chosen is None:
                logger.debug(f"address component {label} dropped: no usable header for '{detected[label]}'")
                continue
            resolved[ADDRESS_COMPONENT_KEYS[label]] = chosen
            taken.add(chosen)
        return resolved, any_exact

    def plan(
        self,
        headers: Sequence[str],
        sample_rows: Sequence[Sequence[Any]],
        relationships: ColumnRelationships | None = None,
    ) -> MappingPlan:
        if relationships is None:
            relationships = detect(headers, sample_rows)

        values_by_header: dict[str, list[Any]] = {}
        for idx, header in enumerate(headers):
            values_by_header.setdefault(header, column_values(sample_rows, idx))

        selections = {c: "" for c in CANONICAL_COLUMNS}
        matched_by: dict[str, str] = {}
        used: set[str] = set()

        name_columns: dict[str, str] = {}
        if relationships.has_name_split:
            comps = relationships.name_components
            name_columns = {"first": comps["First Name"], "last": comps["Last Name"]}
            if comps.get("Middle Name"):
                name_columns["middle"] = comps["Middle Name"]
            selections["Name"] = DERIVED
            matched_by["Name"] = "split"
            used.update(name_columns.values())

        self._run_tier("exact", self._exact, headers, values_by_header, selections, used, matched_by)

        address_columns: dict[str, str] = {}
        if relationships.has_address_split:
            resolved, any_exact = self._resolve_address_components(
                headers, relationships.address_components, used - {selections["Address"]}
            )
            address_header = selections["Address"] if matched_by.get("Address") == "exact" else ""
            if not resolved:
                logger.debug("no usable address component headers; not treated as split")
            elif address_header and not any_exact:
                logger.debug(
                    f"address split {resolved} ignored: '{address_header}' names the address exactly"
                )
            else:
                if address_header:
                    logger.debug(f"address split preferred over column '{address_header}'")
                address_columns = resolved
                selections["Address"] = DERIVED
                matched_by["Address"] = "split"
                used.update(address_columns.values())

        self._run_tier("substring", self._substring, headers, values_by_header, selections, used, matched_by)
        self._run_tier("content", self._content, headers, values_by_header, selections, used, matched_by)

        logger.debug(f"mapping plan: {selections}")
        return MappingPlan(
            selections=selections,
            name_columns=name_columns,
            address_columns=address_columns,
            matched_by=matched_by,
        )
