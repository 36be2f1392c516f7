from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.canonical import ADDRESS_COMPONENT_KEYS
from ..models.errors import InvalidInputError

"""Address combiner and best-effort reverse parser.

combine_address() output shape:

    street, apartment, city, state postal, country

State and postal form one comma-separated unit joined by a single space.
Absent parts are omitted entirely (no empty placeholders, no doubled
separators).

parse_address() is lossy: it guesses positions from comma segments and is
not expected to invert combine_address().
"""

__all__ = [
    "ParsedAddress",
    "combine_address",
    "combine_address_from_row",
    "parse_address",
    "looks_like_address",
    "format_address",
]

ADDRESS_FIELDS = ("street", "apartment", "city", "state", "postal", "country")

_STREET_KEYWORD_RE = re.compile(
    r"\b(street|st|avenue|ave|road|rd|drive|dr|lane|ln|boulevard|blvd|way|court|ct|place|pl|apt|unit|suite)\b",
    re.IGNORECASE,
)
_UNIT_LIKE_RE = re.compile(r"^(apt|unit|suite|#|\d+[a-z]?)", re.IGNORECASE)
_DIGITS_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class ParsedAddress:
    street: str = ""
    apartment: str = ""
    city: str = ""
    state: str = ""
    postal: str = ""
    country: str = ""

    def to_dict(self) -> dict[str, str]:
        return {f: getattr(self, f) for f in ADDRESS_FIELDS}


def _part(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def combine_address(
    street: Any = "",
    apartment: Any = "",
    city: Any = "",
    state: Any = "",
    postal: Any = "",
    country: Any = "",
) -> str:
    parts = [p for p in (_part(street), _part(apartment), _part(city)) if p]
    state_postal = " ".join(p for p in (_part(state), _part(postal)) if p)
    if state_postal:
        parts.append(state_postal)
    if _part(country):
        parts.append(_part(country))
    return ", ".join(parts)


def normalize_address_columns(address_columns: Mapping[str, Any]) -> dict[str, str]:
    """Accept component labels ('Postal Code') or field keys ('postal').

    Raises:
        InvalidInputError: unknown component key
    """
    if not isinstance(address_columns, Mapping):
        raise InvalidInputError("address components must be an object")
    out: dict[str, str] = {}
    for key, column in address_columns.items():
        field = ADDRESS_COMPONENT_KEYS.get(key, key)
        if field not in ADDRESS_FIELDS:
            raise InvalidInputError(
                f"unknown address component '{key}' (valid: {', '.join(ADDRESS_FIELDS)})"
            )
        if column:
            out[field] = str(column)
    return out


def combine_address_from_row(address_columns: Mapping[str, Any], row: Sequence[Any], headers: Sequence[Any]) -> str:
    """Combine the address components of one source row.

    A component whose header is missing from `headers` reads as empty.
    """
    columns = normalize_address_columns(address_columns)
    index = {h: i for i, h in reversed(list(enumerate(headers)))}
    values: dict[str, Any] = {}
    for field, column in columns.items():
        idx = index.get(column, -1)
        values[field] = row[idx] if 0 <= idx < len(row) else ""
    return combine_address(**values)


def _parse_state_postal(text: str) -> tuple[str, str]:
    parts = text.strip().split()
    if not parts:
        return "", ""
    if len(parts) == 1:
        if _DIGITS_RE.match(parts[0]):
            return "", parts[0]
        return parts[0], ""
    if _DIGITS_RE.match(parts[-1]):
        return " ".join(parts[:-1]), parts[-1]
    return " ".join(parts), ""


def parse_address(full_address: Any) -> ParsedAddress:
    """Split a combined address on commas using position heuristics.

    The second segment is taken as apartment when it starts unit-like
    (apt/unit/suite/#/number) or is shorter than 10 characters, else city.
    """
    if not isinstance(full_address, str) or not full_address.strip():
        return ParsedAddress()
    parts = [p.strip() for p in full_address.split(",") if p.strip()]
    if not parts:
        return ParsedAddress()

    fields: dict[str, str] = {"street": parts[0]}
    if len(parts) >= 2:
        second = parts[1]
        if _UNIT_LIKE_RE.match(second) or len(second) < 10:
            fields["apartment"] = second
            if len(parts) >= 3:
                fields["city"] = parts[2]
            state_idx = 3
        else:
            fields["city"] = second
            state_idx = 2
        if len(parts) > state_idx:
            fields["state"], fields["postal"] = _parse_state_postal(parts[state_idx])
        if len(parts) > state_idx + 1:
            fields["country"] = parts[state_idx + 1]
    return ParsedAddress(**fields)


def looks_like_address(value: Any) -> bool:
    """Street keyword + digit, or comma + digit."""
    if not isinstance(value, str) or not value:
        return False
    has_digit = any(ch.isdigit() for ch in value)
    if not has_digit:
        return False
    return bool(_STREET_KEYWORD_RE.search(value)) or "," in value


def format_address(address: Any) -> str:
    """Collapse whitespace and normalise comma separators to ', '."""
    if not isinstance(address, str) or not address:
        return ""
    text = re.sub(r"\s+", " ", address.strip())
    return re.sub(r"\s*,\s*", ", ", text)
