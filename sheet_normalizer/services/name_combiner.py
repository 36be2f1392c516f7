from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.errors import InvalidInputError

"""Name combiner and best-effort reverse parser."""

__all__ = [
    "NameParts",
    "combine_name",
    "combine_name_from_row",
    "split_name",
    "detect_name_type",
    "format_name",
]


@dataclass(frozen=True)
class NameParts:
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""


def combine_name(first: Any, last: Any, middle: Any = "") -> str:
    """Join non-blank parts in First Middle Last order with single spaces.

    >>> combine_name("John", "Smith", "Michael")
    'John Michael Smith'
    >>> combine_name("John", "", "")
    'John'
    """
    parts = (str(p).strip() for p in (first, middle, last) if p is not None)
    return " ".join(p for p in parts if p)


def combine_name_from_row(name_columns: Mapping[str, Any], row: Sequence[Any], headers: Sequence[Any]) -> str:
    """Combine one row using {'first': col, 'last': col, 'middle': col|None}.

    Raises:
        InvalidInputError: first/last column not given
    """
    first_col = name_columns.get("first")
    last_col = name_columns.get("last")
    if not first_col or not last_col:
        raise InvalidInputError("first and last name columns are required")
    index = {h: i for i, h in reversed(list(enumerate(headers)))}

    def _value(column: Any) -> Any:
        if not column:
            return ""
        idx = index.get(column, -1)
        return row[idx] if 0 <= idx < len(row) else ""

    return combine_name(_value(first_col), _value(last_col), _value(name_columns.get("middle")))


def split_name(full_name: Any) -> NameParts:
    """Whitespace split: 1 token first, 2 tokens first+last, 3+ first+middles+last.

    Diagnostic only; not meant to round-trip combine_name().
    """
    if not isinstance(full_name, str):
        return NameParts()
    tokens = full_name.split()
    if not tokens:
        return NameParts()
    if len(tokens) == 1:
        return NameParts(first_name=tokens[0])
    if len(tokens) == 2:
        return NameParts(first_name=tokens[0], last_name=tokens[1])
    return NameParts(first_name=tokens[0], middle_name=" ".join(tokens[1:-1]), last_name=tokens[-1])


def detect_name_type(value: Any) -> str:
    """'last' for ALL-CAPS or comma-containing values, else 'first'."""
    if not isinstance(value, str) or not value:
        return "unknown"
    trimmed = value.strip()
    if len(trimmed) > 1 and trimmed == trimmed.upper():
        return "last"
    if "," in trimmed:
        return "last"
    return "first"


def format_name(name: Any) -> str:
    """Title-case each space separated word."""
    if not isinstance(name, str) or not name:
        return ""
    words = name.strip().lower().split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)
