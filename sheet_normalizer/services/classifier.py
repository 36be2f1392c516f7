from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..models.canonical import PATTERNS
from ..models.source_table import is_blank
from .formatting import format_value

"""Value classifier: infer a column's semantic type from sample values.

Only the first non-blank value is inspected. Patterns are tried in a fixed
order and the first match wins:

    phone -> email -> currency -> date (ISO, US, EU) -> integer -> decimal -> string

Because of this order an ISO date such as "2024-01-15" (10 characters of
digits and dashes) classifies as phone, and plain integers classify as
currency. Callers were tuned against this exact behavior.
"""

__all__ = [
    "TypeTag",
    "ColumnAnalysis",
    "infer_type",
    "analyze_columns",
]


class TypeTag(str, Enum):
    EMPTY = "empty"
    PHONE = "phone"
    EMAIL = "email"
    CURRENCY = "currency"
    DATE = "date"
    NUMBER = "number"
    STRING = "string"


@dataclass(frozen=True)
class ColumnAnalysis:
    column: str
    data_type: TypeTag
    example: str

    def to_dict(self) -> dict[str, str]:
        return {"column": self.column, "data_type": self.data_type.value, "example": self.example}


def infer_type(values: Sequence[Any] | None) -> TypeTag:
    """Return the TypeTag of the first non-blank value in `values`."""
    if not values:
        return TypeTag.EMPTY
    first = next((v for v in values if not is_blank(v)), None)
    if first is None:
        return TypeTag.EMPTY

    text = str(first).strip()
    if PATTERNS["phone"].match(text):
        return TypeTag.PHONE
    if PATTERNS["email"].search(text):
        return TypeTag.EMAIL
    if PATTERNS["currency"].match(text.replace(",", "")):
        return TypeTag.CURRENCY
    for key in ("date_iso", "date_us", "date_eu"):
        if PATTERNS[key].match(text):
            return TypeTag.DATE
    if PATTERNS["number"].match(text) or PATTERNS["decimal"].match(text):
        return TypeTag.NUMBER
    return TypeTag.STRING


def column_values(sample_rows: Sequence[Sequence[Any]], col_index: int) -> list[Any]:
    """Non-blank values of one column across sample rows (ragged rows tolerated)."""
    out: list[Any] = []
    for row in sample_rows:
        if col_index < len(row) and not is_blank(row[col_index]):
            out.append(row[col_index])
    return out


def analyze_columns(headers: Sequence[Any], sample_rows: Sequence[Sequence[Any]]) -> list[ColumnAnalysis]:
    """Type tag + example value for every header."""
    if not headers:
        return []
    result: list[ColumnAnalysis] = []
    for idx, header in enumerate(headers):
        values = column_values(sample_rows, idx)
        name = str(header) if header not in (None, "") else f"Column {idx + 1}"
        example = format_value(values[0], name) if values else ""
        result.append(ColumnAnalysis(column=name, data_type=infer_type(values), example=example))
    return result
