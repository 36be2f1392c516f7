from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..models.canonical import CANONICAL_COLUMNS, COL
from ..models.column_mapping import ColumnMapping
from ..models.errors import InvalidInputError
from .formatting import format_value

"""Row transformer: source rows -> canonical 10-field rows.

The transformer knows nothing about combiners. DERIVED and unmapped columns
come out empty; callers fill DERIVED positions with `splice_combined()`.
"""

__all__ = [
    "transform",
    "splice_combined",
]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def build_header_index(headers: Sequence[Any]) -> dict[Any, int]:
    """Header -> index; duplicated headers resolve to their last position."""
    return {header: idx for idx, header in enumerate(headers)}


def _resolve_header(source: str, header_index: dict[Any, int], trimmed_index: dict[str, int]) -> int | None:
    if source in header_index:
        return header_index[source]
    return trimmed_index.get(source.strip())


def transform(mapping: ColumnMapping, source_rows: Sequence[Sequence[Any]], source_headers: Sequence[Any]) -> list[list[str]]:
    """Apply `mapping` to every source row.

    Raises:
        InvalidInputError: source_rows / source_headers not sequences
    """
    if not _is_sequence(source_rows):
        raise InvalidInputError("source_rows must be an array")
    if not _is_sequence(source_headers):
        raise InvalidInputError("source_headers must be an array")

    header_index = build_header_index(source_headers)
    trimmed_index = {str(h).strip(): idx for h, idx in header_index.items() if h is not None}
    # resolve once: (source index or None, column hint)
    plan: list[tuple[int | None, str]] = []
    for column in CANONICAL_COLUMNS:
        source = mapping.source_for(column)
        plan.append((_resolve_header(source, header_index, trimmed_index) if source else None, source or ""))

    out: list[list[str]] = []
    for row in source_rows:
        if not _is_sequence(row):
            raise InvalidInputError("each source row must be an array")
        transformed: list[str] = []
        for idx, hint in plan:
            if idx is None or idx >= len(row):
                transformed.append("")
            else:
                transformed.append(format_value(row[idx], hint))
        out.append(transformed)
    return out


def splice_combined(rows: list[list[str]], column: str, values: Sequence[str]) -> list[list[str]]:
    """Write combiner output into `column` of already transformed rows (in place).

    Raises:
        InvalidInputError: unknown column or row/value count mismatch
    """
    if column not in COL:
        raise InvalidInputError(f"unknown canonical column: {column}")
    if len(values) != len(rows):
        raise InvalidInputError(
            f"combined values ({len(values)}) do not align with rows ({len(rows)})"
        )
    pos = COL[column]
    for row, value in zip(rows, values):
        row[pos] = value
    return rows
