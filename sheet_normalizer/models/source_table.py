from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

"""SourceTable model.

Already-parsed tabular data handed over by the table codec: header strings
plus raw rows. Row width may differ from header width; missing cells read as
empty.
"""

__all__ = [
    "SourceTable",
    "is_blank",
    "is_row_empty",
]


def is_blank(value: Any) -> bool:
    """None, NaN, or whitespace-only string."""
    if value is None:
        return True
    if isinstance(value, float) and value != value:  # NaN
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def is_row_empty(row: Any) -> bool:
    if not isinstance(row, Sequence) or isinstance(row, str):
        return True
    return all(cell is None or cell == "" or (isinstance(cell, float) and cell != cell) for cell in row)


@dataclass(frozen=True)
class SourceTable:
    """Headers + non-empty data rows of one logical table."""
    headers: list[str]
    rows: list[list[Any]]
    sheet_name: str | None = None

    @staticmethod
    def from_raw(headers: Sequence[Any], rows: Sequence[Sequence[Any]], sheet_name: str | None = None) -> SourceTable:
        """Build a table applying the empty-row filtering policy."""
        clean_headers = [str(h).strip() if h is not None else "" for h in headers]
        kept = [list(r) for r in rows if not is_row_empty(r)]
        return SourceTable(headers=clean_headers, rows=kept, sheet_name=sheet_name)

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    def cell(self, row_index: int, col_index: int) -> Any:
        row = self.rows[row_index]
        if col_index < 0 or col_index >= len(row):
            return None
        return row[col_index]
