from __future__ import annotations

from dataclasses import dataclass

from ..models.canonical import DEFAULT_SAMPLE_SIZE, MAX_SAMPLE_SIZE
from ..models.errors import InvalidInputError, UnsupportedSourceError
from ..models.source_table import SourceTable
from .classifier import ColumnAnalysis, analyze_columns
from .formatting import format_value

"""Representative row sampling (head / evenly spaced middle / tail)."""

__all__ = [
    "SampleResult",
    "sample_indices",
    "read_sample",
]


def sample_indices(total_rows: int, desired: int) -> list[int]:
    """Pick up to `desired` row indices out of `total_rows`.

    - total_rows <= 0 -> []
    - total_rows <= desired -> every index
    - otherwise index 0, index total_rows - 1, and desired - 2 interior
      indices spaced floor(total_rows / (desired - 1)) apart

    The result is strictly increasing and never mutates anything; it is a
    view over the source table.

    Raises:
        InvalidInputError: non-integer arguments or desired < 1
    """
    if isinstance(total_rows, bool) or not isinstance(total_rows, int):
        raise InvalidInputError("total_rows must be an integer")
    if isinstance(desired, bool) or not isinstance(desired, int):
        raise InvalidInputError("desired must be an integer")
    if total_rows <= 0:
        return []
    if desired < 1:
        raise InvalidInputError(f"desired sample size must be >= 1, got {desired}")
    if total_rows <= desired:
        return list(range(total_rows))
    if desired == 1:
        return [0]

    last = total_rows - 1
    indices = {0, last}
    interior = desired - 2
    if interior > 0:
        step = total_rows // (interior + 1)
        for i in range(1, interior + 1):
            index = i * step
            if index < last:
                indices.add(index)
    return sorted(indices)


@dataclass(frozen=True)
class SampleResult:
    """Representative slice of a table plus per-column analysis."""
    total_rows: int
    headers: list[str]
    indices: list[int]
    sample_rows: list[list[str]]
    column_analysis: list[ColumnAnalysis]

    def to_dict(self) -> dict[str, object]:
        return {
            "total_rows": self.total_rows,
            "headers": list(self.headers),
            "sample_indices": list(self.indices),
            "sample_rows": [list(r) for r in self.sample_rows],
            "column_analysis": [c.to_dict() for c in self.column_analysis],
        }


def read_sample(table: SourceTable, sample_size: int = DEFAULT_SAMPLE_SIZE) -> SampleResult:
    """Sample a parsed table and analyze its columns.

    Sample cells are formatted with their header as column hint. The
    effective size is min(sample_size, MAX_SAMPLE_SIZE, total_rows).

    Raises:
        InvalidInputError: sample_size not a positive integer
        UnsupportedSourceError: no headers or no data rows
    """
    if isinstance(sample_size, bool) or not isinstance(sample_size, int) or sample_size < 1:
        raise InvalidInputError(f"sample_size must be a positive integer, got {sample_size!r}")
    if not table.headers:
        raise UnsupportedSourceError("table has no header row")
    if table.total_rows == 0:
        raise UnsupportedSourceError("table has no data rows")

    size = min(sample_size, MAX_SAMPLE_SIZE, table.total_rows)
    indices = sample_indices(table.total_rows, size)
    rows = [
        [format_value(table.cell(i, c), header) for c, header in enumerate(table.headers)]
        for i in indices
    ]
    return SampleResult(
        total_rows=table.total_rows,
        headers=list(table.headers),
        indices=indices,
        sample_rows=rows,
        column_analysis=analyze_columns(table.headers, rows),
    )
