from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for CLI runs.

Aggregates per-file outcomes into the numbers rendered on the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/failed
    rows_written: int
    issues: int
    warnings: int
    elapsed_seconds: float
    output_file: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for one CLI run."""
    success_files: int
    failed_files: int
    total_rows: int
    total_issues: int
    total_warnings: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
