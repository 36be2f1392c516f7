from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..models.errors import ErrorKind, NormalizerError

"""Structured error log (JSON Lines).

- Fixed record schema: timestamp, file, operation, row, error_kind, message
- One `logs/errors-YYYYMMDD-HHMMSS.log` (UTC) per run, created on first flush
  with records
- Records are buffered and written once at the end of the run
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "FILE_LEVEL_ROW",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

# Row value for failures not tied to a single data row
FILE_LEVEL_ROW = -1


@dataclass(frozen=True)
class ErrorRecord:
    """One failure. `row` is the 0-based data row index or -1 when unknown."""
    timestamp: str  # ISO8601 UTC with Z suffix
    file: str
    operation: str
    row: int
    error_kind: str
    message: str

    @staticmethod
    def create(file: str, operation: str, row: int, error_kind: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            operation=operation,
            row=row,
            error_kind=error_kind,
            message=message,
        )

    @staticmethod
    def from_exception(file: str, operation: str, exc: BaseException, row: int = FILE_LEVEL_ROW) -> ErrorRecord:
        kind = exc.kind if isinstance(exc, NormalizerError) else ErrorKind.UNKNOWN
        return ErrorRecord.create(file, operation, row, kind.value, str(exc))

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


class ErrorLogBuffer:
    """In-memory buffer of error records; `flush()` appends them as JSON Lines.

    Serial use only. The file path is fixed on first access.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
