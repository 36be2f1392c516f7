from __future__ import annotations

import json
from pathlib import Path

from sheet_normalizer.logging.error_log import FILE_LEVEL_ROW, ErrorLogBuffer, ErrorRecord
from sheet_normalizer.models.errors import InvalidMappingError


def test_flush_writes_json_lines(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("orders.csv", "validate", 3, "ValidationIssue", "Amount: Value is not a valid number"))
    buf.append(ErrorRecord.create("orders.csv", "read_table", FILE_LEVEL_ROW, "UnsupportedSource", "empty"))
    assert len(buf) == 2

    path = buf.flush()
    assert path is not None
    assert path.parent == Path("logs")
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["row"] for line in lines] == [3, -1]
    assert len(buf) == 0


def test_flush_without_records_creates_nothing(temp_workdir: Path):
    buf = ErrorLogBuffer(logs_dir=temp_workdir / "other")
    assert buf.flush() is None
    assert not (temp_workdir / "other").exists()


def test_flush_appends_to_same_file(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    buf.append(ErrorRecord.create("a.csv", "normalize", 0, "Unknown", "x"))
    first = buf.flush()
    buf.append(ErrorRecord.create("b.csv", "normalize", 0, "Unknown", "y"))
    second = buf.flush()
    assert first == second
    assert len(first.read_text(encoding="utf-8").splitlines()) == 2


def test_record_from_exception_uses_error_kind():
    record = ErrorRecord.from_exception("a.csv", "normalize", InvalidMappingError("missing Email"))
    assert record.error_kind == "InvalidMapping"
    assert record.row == FILE_LEVEL_ROW
    assert ErrorRecord.from_exception("a.csv", "write_table", OSError("disk full")).error_kind == "Unknown"


def test_record_json_line_shape():
    record = ErrorRecord.create("a.csv", "validate", 1, "ValidationIssue", "Amount: bad ü")
    data = json.loads(record.to_json_line())
    assert list(data) == ["timestamp", "file", "operation", "row", "error_kind", "message"]
    assert data["timestamp"].endswith("Z")
    assert "ü" in record.to_json_line()
