from __future__ import annotations

import json
import re
from pathlib import Path

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from sheet_normalizer.logging.error_log import FILE_LEVEL_ROW, ErrorLogBuffer, ErrorRecord
from sheet_normalizer.models.errors import ErrorKind, InvalidMappingError

"""Error log JSON Lines contract: one object per line, fixed keys."""

ERROR_RECORD_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "required": ["timestamp", "file", "operation", "row", "error_kind", "message"],
    "properties": {
        "timestamp": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$"},
        "file": {"type": "string"},
        "operation": {"type": "string"},
        "row": {"type": "integer", "minimum": -1},
        "error_kind": {"type": "string", "enum": [k.value for k in ErrorKind] + ["ValidationIssue"]},
        "message": {"type": "string"},
    },
}


def test_record_matches_schema():
    record = ErrorRecord.create("orders.csv", "validate", 3, "ValidationIssue", "Amount: Value is not a valid number")
    jsonschema.validate(json.loads(record.to_json_line()), ERROR_RECORD_SCHEMA)


def test_exception_record_uses_file_level_row():
    record = ErrorRecord.from_exception("orders.csv", "normalize", InvalidMappingError("missing Email"))
    data = json.loads(record.to_json_line())
    jsonschema.validate(data, ERROR_RECORD_SCHEMA)
    assert data["row"] == FILE_LEVEL_ROW == -1
    assert data["error_kind"] == "InvalidMapping"


def test_schema_rejects_extra_key():
    data = json.loads(ErrorRecord.create("a.csv", "read_table", -1, "Unknown", "x").to_json_line())
    data["sheet"] = "Orders"
    with pytest.raises(ValidationError):
        jsonschema.validate(data, ERROR_RECORD_SCHEMA)


def test_flushed_file_name_and_lines(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("a.csv", "read_table", -1, "UnsupportedSource", "a.csv is empty"))
    buf.append(ErrorRecord.create("b.csv", "validate", 0, "ValidationIssue", "Amount: Value is not a valid number"))
    path = buf.flush()
    assert path is not None
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    for line in lines:
        jsonschema.validate(json.loads(line), ERROR_RECORD_SCHEMA)
