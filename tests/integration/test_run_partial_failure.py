from __future__ import annotations

import json
from pathlib import Path

from sheet_normalizer.config.loader import load_config
from sheet_normalizer.services.pipeline import process_all

"""One broken file must not stop the others; its failure lands in the error log."""


def test_partial_failure_records_errors(temp_workdir: Path, write_config: Path, write_csv, combined_headers, combined_rows):
    write_csv("good.csv", combined_headers, combined_rows)
    (temp_workdir / "uploads" / "empty.csv").write_text("", encoding="utf-8")
    (temp_workdir / "uploads" / "broken.xlsx").write_bytes(b"not a zip archive")
    (temp_workdir / "uploads" / "notes.txt").write_text("ignored", encoding="utf-8")
    (temp_workdir / "uploads" / "~$good.xlsx").write_bytes(b"lock")

    result = process_all(load_config(write_config))

    assert result.success_files == 1
    assert result.failed_files == 2
    assert result.total_rows == 2
    failed = {s.file_name: s for s in result.file_stats if s.status == "failed"}
    assert set(failed) == {"empty.csv", "broken.xlsx"}
    assert all(s.error for s in failed.values())
    assert (temp_workdir / "output" / "processed_good.csv").exists()

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    records = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
    assert {(r["file"], r["operation"], r["row"], r["error_kind"]) for r in records} == {
        ("empty.csv", "read_table", -1, "UnsupportedSource"),
        ("broken.xlsx", "read_table", -1, "UnsupportedSource"),
    }


def test_validation_issues_are_logged_per_row(temp_workdir: Path, write_config: Path, write_csv):
    write_csv("amounts.csv", ["Email", "Amount"], [["a@b.com", "12.00"], ["c@d.com", "abc"], ["e@f.com", "n/a"]])

    result = process_all(load_config(write_config))

    # blocking validation issues are reported, the file still succeeds
    assert result.success_files == 1
    assert result.total_issues == 2
    log = next((temp_workdir / "logs").glob("errors-*.log"))
    records = [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines()]
    assert [(r["row"], r["error_kind"]) for r in records] == [(1, "ValidationIssue"), (2, "ValidationIssue")]
    assert records[0]["message"] == "Amount: Value is not a valid number"
