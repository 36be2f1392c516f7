from __future__ import annotations

from pathlib import Path

from sheet_normalizer.cli import main as cli_main
from sheet_normalizer.cli.__main__ import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL
from sheet_normalizer.logging.init import reset_logging

"""Exit code contract: 0 all succeeded, 2 partial failure, 1 fatal."""


def _run(argv: list[str]) -> int:
    reset_logging()
    return cli_main(argv)


def test_exit_code_values():
    assert (EXIT_SUCCESS_ALL, EXIT_FATAL, EXIT_PARTIAL_FAILURE) == (0, 1, 2)


def test_exit_code_fatal_config(write_config, capsys):
    write_config.write_text("source_directory: [\n", encoding="utf-8")
    assert _run([]) == EXIT_FATAL
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_directory(temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("UPLOAD_DIR", str(temp_workdir / "gone"))
    assert _run([]) == EXIT_FATAL


def test_exit_code_success_without_config_file(temp_workdir: Path, write_csv, split_headers, split_rows):
    # defaults read ./uploads when config/normalizer.yml is absent
    write_csv("a.csv", split_headers, split_rows)
    assert _run([]) == EXIT_SUCCESS_ALL


def test_exit_code_partial_failure(temp_workdir: Path, write_csv, split_headers, split_rows):
    write_csv("a.csv", split_headers, split_rows)
    (temp_workdir / "uploads" / "b.csv").write_text("Email\n", encoding="utf-8")
    assert _run([]) == EXIT_PARTIAL_FAILURE
