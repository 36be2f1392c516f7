# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from sheet_normalizer.logging.init import reset_logging

ENV_OVERRIDES = ("UPLOAD_DIR", "OUTPUT_DIR", "MAX_SAMPLE_SIZE", "LARGE_FILE_THRESHOLD")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "uploads").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./uploads
output_directory: ./output
output_prefix: processed_
sample_size: 5
batch_size: 2
large_file_threshold: 100
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "normalizer.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def split_headers() -> list[str]:
    return ["First Name", "Last Name", "Street", "City", "State", "Zip", "Phone", "Email", "Order Date", "Product", "Qty", "Total"]


@pytest.fixture()
def split_rows() -> list[list[object]]:
    return [
        ["John", "Smith", "123 Main St", "Springfield", "IL", 62701, "(555) 123-4567", "john@example.com", "2024-01-15", "Widget", 2, "$19.98"],
        ["Mary", "Garcia", "9 Oak Ave", "Austin", "TX", 73301, "(555) 987-6543", "mary@example.com", "2024-02-01", "Gadget", 1, "$5.00"],
        ["Wei", "Chen", "", "Denver", "CO", "", "555-222-3333", "wei@example.com", "2024-02-10", "Gizmo", 5, "$120.50"],
    ]


@pytest.fixture()
def combined_headers() -> list[str]:
    return ["Customer Name", "Full Address", "E-mail", "Mobile", "Purchase Date", "Item", "Amount", "Age", "Sex"]


@pytest.fixture()
def combined_rows() -> list[list[object]]:
    return [
        ["John Smith", "123 Main St, Springfield, IL 62701", "john@example.com", "(555) 123-4567", "2024-01-15", "Widget", 19.98, 35, "M"],
        ["Mary Garcia", "9 Oak Ave, Austin, TX 73301", "not-an-email", "12", "2024-02-01", "Gadget", 5.5, 41, "Female"],
    ]


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, headers: list[str], rows: list[list[object]], directory: str = "uploads") -> Path:
        import pandas as pd

        path = temp_workdir / directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame(rows, columns=headers).to_csv(path, index=False)
        return path

    return _write
