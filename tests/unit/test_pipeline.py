from __future__ import annotations

import pytest

from sheet_normalizer.config.loader import NormalizerConfig
from sheet_normalizer.models.canonical import COL
from sheet_normalizer.models.errors import UnsupportedSourceError
from sheet_normalizer.models.source_table import SourceTable
from sheet_normalizer.services.mapper import MappingStore
from sheet_normalizer.services.pipeline import NormalizationSession


def test_run_split_layout(split_headers, split_rows):
    store = MappingStore()
    session = NormalizationSession(store, config=NormalizerConfig(source_directory=".", batch_size=2))
    outcome = session.run(SourceTable.from_raw(split_headers, split_rows))

    assert len(outcome.rows) == 3
    first, _, third = outcome.rows
    assert first[COL["Name"]] == "John Smith"
    assert first[COL["Address"]] == "123 Main St, Springfield, IL 62701"
    assert third[COL["Address"]] == "Denver, CO"
    assert first[COL["Amount"]] == "$19.98"
    assert first[COL["Product Quantity"]] == "2"
    assert outcome.report.passed
    assert outcome.report.warnings == []
    assert outcome.validated_sample_only is False
    assert outcome.mapping_id in store


def test_run_combined_layout(combined_headers, combined_rows):
    outcome = NormalizationSession().run(SourceTable.from_raw(combined_headers, combined_rows))
    second = outcome.rows[1]
    assert second[COL["Name"]] == "Mary Garcia"
    assert second[COL["Address"]] == "9 Oak Ave, Austin, TX 73301"
    assert second[COL["Amount"]] == "5.5"
    assert {w.column for w in outcome.report.warnings} == {"Email", "Contact Number"}
    assert outcome.relationships.has_combined_address is True


def test_large_tables_validate_sample_only():
    rows = [[f"user{i}@example.com"] for i in range(30)]
    config = NormalizerConfig(source_directory=".", sample_size=3, large_file_threshold=10)
    outcome = NormalizationSession(config=config).run(SourceTable.from_raw(["Email"], rows))
    assert len(outcome.rows) == 30
    assert outcome.validated_sample_only is True
    assert outcome.report.rows_checked == 3


def test_dispose_removes_session_mappings(split_headers, split_rows):
    store = MappingStore()
    other = store.create({c: "" for c in COL}).mapping_id
    with NormalizationSession(store) as session:
        session.run(SourceTable.from_raw(split_headers, split_rows))
        session.run(SourceTable.from_raw(split_headers, split_rows))
        assert len(store) == 3
    assert len(store) == 1
    assert other in store


def test_run_rejects_empty_tables():
    with pytest.raises(UnsupportedSourceError):
        NormalizationSession().run(SourceTable.from_raw(["Email"], [[""]]))


def test_exact_address_column_survives_identifier_and_price_headers():
    rows = [["C001", "Ann Lee", "12 Oak Ave, Austin, TX 73301", "a@b.com", "9.99"], ["C002", "Bo Park", "9 Elm St, Reno, NV 89501", "b@c.com", "5"]]
    headers = ["Customer ID", "Customer Name", "Address", "Email", "Unit Price"]
    outcome = NormalizationSession().run(SourceTable.from_raw(headers, rows))
    assert outcome.plan.address_columns == {}
    assert [r[COL["Address"]] for r in outcome.rows] == ["12 Oak Ave, Austin, TX 73301", "9 Elm St, Reno, NV 89501"]
    assert [r[COL["Amount"]] for r in outcome.rows] == ["9.99", "5"]
    assert outcome.rows[0][COL["Name"]] == "Ann Lee"
