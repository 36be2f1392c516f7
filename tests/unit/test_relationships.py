from __future__ import annotations

import pytest

from sheet_normalizer.models.errors import InvalidInputError
from sheet_normalizer.services.relationships import detect, header_matches


def test_lone_first_name_is_not_a_split():
    rel = detect(["First Name", "Email"], [])
    assert rel.has_name_split is False
    assert rel.name_components == {}


def test_first_middle_last_split():
    rel = detect(["First Name", "Middle Name", "Last Name", "Email"], [])
    assert rel.has_name_split is True
    assert rel.name_components == {
        "First Name": "First Name",
        "Last Name": "Last Name",
        "Middle Name": "Middle Name",
    }
    assert "split names" in rel.summary()


def test_plain_name_header_is_not_a_component():
    assert detect(["Name", "Phone"], []).has_name_split is False


def test_address_components_detected():
    rel = detect(["Customer", "Street", "City", "Zip"], [])
    assert rel.has_address_split is True
    assert rel.address_components["City"] == "City"
    assert rel.address_components["Postal Code"] == "Zip"


def test_combined_address_needs_address_like_values():
    headers = ["Full Address", "Email"]
    rel = detect(headers, [["123 Main St, Springfield", "a@b.com"]])
    assert rel.has_combined_address is True
    assert rel.combined_address_column == "Full Address"
    assert rel.has_address_split is False

    rel = detect(headers, [["somewhere nice", "a@b.com"]])
    assert rel.has_combined_address is False
    assert rel.combined_address_column is None


def test_header_matches_length_guard():
    assert header_matches("Name", ["name"])
    assert header_matches("customer first name", ["first name"])
    # substring needs the header to be more than two characters longer
    assert not header_matches("names", ["name"])
    assert not header_matches("", ["name"])


def test_detect_rejects_non_sequences():
    with pytest.raises(InvalidInputError):
        detect("First Name", [])  # type: ignore[arg-type]
    with pytest.raises(InvalidInputError):
        detect(["First Name"], None)  # type: ignore[arg-type]
