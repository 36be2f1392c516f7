from __future__ import annotations

import pytest

from sheet_normalizer.models.errors import InvalidInputError
from sheet_normalizer.services.address_combiner import (
    combine_address,
    combine_address_from_row,
    format_address,
    looks_like_address,
    normalize_address_columns,
    parse_address,
)
from sheet_normalizer.services.name_combiner import (
    combine_name,
    combine_name_from_row,
    detect_name_type,
    format_name,
    split_name,
)


def test_combine_name_orders_first_middle_last():
    assert combine_name("John", "Smith", "Michael") == "John Michael Smith"
    assert combine_name("John", "", "") == "John"
    assert combine_name(" John ", None, "") == "John"
    assert combine_name("", "Smith") == "Smith"


def test_combine_name_from_row():
    headers = ["fname", "lname", "mi"]
    row = ["Ana", "Lopez", "M."]
    assert combine_name_from_row({"first": "fname", "last": "lname", "middle": "mi"}, row, headers) == "Ana M. Lopez"
    assert combine_name_from_row({"first": "fname", "last": "lname"}, row, headers) == "Ana Lopez"
    # a short row reads missing cells as empty
    assert combine_name_from_row({"first": "fname", "last": "lname", "middle": "mi"}, ["Ana"], headers) == "Ana"


def test_combine_name_from_row_requires_first_and_last():
    with pytest.raises(InvalidInputError):
        combine_name_from_row({"first": "fname"}, ["Ana"], ["fname"])


def test_split_name():
    assert split_name("John").first_name == "John"
    parts = split_name("John Michael Paul Smith")
    assert (parts.first_name, parts.middle_name, parts.last_name) == ("John", "Michael Paul", "Smith")
    assert split_name(None).first_name == ""


@pytest.mark.parametrize(
    "value, expected",
    [("SMITH", "last"), ("Smith, John", "last"), ("John", "first"), ("J", "first"), ("", "unknown"), (None, "unknown")],
)
def test_detect_name_type(value, expected):
    assert detect_name_type(value) == expected


def test_format_name():
    assert format_name("jOHN smith") == "John Smith"
    assert format_name(None) == ""


def test_combine_address_full():
    out = combine_address("123 Main St", "Apt 4", "New York", "NY", "10001", "USA")
    assert out == "123 Main St, Apt 4, New York, NY 10001, USA"
    assert "NY 10001" in out.split(", ")


def test_combine_address_omits_missing_parts():
    assert combine_address("123 Main St", "", "", "", "10001") == "123 Main St, 10001"
    assert combine_address(city="Austin", state="TX") == "Austin, TX"
    assert combine_address() == ""


def test_parse_address_recovers_street():
    full = combine_address("123 Main Street", "", "Springfield", "IL", "62701", "USA")
    parsed = parse_address(full)
    assert parsed.street == "123 Main Street"
    assert parsed.city == "Springfield"
    assert (parsed.state, parsed.postal, parsed.country) == ("IL", "62701", "USA")


def test_parse_address_tolerates_odd_input():
    assert parse_address("").street == ""
    assert parse_address(None).street == ""
    assert parse_address("1 Main St, Apt 4").apartment == "Apt 4"


def test_address_columns_accept_labels_and_keys():
    assert normalize_address_columns({"Postal Code": "Zip", "street": "Street", "city": ""}) == {
        "postal": "Zip",
        "street": "Street",
    }
    with pytest.raises(InvalidInputError):
        normalize_address_columns({"floor": "Floor"})
    with pytest.raises(InvalidInputError):
        normalize_address_columns(["street"])  # type: ignore[arg-type]


def test_combine_address_from_row():
    headers = ["Street", "City", "State", "Zip"]
    row = ["1 Elm Blvd", "Denver", "CO", "80014"]
    columns = {"street": "Street", "city": "City", "state": "State", "postal": "Zip", "country": "Nation"}
    assert combine_address_from_row(columns, row, headers) == "1 Elm Blvd, Denver, CO 80014"


def test_looks_like_address():
    assert looks_like_address("123 Main St")
    assert looks_like_address("Springfield, 62701")
    assert not looks_like_address("Main St")
    assert not looks_like_address(123)


def test_format_address():
    assert format_address("  1 Main St ,Springfield  ,IL ") == "1 Main St, Springfield, IL"
    assert format_address(None) == ""
