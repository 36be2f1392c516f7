from __future__ import annotations

import pytest

from sheet_normalizer.models.canonical import DERIVED
from sheet_normalizer.models.relationships import ColumnRelationships
from sheet_normalizer.services.matching import KeywordMatchingStrategy


def test_split_layout_plan(split_headers, split_rows):
    plan = KeywordMatchingStrategy().plan(split_headers, split_rows)
    assert plan.selections == {
        "Date": "Order Date",
        "Name": DERIVED,
        "Age": "",
        "Address": DERIVED,
        "Gender": "",
        "Contact Number": "Phone",
        "Product Purchased": "Product",
        "Amount": "Total",
        "Product Quantity": "Qty",
        "Email": "Email",
    }
    assert plan.name_columns == {"first": "First Name", "last": "Last Name"}
    # "First Name" also contains the State keyword "st"; the real State column wins
    assert plan.address_columns == {"street": "Street", "city": "City", "state": "State", "postal": "Zip"}
    assert plan.matched_by["Name"] == "split"
    assert plan.matched_by["Email"] == "exact"


def test_combined_layout_plan(combined_headers, combined_rows):
    plan = KeywordMatchingStrategy().plan(combined_headers, combined_rows)
    assert plan.selections["Name"] == "Customer Name"
    assert plan.selections["Address"] == "Full Address"
    assert plan.selections["Gender"] == "Sex"
    assert plan.selections["Contact Number"] == "Mobile"
    assert plan.selections["Email"] == "E-mail"
    assert plan.address_columns == {}
    assert plan.name_columns == {}


def test_identifier_headers_never_become_amount():
    plan = KeywordMatchingStrategy().plan(["Row ID", "Paid"], [["17", "12.50"]])
    assert plan.selections["Amount"] == "Paid"
    assert plan.matched_by["Amount"] == "content"


def test_identifier_exclusion_is_word_based():
    strategy = KeywordMatchingStrategy()
    assert strategy.is_excluded("Amount", "Customer ID")
    assert strategy.is_excluded("Age", "s.no")
    assert not strategy.is_excluded("Amount", "Paid")
    # "id" inside a word is not an identifier
    assert not strategy.is_excluded("Contact Number", "Mobile Provider")
    assert not strategy.is_excluded("Email", "Customer ID")


def test_organization_headers_never_become_product():
    plan = KeywordMatchingStrategy().plan(["Company Product"], [["Acme"]])
    assert plan.selections["Product Purchased"] == ""


def test_substring_tier_and_short_keywords():
    plan = KeywordMatchingStrategy().plan(["Billing Phone", "Tag"], [["5551234567", "blue"]])
    assert plan.selections["Contact Number"] == "Billing Phone"
    assert plan.matched_by["Contact Number"] == "substring"
    # one-letter Gender keyword "g" is exact-only
    assert plan.selections["Gender"] == ""


def test_content_tier():
    plan = KeywordMatchingStrategy().plan(
        ["col1", "col2", "col3", "col4"],
        [["2024-01-15", "a@b.com", "(555) 123-4567", "M"], ["2024-01-16", "c@d.com", "(555) 000-1111", "F"]],
    )
    assert plan.selections["Date"] == "col1"
    assert plan.selections["Email"] == "col2"
    assert plan.selections["Contact Number"] == "col3"
    assert plan.selections["Gender"] == "col4"
    assert set(plan.matched_by.values()) == {"content"}


def test_each_header_used_once():
    plan = KeywordMatchingStrategy().plan(["Email", "email"], [["a@b.com", "c@d.com"]])
    used = [h for h in plan.selections.values() if h]
    assert used == ["Email"]


def test_injected_relationships_drive_split():
    rel = ColumnRelationships(
        has_name_split=True,
        name_components={"First Name": "given", "Last Name": "family", "Middle Name": "mid"},
    )
    plan = KeywordMatchingStrategy().plan(["given", "mid", "family"], [["Ana", "M", "Lopez"]], rel)
    assert plan.selections["Name"] == DERIVED
    assert plan.name_columns == {"first": "given", "last": "family", "middle": "mid"}
    # reserved component headers are not reused by the content tier
    assert plan.selections["Gender"] == ""


def test_address_split_dropped_when_components_are_claimed():
    rel = ColumnRelationships(has_address_split=True, address_components={"State": "Customer Name"})
    plan = KeywordMatchingStrategy().plan(["Customer Name"], [["Ana Lopez"]], rel)
    assert plan.selections["Name"] == "Customer Name"
    assert plan.selections["Address"] == ""
    assert plan.address_columns == {}


def test_plan_to_dict():
    plan = KeywordMatchingStrategy().plan(["Email"], [["a@b.com"]])
    data = plan.to_dict()
    assert data["selections"]["Email"] == "Email"
    assert set(data) == {"selections", "name_columns", "address_columns", "matched_by"}


@pytest.mark.parametrize(
    "headers, row, amount",
    [
        (["Customer ID", "Customer Name", "Address", "Email"], ["C001", "Ann Lee", "12 Oak Ave, Austin, TX 73301", "a@b.com"], ""),
        (["Name", "Address", "Unit Price", "Email"], ["Ann", "12 Oak Ave, Austin, TX 73301", "9.99", "a@b.com"], "Unit Price"),
        (["Name", "Address", "Shipping Pin", "Email"], ["Ann", "12 Oak Ave, Austin, TX 73301", "73301", "a@b.com"], ""),
    ],
)
def test_exact_address_column_beats_loose_components(headers, row, amount):
    plan = KeywordMatchingStrategy().plan(headers, [row])
    assert plan.selections["Address"] == "Address"
    assert plan.matched_by["Address"] == "exact"
    assert plan.address_columns == {}
    assert plan.selections["Amount"] == amount


def test_exact_component_still_wins_over_address_column():
    headers = ["Name", "Address", "City", "State", "Email"]
    plan = KeywordMatchingStrategy().plan(headers, [["Ann", "12 Oak Ave", "Austin", "TX", "a@b.com"]])
    assert plan.selections["Address"] == DERIVED
    assert plan.address_columns == {"city": "City", "state": "State"}
    # the replaced column is not handed to a later tier
    assert "Address" not in plan.selections.values()


def test_component_headers_need_whole_short_keywords():
    strategy = KeywordMatchingStrategy()
    state = ("state", "province", "region", "st")
    apartment = ("apartment", "apt", "unit", "suite")
    city = ("city", "town")
    # "st" inside "customer" is not a word
    assert not strategy._component_match("Customer Name", state)
    assert not strategy._component_match("Customer ID", state)
    assert strategy._component_match("Ship St", state)
    # short hit that also names another field
    assert not strategy._component_match("Unit Price", apartment)
    assert strategy._component_match("Unit #", apartment)
    assert strategy._component_match("Customer City", city)
    assert strategy._component_match("Billing Province", state)
