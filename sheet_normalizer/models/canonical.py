from __future__ import annotations

import re

"""Canonical output schema and keyword tables.

The 10 canonical column names below are the contract shared with every
downstream consumer (table codec, orchestrating agent, output files). Order
and casing must match byte-for-byte.

Keyword tables are matched against headers after `normalize_header()`
(lower-case, trimmed). Dict order matters: detectors and the matching
strategy iterate them in declaration order and the first match wins.
"""

__all__ = [
    "CANONICAL_COLUMNS",
    "N_CANONICAL",
    "COL",
    "DERIVED",
    "SEMANTIC_MAPPING_RULES",
    "NAME_COMPONENTS",
    "ADDRESS_COMPONENTS",
    "ADDRESS_COMPONENT_KEYS",
    "IDENTIFIER_KEYWORDS",
    "ORGANIZATION_KEYWORDS",
    "IDENTIFIER_EXCLUDED_FIELDS",
    "PATTERNS",
    "DEFAULT_SAMPLE_SIZE",
    "MAX_SAMPLE_SIZE",
    "DEFAULT_BATCH_SIZE",
    "MAX_BATCH_SIZE",
    "normalize_header",
]

CANONICAL_COLUMNS: tuple[str, ...] = (
    "Date",
    "Name",
    "Age",
    "Address",
    "Gender",
    "Contact Number",
    "Product Purchased",
    "Amount",
    "Product Quantity",
    "Email",
)
N_CANONICAL = len(CANONICAL_COLUMNS)
COL = {name: i for i, name in enumerate(CANONICAL_COLUMNS)}

# Mapping value meaning "filled by a combiner, not read from a source column"
DERIVED = "<derived>"

SEMANTIC_MAPPING_RULES: dict[str, tuple[str, ...]] = {
    "Date": (
        "date", "purchase date", "order date", "transaction date", "sale date",
        "created date", "created at", "timestamp", "time", "dt", "order_date",
        "purchase_date", "trans_date",
    ),
    "Name": (
        "name", "full name", "customer name", "client name", "fullname",
        "full_name", "person name", "user name", "username", "customer",
        "client", "customername", "customer_name",
    ),
    "Age": (
        "age", "years", "years old", "age years", "customer age", "yrs",
    ),
    "Address": (
        "address", "full address", "complete address", "location", "addr",
        "full_address", "complete_address", "mailing address", "shipping address",
    ),
    "Gender": (
        "gender", "sex", "male/female", "m/f", "g",
    ),
    # CNIC / NID / SSN / ID Number are identifiers, not phone numbers
    "Contact Number": (
        "phone", "telephone", "mobile", "cell", "contact", "phone number",
        "contact number", "tel", "mobile number", "cell phone", "contact no",
        "phone_number", "mobile_number", "cellphone", "cell_phone",
    ),
    "Product Purchased": (
        "product", "item", "product name", "item name", "product purchased",
        "product description", "product title", "item description", "sku",
        "service", "plan", "product_name", "item_name", "productname",
    ),
    "Amount": (
        "amount", "price", "cost", "total", "purchase amount", "sale amount",
        "payment", "value", "revenue", "total amount", "total price",
        "total_amount", "total_price", "purchase_amount", "sale_amount",
    ),
    "Product Quantity": (
        "quantity", "qty", "count", "number", "number of items", "units",
        "product quantity", "item quantity", "items", "product_quantity",
        "item_quantity", "num_items",
    ),
    "Email": (
        "email", "e-mail", "email address", "e-mail address", "mail",
        "email id", "customer email", "email_address", "customer_email",
        "e_mail",
    ),
}

NAME_COMPONENTS: dict[str, tuple[str, ...]] = {
    "First Name": (
        "first name", "fname", "first", "given name", "forename",
        "first_name", "firstname", "givenname",
    ),
    "Last Name": (
        "last name", "lname", "last", "surname", "family name",
        "last_name", "lastname", "familyname", "family_name",
    ),
    "Middle Name": (
        "middle name", "mname", "middle", "middle initial", "mi",
        "middle_name", "middlename", "middle_initial",
    ),
}

ADDRESS_COMPONENTS: dict[str, tuple[str, ...]] = {
    "Street": (
        "street", "address line 1", "address1", "street address",
        "road", "street name", "address_line_1", "address_1", "addr1",
    ),
    "Apartment": (
        "apartment", "apt", "unit", "suite", "address line 2", "address2",
        "apt number", "unit number", "building", "floor", "address_line_2",
        "address_2", "addr2", "apartment_number",
    ),
    "City": (
        "city", "town", "municipality", "locality", "city_name",
    ),
    "State": (
        "state", "province", "region", "state/province", "st", "state_province",
    ),
    "Country": (
        "country", "nation", "country code", "country name", "country_name",
        "country_code",
    ),
    "Postal Code": (
        "zip", "postal", "postal code", "zip code", "postcode",
        "zipcode", "post code", "pincode", "pin", "postal_code",
        "zip_code", "post_code",
    ),
}

# Address component label -> keyword argument of combine_address()
ADDRESS_COMPONENT_KEYS: dict[str, str] = {
    "Street": "street",
    "Apartment": "apartment",
    "City": "city",
    "State": "state",
    "Postal Code": "postal",
    "Country": "country",
}

IDENTIFIER_KEYWORDS: tuple[str, ...] = (
    "id", "index", "row number", "serial", "cnic", "nid", "ssn",
    "account", "s.no", "sr no",
)
ORGANIZATION_KEYWORDS: tuple[str, ...] = (
    "company", "business", "organization", "organisation", "employer", "vendor",
)
IDENTIFIER_EXCLUDED_FIELDS = frozenset({"Amount", "Product Quantity", "Contact Number", "Age"})

PATTERNS: dict[str, re.Pattern[str]] = {
    "phone": re.compile(r"^[+\d\s\-()]{10,}$"),
    "email": re.compile(r"@.+\..+"),
    "currency": re.compile(r"^\$?[\d,]+\.?\d*$"),
    "date_iso": re.compile(r"^\d{4}-\d{2}-\d{2}"),
    "date_us": re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}"),
    "date_eu": re.compile(r"^\d{1,2}-\d{1,2}-\d{4}"),
    "number": re.compile(r"^\d+$"),
    "decimal": re.compile(r"^\d+\.\d+$"),
}

DEFAULT_SAMPLE_SIZE = 5
MAX_SAMPLE_SIZE = 10
DEFAULT_BATCH_SIZE = 500
MAX_BATCH_SIZE = 1000


def normalize_header(value: object) -> str:
    """Lower-case + trim a header for keyword comparison ('' for None)."""
    if value is None:
        return ""
    return str(value).strip().lower()
