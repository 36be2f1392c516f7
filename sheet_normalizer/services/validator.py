from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from ..models.canonical import COL, N_CANONICAL, PATTERNS
from ..models.errors import InvalidInputError
from ..models.validation_report import ValidationReport

"""Validator for transformed canonical rows.

Blocking (issues):
- row width != 10 (further checks on that row are skipped)
- Amount present but not numeric after stripping '$' and ','

Advisory (warnings): Email, Contact Number, Product Quantity, Age, Gender.

Numeric checks read a leading number the way spreadsheet tools do
("12 units" parses as 12); blank cells are never flagged.
"""

__all__ = [
    "validate",
]

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*[+-]?\d+")
_LEADING_FLOAT_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_GENDER_RE = re.compile(r"^[MF]$|^MALE$|^FEMALE$")


def _parse_leading_int(text: str) -> int | None:
    m = _LEADING_INT_RE.match(text)
    return int(m.group(0)) if m else None


def _parse_leading_float(text: str) -> float | None:
    m = _LEADING_FLOAT_RE.match(text)
    return float(m.group(0)) if m else None


def _cell(row: Sequence[Any], column: str) -> str:
    value = row[COL[column]]
    if value is None:
        return ""
    return str(value)


def validate(rows: Sequence[Sequence[Any]]) -> ValidationReport:
    """Check rows against per-column format expectations.

    Raises:
        InvalidInputError: rows empty or not a sequence
    """
    if not isinstance(rows, Sequence) or isinstance(rows, str) or len(rows) == 0:
        raise InvalidInputError("Sample data must be a non-empty array")

    report = ValidationReport(rows_checked=len(rows))
    for i, row in enumerate(rows):
        if not isinstance(row, Sequence) or isinstance(row, str) or len(row) != N_CANONICAL:
            width = len(row) if isinstance(row, Sequence) and not isinstance(row, str) else 0
            report.add_issue(
                "ALL",
                f"Row does not have exactly {N_CANONICAL} columns",
                i,
                f"row {i} has {width}",
            )
            continue

        email = _cell(row, "Email")
        if email.strip() and not PATTERNS["email"].search(email):
            report.add_warning("Email", "Value does not look like a valid email", i, f'row {i}: "{email}"')

        phone = _cell(row, "Contact Number")
        if phone.strip() and not PATTERNS["phone"].match(phone):
            report.add_warning(
                "Contact Number", "Value does not match phone number pattern", i, f'row {i}: "{phone}"'
            )

        amount = _cell(row, "Amount")
        if amount.strip():
            cleaned = amount.replace("$", "").replace(",", "")
            if _parse_leading_float(cleaned) is None:
                report.add_issue("Amount", "Value is not a valid number", i, f'row {i}: "{amount}"')

        quantity = _cell(row, "Product Quantity")
        if quantity.strip() and _parse_leading_int(quantity) is None:
            report.add_warning(
                "Product Quantity", "Value is not a valid number", i, f'row {i}: "{quantity}"'
            )

        age = _cell(row, "Age")
        if age.strip():
            age_num = _parse_leading_int(age)
            if age_num is None or age_num < 0 or age_num > 150:
                report.add_warning("Age", "Value does not look like a valid age", i, f'row {i}: "{age}"')

        gender = _cell(row, "Gender")
        if gender.strip() and not _GENDER_RE.match(gender.strip().upper()):
            report.add_warning("Gender", "Value should be M, F, Male, or Female", i, f'row {i}: "{gender}"')

    logger.debug(
        f"validated rows={len(rows)} issues={len(report.issues)} warnings={len(report.warnings)}"
    )
    return report
