from __future__ import annotations

from dataclasses import dataclass, field

"""Validation report models.

`issues` are blocking (row width, unparsable Amount); `warnings` are
advisory. Warnings with the same column + message are merged into a single
entry that accumulates every affected row index.
"""

__all__ = [
    "Severity",
    "ValidationEntry",
    "ValidationReport",
]


class Severity:
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationEntry:
    """One finding. `issue` is the row-independent description."""
    column: str
    issue: str
    affected_rows: list[int] = field(default_factory=list)
    severity: str = Severity.WARNING
    detail: str | None = None  # row-specific text of the first occurrence

    def to_dict(self) -> dict[str, object]:
        return {
            "column": self.column,
            "issue": self.issue,
            "affected_rows": list(self.affected_rows),
            "severity": self.severity,
            "detail": self.detail,
        }


@dataclass
class ValidationReport:
    issues: list[ValidationEntry] = field(default_factory=list)
    warnings: list[ValidationEntry] = field(default_factory=list)
    rows_checked: int = 0

    @property
    def passed(self) -> bool:
        return not self.issues

    def add_issue(self, column: str, issue: str, row: int, detail: str | None = None) -> None:
        self.issues.append(
            ValidationEntry(column, issue, [row], Severity.ERROR, detail)
        )

    def add_warning(self, column: str, issue: str, row: int, detail: str | None = None) -> None:
        for existing in self.warnings:
            if existing.column == column and existing.issue == issue:
                existing.affected_rows.append(row)
                return
        self.warnings.append(ValidationEntry(column, issue, [row], Severity.WARNING, detail))

    def to_dict(self) -> dict[str, object]:
        return {
            "validation_passed": self.passed,
            "rows_checked": self.rows_checked,
            "issues": [e.to_dict() for e in self.issues],
            "warnings": [e.to_dict() for e in self.warnings],
        }
