from __future__ import annotations

from dataclasses import dataclass, field

"""ColumnRelationships model (split / combined field detection result)."""

__all__ = [
    "ColumnRelationships",
]


@dataclass(frozen=True)
class ColumnRelationships:
    """Outcome of scanning headers + samples for split or combined fields.

    `has_name_split` is only True when distinct First Name and Last Name
    headers were found; otherwise `name_components` is empty. Address split
    needs a single component. The three signals are independent.
    """
    has_name_split: bool = False
    name_components: dict[str, str] = field(default_factory=dict)  # component -> header
    has_address_split: bool = False
    address_components: dict[str, str] = field(default_factory=dict)  # component -> header
    has_combined_address: bool = False
    combined_address_column: str | None = None

    def summary(self) -> str:
        if self.has_address_split:
            address = "split addresses"
        elif self.has_combined_address:
            address = "combined address"
        else:
            address = "no address split"
        name = "split names" if self.has_name_split else "no name split"
        return f"Found {name}, {address}"

    def to_dict(self) -> dict[str, object]:
        return {
            "has_name_split": self.has_name_split,
            "name_components": dict(self.name_components),
            "has_address_split": self.has_address_split,
            "address_components": dict(self.address_components),
            "has_combined_address": self.has_combined_address,
            "combined_address_column": self.combined_address_column,
        }
