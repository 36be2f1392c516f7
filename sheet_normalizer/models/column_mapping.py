from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .canonical import CANONICAL_COLUMNS, DERIVED
from .errors import InvalidInputError, InvalidMappingError

"""ColumnMapping domain model.

A mapping assigns each canonical column one of:
- a source header name
- "" (no source, output stays empty)
- DERIVED (value produced by a name/address combiner)

Mappings are created once per source file and never mutated; a different
assignment means creating a new mapping.
"""

__all__ = [
    "ColumnMapping",
]


@dataclass(frozen=True)
class ColumnMapping(Mapping[str, str]):
    """Immutable canonical column -> source header assignment."""
    mapping_id: str
    entries: Mapping[str, str]

    @staticmethod
    def create(mapping_id: str, selections: Mapping[str, object]) -> ColumnMapping:
        """Validate `selections` and freeze them.

        Raises:
            InvalidInputError: selections is not a mapping or a value is not a string
            InvalidMappingError: any canonical column key is absent
        """
        if not isinstance(selections, Mapping):
            raise InvalidInputError("Mapping must be an object")
        missing = [c for c in CANONICAL_COLUMNS if c not in selections]
        if missing:
            raise InvalidMappingError(f"Mapping is missing required columns: {', '.join(missing)}")
        entries: dict[str, str] = {}
        for column in CANONICAL_COLUMNS:
            value = selections[column]
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise InvalidInputError(
                    f"Mapping value for '{column}' must be a string, got {type(value).__name__}"
                )
            if value.strip() in ("", DERIVED):
                value = value.strip()
            # kept as given: transform() looks the header up by its exact text first
            entries[column] = value
        return ColumnMapping(mapping_id=mapping_id, entries=MappingProxyType(entries))

    def __getitem__(self, key: str) -> str:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(CANONICAL_COLUMNS)

    def __len__(self) -> int:
        return len(CANONICAL_COLUMNS)

    def source_for(self, column: str) -> str | None:
        """Source header for `column`, or None when unmapped or derived."""
        value = self.entries[column]
        if not value or value == DERIVED:
            return None
        return value

    @property
    def mapped_columns(self) -> int:
        return sum(1 for v in self.entries.values() if v)

    @property
    def unmapped_columns(self) -> int:
        return len(CANONICAL_COLUMNS) - self.mapped_columns

    @property
    def derived_columns(self) -> list[str]:
        return [c for c in CANONICAL_COLUMNS if self.entries[c] == DERIVED]

    def to_dict(self) -> dict[str, str]:
        return {c: self.entries[c] for c in CANONICAL_COLUMNS}
