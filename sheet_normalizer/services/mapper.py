from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Mapping

from ..models.column_mapping import ColumnMapping
from ..models.errors import InvalidInputError, MappingNotFoundError

"""Column mapping store.

One store per processing session (inject it, do not share it globally).
Entries are immutable ColumnMapping objects addressed by opaque ids; the
only write is an atomic insert under a lock, so readers never race with
creators. There is no eviction: call `discard()` / `clear()` when a session
ends.
"""

__all__ = [
    "MappingStore",
    "build_mapping",
]

logger = logging.getLogger(__name__)


class MappingStore:
    """In-memory mapping_id -> ColumnMapping registry."""

    def __init__(self, namespace: str = "map") -> None:
        self._namespace = namespace
        self._mappings: dict[str, ColumnMapping] = {}
        self._lock = threading.Lock()

    def _new_id(self) -> str:
        return f"{self._namespace}_{uuid.uuid4().hex}"

    def create(self, selections: Mapping[str, object]) -> ColumnMapping:
        """Validate + store a new mapping and return it.

        Raises:
            InvalidInputError: selections not a mapping / non-string values
            InvalidMappingError: a canonical column is missing
        """
        with self._lock:
            mapping_id = self._new_id()
            while mapping_id in self._mappings:  # pragma: no cover (uuid4 collision)
                mapping_id = self._new_id()
            mapping = ColumnMapping.create(mapping_id, selections)
            self._mappings[mapping_id] = mapping
        logger.debug(f"mapping created id={mapping_id} mapped={mapping.mapped_columns}/10")
        return mapping

    def get(self, mapping_id: str) -> ColumnMapping:
        """Look up a mapping.

        Raises:
            InvalidInputError: mapping_id is not a non-empty string
            MappingNotFoundError: unknown id
        """
        if not mapping_id or not isinstance(mapping_id, str):
            raise InvalidInputError("mapping_id is required and must be a string")
        mapping = self._mappings.get(mapping_id)
        if mapping is None:
            raise MappingNotFoundError(
                f"Mapping not found: {mapping_id}. Please create a mapping first using create_column_mapping."
            )
        return mapping

    def __contains__(self, mapping_id: object) -> bool:
        return mapping_id in self._mappings

    def __len__(self) -> int:
        return len(self._mappings)

    def discard(self, mapping_id: str) -> None:
        with self._lock:
            self._mappings.pop(mapping_id, None)

    def clear(self) -> None:
        with self._lock:
            self._mappings.clear()


def build_mapping(store: MappingStore, selections: Mapping[str, object]) -> str:
    """Create a mapping in `store` and return its identifier."""
    return store.create(selections).mapping_id
