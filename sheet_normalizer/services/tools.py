from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import asdict
from typing import Any

from ..models.canonical import CANONICAL_COLUMNS, DEFAULT_SAMPLE_SIZE
from ..models.errors import InvalidInputError, NormalizerError
from ..models.operation_result import OperationResult
from ..models.relationships import ColumnRelationships
from ..models.source_table import SourceTable
from .address_combiner import combine_address_from_row, normalize_address_columns, parse_address
from .classifier import infer_type
from .mapper import MappingStore
from .matching import KeywordMatchingStrategy, MatchingStrategy
from .name_combiner import combine_name_from_row, split_name
from .relationships import detect
from .sampler import read_sample, sample_indices
from .transformer import transform
from .validator import validate

"""Tool surface for an external orchestrator.

Every method returns an OperationResult instead of raising: failures carry
the error kind, message and operation name so the caller can log and
decide whether to retry with adjusted inputs. Nothing is retried here.
The module-level helpers the methods delegate to (sample_indices,
split_name, ...) raise NormalizerError subclasses; callers outside this
package should go through NormalizerTools.

Each NormalizerTools instance owns (or is given) its MappingStore; create
one per file-processing session.
"""

__all__ = [
    "NormalizerTools",
]

logger = logging.getLogger(__name__)


def _operation(name: str) -> Callable[[Callable[..., dict[str, Any]]], Callable[..., OperationResult]]:
    """Wrap a payload-returning method into an OperationResult."""

    def decorator(func: Callable[..., dict[str, Any]]) -> Callable[..., OperationResult]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> OperationResult:
            try:
                payload = func(*args, **kwargs)
            except NormalizerError as e:
                logger.warning(f"{name}: {e.kind.value}: {e}")
                return OperationResult.fail(name, e)
            except Exception as e:
                logger.exception(f"{name}: unexpected error")
                return OperationResult.fail(name, e)
            return OperationResult.ok(name, **payload)

        return wrapper

    return decorator


def _require_rows(source_rows: Any, source_headers: Any) -> None:
    if not isinstance(source_rows, Sequence) or isinstance(source_rows, str):
        raise InvalidInputError("source_rows must be an array")
    if not isinstance(source_headers, Sequence) or isinstance(source_headers, str):
        raise InvalidInputError("source_headers must be an array")


class NormalizerTools:
    """Result-returning operations bound to one mapping store."""

    def __init__(self, store: MappingStore | None = None, strategy: MatchingStrategy | None = None) -> None:
        self.store = store if store is not None else MappingStore()
        self.strategy = strategy if strategy is not None else KeywordMatchingStrategy()

    @_operation("read_sample")
    def read_sample(self, table: SourceTable, sample_size: int = DEFAULT_SAMPLE_SIZE) -> dict[str, Any]:
        if not isinstance(table, SourceTable):
            raise InvalidInputError("table must be a SourceTable")
        return read_sample(table, sample_size).to_dict()

    @_operation("analyze_column_relationships")
    def analyze_column_relationships(self, headers: Sequence[str], sample_rows: Sequence[Sequence[Any]]) -> dict[str, Any]:
        rel = detect(headers, sample_rows)
        return {"relationships": rel.to_dict(), "message": rel.summary()}

    @_operation("suggest_column_mapping")
    def suggest_column_mapping(
        self,
        headers: Sequence[str],
        sample_rows: Sequence[Sequence[Any]],
        relationships: ColumnRelationships | None = None,
    ) -> dict[str, Any]:
        _require_rows(sample_rows, headers)
        return self.strategy.plan(headers, sample_rows, relationships).to_dict()

    @_operation("create_column_mapping")
    def create_column_mapping(self, mapping: Mapping[str, Any]) -> dict[str, Any]:
        created = self.store.create(mapping)
        return {
            "message": "Column mapping created successfully",
            "mapping_id": created.mapping_id,
            "mapped_columns": created.mapped_columns,
            "unmapped_columns": created.unmapped_columns,
        }

    @_operation("transform_rows")
    def transform_rows(self, mapping_id: str, source_rows: Sequence[Sequence[Any]], source_headers: Sequence[Any]) -> dict[str, Any]:
        mapping = self.store.get(mapping_id)
        rows = transform(mapping, source_rows, source_headers)
        return {
            "message": f"Transformed {len(rows)} rows successfully",
            "transformed_rows": rows,
            "row_count": len(rows),
            "column_count": len(CANONICAL_COLUMNS),
        }

    @_operation("combine_name_fields")
    def combine_name_fields(
        self,
        first_name_column: str,
        last_name_column: str,
        source_rows: Sequence[Sequence[Any]],
        source_headers: Sequence[Any],
        middle_name_column: str | None = None,
    ) -> dict[str, Any]:
        _require_rows(source_rows, source_headers)
        columns = {"first": first_name_column, "last": last_name_column, "middle": middle_name_column}
        names = [combine_name_from_row(columns, row, source_headers) for row in source_rows]
        used = f"{first_name_column} and {last_name_column}"
        if middle_name_column:
            used += f" and {middle_name_column}"
        return {
            "combined_names": names,
            "row_count": len(names),
            "message": f"Combined {len(names)} names from {used}",
        }

    @_operation("consolidate_address")
    def consolidate_address(
        self,
        address_components: Mapping[str, str],
        source_rows: Sequence[Sequence[Any]],
        source_headers: Sequence[Any],
    ) -> dict[str, Any]:
        _require_rows(source_rows, source_headers)
        columns = normalize_address_columns(address_components)
        addresses = [combine_address_from_row(columns, row, source_headers) for row in source_rows]
        return {
            "consolidated_addresses": addresses,
            "row_count": len(addresses),
            "message": f"Consolidated {len(addresses)} addresses from {len(columns)} components",
        }

    @_operation("validate_mapping")
    def validate_mapping(self, sample_data: Sequence[Sequence[Any]]) -> dict[str, Any]:
        return validate(sample_data).to_dict()

    @_operation("sample_indices")
    def sample_indices(self, total_rows: int, desired: int = DEFAULT_SAMPLE_SIZE) -> dict[str, Any]:
        indices = sample_indices(total_rows, desired)
        return {"indices": indices, "count": len(indices)}

    @_operation("infer_type")
    def infer_type(self, values: Sequence[Any]) -> dict[str, Any]:
        if isinstance(values, str) or not isinstance(values, Sequence):
            raise InvalidInputError("values must be an array")
        return {"type": infer_type(values).value}

    @_operation("split_name")
    def split_name(self, full_name: Any) -> dict[str, Any]:
        return asdict(split_name(full_name))

    @_operation("parse_address")
    def parse_address(self, full_address: Any) -> dict[str, Any]:
        return parse_address(full_address).to_dict()
