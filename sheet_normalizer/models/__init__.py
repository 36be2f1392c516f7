"""Domain models for the sheet normalizer.

This package contains the canonical schema constants and the value objects
passed between the normalization services.
"""

from .canonical import CANONICAL_COLUMNS, DERIVED
from .column_mapping import ColumnMapping
from .errors import (
    ErrorKind,
    InvalidInputError,
    InvalidMappingError,
    MappingNotFoundError,
    NormalizerError,
    UnsupportedSourceError,
)
from .operation_result import OperationError, OperationResult
from .relationships import ColumnRelationships
from .source_table import SourceTable
from .validation_report import ValidationEntry, ValidationReport

__all__ = [
    # Schema
    "CANONICAL_COLUMNS",
    "DERIVED",
    # Errors
    "ErrorKind",
    "NormalizerError",
    "InvalidInputError",
    "InvalidMappingError",
    "MappingNotFoundError",
    "UnsupportedSourceError",
    "OperationError",
    "OperationResult",
    # Value objects
    "ColumnMapping",
    "ColumnRelationships",
    "SourceTable",
    "ValidationEntry",
    "ValidationReport",
]
