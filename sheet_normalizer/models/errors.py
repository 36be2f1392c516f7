from __future__ import annotations

from enum import Enum

"""Error kinds raised by the normalization core.

Core functions raise `NormalizerError` subclasses. The tool surface
(`services.tools`) converts them into `OperationResult` failures so that an
orchestrating layer never has to catch anything.
"""

__all__ = [
    "ErrorKind",
    "NormalizerError",
    "InvalidInputError",
    "InvalidMappingError",
    "MappingNotFoundError",
    "UnsupportedSourceError",
    "RECOVERABLE_KINDS",
    "ERROR_SUGGESTIONS",
]


class ErrorKind(Enum):
    """Failure classification carried by every error and failed result."""
    INVALID_INPUT = "InvalidInput"
    INVALID_MAPPING = "InvalidMapping"
    MAPPING_NOT_FOUND = "MappingNotFound"
    UNSUPPORTED_SOURCE = "UnsupportedSource"
    UNKNOWN = "Unknown"


# retry with adjusted arguments may succeed for these
RECOVERABLE_KINDS = frozenset({
    ErrorKind.INVALID_INPUT,
    ErrorKind.INVALID_MAPPING,
    ErrorKind.MAPPING_NOT_FOUND,
})

ERROR_SUGGESTIONS = {
    ErrorKind.INVALID_INPUT: "Check argument shapes: rows and headers must be lists, mapping values must be strings.",
    ErrorKind.INVALID_MAPPING: "Provide an entry for all 10 canonical columns. Use \"\" for columns with no source.",
    ErrorKind.MAPPING_NOT_FOUND: "Create a mapping first with create_column_mapping and pass the returned mapping_id.",
    ErrorKind.UNSUPPORTED_SOURCE: "The table has no header row or no non-empty data rows. Check the source file or sheet.",
    ErrorKind.UNKNOWN: "An unexpected error occurred. Check the error message for details.",
}


class NormalizerError(Exception):
    """Base class for all normalization core errors."""
    kind: ErrorKind = ErrorKind.UNKNOWN


class InvalidInputError(NormalizerError):
    """Malformed arguments (wrong shape or type)."""
    kind = ErrorKind.INVALID_INPUT


class InvalidMappingError(NormalizerError):
    """Mapping lacks one or more canonical columns."""
    kind = ErrorKind.INVALID_MAPPING


class MappingNotFoundError(NormalizerError):
    """Mapping identifier unknown to the store."""
    kind = ErrorKind.MAPPING_NOT_FOUND


class UnsupportedSourceError(NormalizerError):
    """Source table has no headers or no data rows."""
    kind = ErrorKind.UNSUPPORTED_SOURCE
