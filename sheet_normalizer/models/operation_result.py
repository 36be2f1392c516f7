from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import ERROR_SUGGESTIONS, RECOVERABLE_KINDS, ErrorKind, NormalizerError

"""Discriminated success/failure result returned by every tool operation."""

__all__ = [
    "OperationError",
    "OperationResult",
]


@dataclass(frozen=True)
class OperationError:
    """Failure details handed back to the orchestrating layer.

    Attributes:
        kind: Error classification
        message: Human readable description
        operation: Name of the public operation that failed
        recoverable: True when retrying with adjusted inputs may succeed
        suggestion: Hint for the caller on how to adjust inputs
    """
    kind: ErrorKind
    message: str
    operation: str
    recoverable: bool
    suggestion: str

    @staticmethod
    def from_exception(operation: str, exc: BaseException) -> OperationError:
        kind = exc.kind if isinstance(exc, NormalizerError) else ErrorKind.UNKNOWN
        return OperationError(
            kind=kind,
            message=str(exc) or "Unknown error occurred",
            operation=operation,
            recoverable=kind in RECOVERABLE_KINDS,
            suggestion=ERROR_SUGGESTIONS[kind],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "operation": self.operation,
            "recoverable": self.recoverable,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class OperationResult:
    """Either `success=True` with a payload, or `success=False` with an error."""
    success: bool
    operation: str
    payload: dict[str, Any] = field(default_factory=dict)
    error: OperationError | None = None

    @staticmethod
    def ok(operation: str, **payload: Any) -> OperationResult:
        return OperationResult(success=True, operation=operation, payload=payload)

    @staticmethod
    def fail(operation: str, exc: BaseException) -> OperationResult:
        return OperationResult(
            success=False,
            operation=operation,
            error=OperationError.from_exception(operation, exc),
        )

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, **self.payload}
        error = self.error.to_dict() if self.error is not None else None
        return {"success": False, "error": error}
