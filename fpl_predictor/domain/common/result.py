"""Result types for store access and stage-level failures."""

from enum import Enum
from typing import Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorType(str, Enum):
    """Standard error types for consistent handling across stages."""

    VALIDATION_ERROR = "validation_error"
    DATA_NOT_FOUND = "data_not_found"
    DATA_ACCESS_ERROR = "data_access_error"
    CONFIGURATION_ERROR = "configuration_error"
    SYSTEM_ERROR = "system_error"


class DomainError(BaseModel):
    """Structured error information returned by repositories."""

    error_type: ErrorType = Field(..., description="Standardized error type")
    message: str = Field(..., min_length=1, description="Human-readable error message")
    details: Optional[Dict] = Field(None, description="Additional error context")

    @classmethod
    def validation_error(
        cls, message: str, details: Optional[Dict] = None
    ) -> "DomainError":
        """Create a validation error."""
        return cls(
            error_type=ErrorType.VALIDATION_ERROR, message=message, details=details
        )

    @classmethod
    def data_not_found(
        cls, message: str, details: Optional[Dict] = None
    ) -> "DomainError":
        """Create a data not found error."""
        return cls(
            error_type=ErrorType.DATA_NOT_FOUND, message=message, details=details
        )

    @classmethod
    def data_access_error(
        cls, message: str, details: Optional[Dict] = None
    ) -> "DomainError":
        """Create a data access error (store unreachable or unreadable)."""
        return cls(
            error_type=ErrorType.DATA_ACCESS_ERROR, message=message, details=details
        )


class Result(Generic[T]):
    """
    Result type for repository reads.

    Lets stores return either a value or a structured error; the pipeline
    decides whether the error is fatal for the stage.
    """

    def __init__(
        self,
        value: Optional[T] = None,
        error: Optional[DomainError] = None,
        _allow_none: bool = False,
    ):
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if not _allow_none and value is None and error is None:
            raise ValueError("Result must have either value or error")

        self._value = value
        self._error = error

    @property
    def value(self) -> T:
        """Get the success value. Raises error if result is failure."""
        if self._error is not None:
            raise ValueError(
                f"Cannot access value on failed result: {self._error.message}"
            )
        return self._value

    @property
    def error(self) -> DomainError:
        """Get the error. Raises error if result is success."""
        if self._error is None:
            raise ValueError("Cannot access error on successful result")
        return self._error

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        """Create a successful result."""
        return cls(value=value, _allow_none=True)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        """Create a failed result."""
        return cls(error=error)


class PipelineStageError(RuntimeError):
    """
    Fatal failure of a pipeline stage.

    Raised when a store the stage depends on cannot be read or written. The
    run is aborted; nothing downstream of the failed stage executes.
    """

    def __init__(self, stage: str, message: str):
        self.stage = stage
        self.message = message
        super().__init__(f"[{stage}] {message}")
