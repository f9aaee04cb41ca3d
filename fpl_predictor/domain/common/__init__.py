"""Common domain types."""

from .result import DomainError, ErrorType, PipelineStageError, Result

__all__ = ["DomainError", "ErrorType", "PipelineStageError", "Result"]
