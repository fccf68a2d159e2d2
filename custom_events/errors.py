"""Errors raised while building custom events."""
from typing import Any


class EventValidationError(ValueError):
    """Base exception for rejected builder input."""

    def __init__(self, field: str, value: Any, message: str):
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidField(EventValidationError):
    """Raised when a field is empty, too long, or out of range."""
    pass


class NotANumber(EventValidationError):
    """Raised when an event value is not a finite decimal number."""
    pass


class BuilderFinalizedError(RuntimeError):
    """Raised when a builder is used after create() has been called."""
    pass
