"""Custom exceptions for rally marshal data processing."""

from __future__ import annotations


class RallyDataError(Exception):
    """Base exception for all marshal data errors."""


class InputFileNotFoundError(RallyDataError):
    """Raised when an input file does not exist."""

    def __init__(self, file_type: str, path: str) -> None:
        self.file_type = file_type
        self.path = path
        super().__init__(f"{file_type} file not found at: {path}")


class EmptyInputError(RallyDataError):
    """Raised when input content has no data rows."""

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        super().__init__(f"Input is empty: {source}" if source else "Input is empty")


class HeaderMismatchError(RallyDataError):
    """Raised when a header column does not match the configured column at its position.

    ``expected`` is None for an unexpected extra column; ``actual`` is None
    for a missing one. Positions are 1-based.
    """

    def __init__(self, position: int, expected: str | None, actual: str | None) -> None:
        self.position = position
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Header mismatch at column {position}: expected {expected!r}, found {actual!r}"
        )


class MissingRequiredFieldError(RallyDataError):
    """Raised when a required field is empty."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} is required")


class FieldFormatInvalidError(RallyDataError):
    """Raised when a field value cannot be parsed in the expected format."""

    def __init__(self, field: str, expected_format: str, value: str | None = None) -> None:
        self.field = field
        self.expected_format = expected_format
        self.value = value
        super().__init__(f"{field} has invalid format (expected {expected_format}): {value!r}")


class FieldOutOfRangeError(RallyDataError):
    """Raised when a numeric field falls outside its inclusive range."""

    def __init__(self, field: str, minimum: int, maximum: int, value: int | None = None) -> None:
        self.field = field
        self.minimum = minimum
        self.maximum = maximum
        self.value = value
        super().__init__(f"{field} should be between {minimum} and {maximum}, got {value}")


class UnexpectedFailureError(RallyDataError):
    """Raised for faults the validation rules do not anticipate."""


class InvariantViolatedError(RallyDataError):
    """Raised when compiler input breaks the reader's output contract."""


class ConfigurationError(RallyDataError):
    """Raised when the rally configuration fails model validation."""
