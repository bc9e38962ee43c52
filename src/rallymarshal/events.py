"""Structured diagnostic events and the sinks that receive them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from rallymarshal._logging import get_logger
from rallymarshal.exceptions import (
    EmptyInputError,
    FieldFormatInvalidError,
    FieldOutOfRangeError,
    HeaderMismatchError,
    InputFileNotFoundError,
    MissingRequiredFieldError,
    RallyDataError,
)


class EventKind(str, Enum):
    """Kinds of diagnostic events emitted while processing marshal data."""

    APP_STARTING = "app_starting"
    APP_SHUTTING_DOWN = "app_shutting_down"
    FILE_NOT_FOUND = "file_not_found"
    FILE_EMPTY = "file_empty"
    CONFIG_READ = "config_read"
    VALIDATING_HEADERS = "validating_headers"
    HEADER_MISMATCH = "header_mismatch"
    READING_DATA_LINE = "reading_data_line"
    MISSING_TIME_CAPTURED = "missing_time_captured"
    INVALID_DATA_FORMAT = "invalid_data_format"
    COMPILING_MARSHAL_DATA = "compiling_marshal_data"
    UNHANDLED_EXCEPTION = "unhandled_exception"


_LEVELS: dict[EventKind, int] = {
    EventKind.APP_STARTING: logging.INFO,
    EventKind.APP_SHUTTING_DOWN: logging.INFO,
    EventKind.FILE_NOT_FOUND: logging.ERROR,
    EventKind.FILE_EMPTY: logging.ERROR,
    EventKind.CONFIG_READ: logging.INFO,
    EventKind.VALIDATING_HEADERS: logging.DEBUG,
    EventKind.HEADER_MISMATCH: logging.ERROR,
    EventKind.READING_DATA_LINE: logging.DEBUG,
    EventKind.MISSING_TIME_CAPTURED: logging.DEBUG,
    EventKind.INVALID_DATA_FORMAT: logging.ERROR,
    EventKind.COMPILING_MARSHAL_DATA: logging.INFO,
    EventKind.UNHANDLED_EXCEPTION: logging.ERROR,
}

_TEMPLATES: dict[EventKind, str] = {
    EventKind.APP_STARTING: "Starting: {app_name}",
    EventKind.APP_SHUTTING_DOWN: "Application is shutting down",
    EventKind.FILE_NOT_FOUND: "{file_type} file not found at: {path}",
    EventKind.FILE_EMPTY: "File is empty: {path}",
    EventKind.CONFIG_READ: "Rally configuration {name} read successfully",
    EventKind.VALIDATING_HEADERS: "Validating CSV headers",
    EventKind.HEADER_MISMATCH: (
        "CSV header mismatch at column {position}: expected {expected!r}, found {actual!r}"
    ),
    EventKind.READING_DATA_LINE: "Reading data line: {raw}",
    EventKind.MISSING_TIME_CAPTURED: "No time captured for car {car_number} at {checkpoint}",
    EventKind.INVALID_DATA_FORMAT: "Invalid data format: {field} : {reason}",
    EventKind.COMPILING_MARSHAL_DATA: "Compiling the marshal data for {car_count} cars",
    EventKind.UNHANDLED_EXCEPTION: "Unhandled exception: {message}",
}


@dataclass(frozen=True)
class DiagnosticEvent:
    """A single structured diagnostic event."""

    kind: EventKind
    message: str
    level: int = logging.INFO
    context: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, kind: EventKind, **context: Any) -> DiagnosticEvent:
        """Build an event with the kind's default level and formatted message."""
        return cls(
            kind=kind,
            message=_TEMPLATES[kind].format(**context),
            level=_LEVELS[kind],
            context=context,
        )


class DiagnosticSink(ABC):
    """Receives diagnostic events. Emission is fire-and-forget."""

    @abstractmethod
    def emit(self, event: DiagnosticEvent) -> None: ...


class LoggingSink(DiagnosticSink):
    """Forwards events to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger("events")

    def emit(self, event: DiagnosticEvent) -> None:
        self._logger.log(
            event.level,
            event.message,
            extra={"event_kind": event.kind.value, "event_context": dict(event.context)},
        )


class RecordingSink(DiagnosticSink):
    """Keeps emitted events in memory, in emission order."""

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def emit(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    @property
    def kinds(self) -> list[EventKind]:
        return [e.kind for e in self.events]

    def of_kind(self, kind: EventKind) -> list[DiagnosticEvent]:
        return [e for e in self.events if e.kind == kind]


def event_for_error(error: RallyDataError) -> DiagnosticEvent:
    """Map a data error to the diagnostic event that reports it."""
    if isinstance(error, HeaderMismatchError):
        return DiagnosticEvent.of(
            EventKind.HEADER_MISMATCH,
            position=error.position,
            expected=error.expected,
            actual=error.actual,
        )
    if isinstance(error, InputFileNotFoundError):
        return DiagnosticEvent.of(
            EventKind.FILE_NOT_FOUND, file_type=error.file_type, path=error.path,
        )
    if isinstance(error, EmptyInputError):
        return DiagnosticEvent.of(EventKind.FILE_EMPTY, path=error.source or "<input>")
    if isinstance(error, MissingRequiredFieldError):
        return DiagnosticEvent.of(
            EventKind.INVALID_DATA_FORMAT, field=error.field, reason=f"{error.field} is required",
        )
    if isinstance(error, FieldOutOfRangeError):
        return DiagnosticEvent.of(
            EventKind.INVALID_DATA_FORMAT,
            field=error.field,
            reason=f"{error.field} should be between {error.minimum} and {error.maximum}",
        )
    if isinstance(error, FieldFormatInvalidError):
        return DiagnosticEvent.of(
            EventKind.INVALID_DATA_FORMAT,
            field=error.field,
            reason=f"expected {error.expected_format}",
        )
    return DiagnosticEvent.of(EventKind.UNHANDLED_EXCEPTION, message=str(error))
