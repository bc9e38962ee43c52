"""Loading the rally configuration file."""

from __future__ import annotations

from pydantic import ValidationError

from rallymarshal._logging import get_logger
from rallymarshal.events import DiagnosticEvent, DiagnosticSink, EventKind, LoggingSink, event_for_error
from rallymarshal.exceptions import (
    ConfigurationError,
    EmptyInputError,
    InputFileNotFoundError,
    UnexpectedFailureError,
)
from rallymarshal.models.checkpoint import RallyConfig
from rallymarshal.storage import FileStore

logger = get_logger(__name__)


def load_rally_config(store: FileStore, path: str, sink: DiagnosticSink | None = None) -> RallyConfig:
    """Read and validate the JSON rally configuration at ``path``.

    Raises:
        InputFileNotFoundError: If the file does not exist.
        EmptyInputError: If the file has no content.
        UnexpectedFailureError: If the file cannot be read or decoded.
        ConfigurationError: If the content fails model validation.
    """
    sink = sink or LoggingSink(logger)

    if not store.exists(path):
        error = InputFileNotFoundError("RallyConfig", path)
        sink.emit(event_for_error(error))
        raise error

    try:
        text = store.read_text(path)
    except (OSError, UnicodeError) as exc:
        error = UnexpectedFailureError(f"Could not read {path}: {exc}")
        sink.emit(event_for_error(error))
        raise error from exc
    if not text.strip():
        error = EmptyInputError(path)
        sink.emit(event_for_error(error))
        raise error

    try:
        config = RallyConfig.model_validate_json(text)
    except ValidationError as exc:
        sink.emit(DiagnosticEvent.of(
            EventKind.INVALID_DATA_FORMAT, field="RallyConfig", reason=f"{exc.error_count()} validation errors",
        ))
        raise ConfigurationError(f"Failed to validate rally configuration {path}: {exc}") from exc

    sink.emit(DiagnosticEvent.of(EventKind.CONFIG_READ, name=config.name))
    return config
