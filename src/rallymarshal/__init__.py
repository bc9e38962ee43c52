"""rallymarshal: validate rally marshal point scans and compile per-car results."""

from rallymarshal.compiler import ResultCompiler
from rallymarshal.config import load_rally_config
from rallymarshal.events import (
    DiagnosticEvent,
    DiagnosticSink,
    EventKind,
    LoggingSink,
    RecordingSink,
)
from rallymarshal.exceptions import (
    ConfigurationError,
    EmptyInputError,
    FieldFormatInvalidError,
    FieldOutOfRangeError,
    HeaderMismatchError,
    InputFileNotFoundError,
    InvariantViolatedError,
    MissingRequiredFieldError,
    RallyDataError,
    UnexpectedFailureError,
)
from rallymarshal.models import (
    CarResult,
    Checkpoint,
    CheckpointRecord,
    CheckpointScan,
    RallyConfig,
    ScanRecord,
)
from rallymarshal.pipeline import run_pipeline
from rallymarshal.reader import MarshalDataReader, ReadResult
from rallymarshal.settings import Settings
from rallymarshal.storage import FileStore, LocalFileStore

__all__ = [
    "CarResult",
    "Checkpoint",
    "CheckpointRecord",
    "CheckpointScan",
    "ConfigurationError",
    "DiagnosticEvent",
    "DiagnosticSink",
    "EmptyInputError",
    "EventKind",
    "FieldFormatInvalidError",
    "FieldOutOfRangeError",
    "FileStore",
    "HeaderMismatchError",
    "InputFileNotFoundError",
    "InvariantViolatedError",
    "LocalFileStore",
    "LoggingSink",
    "MarshalDataReader",
    "MissingRequiredFieldError",
    "RallyConfig",
    "RallyDataError",
    "ReadResult",
    "RecordingSink",
    "ResultCompiler",
    "ScanRecord",
    "Settings",
    "UnexpectedFailureError",
    "load_rally_config",
    "run_pipeline",
]

__version__ = "0.1.0"
