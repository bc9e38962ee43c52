"""Marshal data reader: delimited text into validated per-car scan records.

Expected layout::

    Car Number,<checkpoint 1>,<checkpoint 2>,...
    7,09:05:00,,...

The first column must be ``Car Number``; the remaining columns must name the
configured checkpoints in route order. Car numbers are integers in 1..999 and
scan times are ``HH:MM:SS``. Empty scan cells mean the car was not scanned.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Sequence

from rallymarshal._logging import get_logger, log_stage
from rallymarshal._table import ParsedTable, TableRow, parse_table
from rallymarshal.events import (
    DiagnosticEvent,
    DiagnosticSink,
    EventKind,
    LoggingSink,
    event_for_error,
)
from rallymarshal.exceptions import (
    EmptyInputError,
    FieldFormatInvalidError,
    FieldOutOfRangeError,
    HeaderMismatchError,
    InputFileNotFoundError,
    MissingRequiredFieldError,
    RallyDataError,
    UnexpectedFailureError,
)
from rallymarshal.models.checkpoint import Checkpoint
from rallymarshal.models.scan import CheckpointScan, ScanRecord
from rallymarshal.storage import FileStore

logger = get_logger(__name__)

CAR_NUMBER_HEADER = "Car Number"
CAR_NUMBER_MIN = 1
CAR_NUMBER_MAX = 999
DEFAULT_CAR_CODE_PREFIX = "ART40/24/"
TIME_FORMAT = "%H:%M:%S"
TIME_FORMAT_LABEL = "HH:MM:SS"

_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ReadResult:
    """Outcome of a read: either every record or the error that stopped it."""

    records: tuple[ScanRecord, ...] = ()
    error: RallyDataError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> list[ScanRecord]:
        """Return the records, or raise the error that failed the read."""
        if self.error is not None:
            raise self.error
        return list(self.records)


def format_car_code(car_number: int, prefix: str = DEFAULT_CAR_CODE_PREFIX) -> str:
    """Build a car code from the prefix and the number zero-padded to 3 digits."""
    return f"{prefix}{car_number:03d}"


def parse_car_number(value: str) -> int:
    """Parse and range-check a car number cell."""
    if not value:
        raise MissingRequiredFieldError(CAR_NUMBER_HEADER)
    if not _DIGITS_RE.fullmatch(value):
        raise FieldFormatInvalidError(
            CAR_NUMBER_HEADER,
            f"integer between {CAR_NUMBER_MIN} and {CAR_NUMBER_MAX}",
            value,
        )
    number = int(value)
    if not CAR_NUMBER_MIN <= number <= CAR_NUMBER_MAX:
        raise FieldOutOfRangeError(CAR_NUMBER_HEADER, CAR_NUMBER_MIN, CAR_NUMBER_MAX, number)
    return number


def parse_time_of_day(field: str, value: str) -> time:
    """Parse an ``HH:MM:SS`` scan time."""
    try:
        return datetime.strptime(value, TIME_FORMAT).time()
    except ValueError as exc:
        raise FieldFormatInvalidError(field, TIME_FORMAT_LABEL, value) from exc


def validate_header(headers: Sequence[str], checkpoints: Sequence[Checkpoint]) -> None:
    """Check header columns against the configured columns, position by position."""
    expected = [CAR_NUMBER_HEADER, *(c.name for c in checkpoints)]
    actual = list(headers)

    width = max(len(expected), len(actual))
    padded_expected = expected + [None] * (width - len(expected))
    padded_actual = actual + [None] * (width - len(actual))

    for position, (want, got) in enumerate(zip(padded_expected, padded_actual, strict=True), start=1):
        if want != got:
            raise HeaderMismatchError(position, want, got)


def validate_row(
    row: TableRow,
    checkpoints: Sequence[Checkpoint],
    car_code_prefix: str = DEFAULT_CAR_CODE_PREFIX,
    sink: DiagnosticSink | None = None,
) -> ScanRecord:
    """Validate one data row and build its scan record.

    Assumes the header has already been validated, so cell ``i + 1`` belongs
    to ``checkpoints[i]``.
    """
    car_number_cell, *time_cells = row.cells
    car_number = parse_car_number(car_number_cell)

    scans: list[CheckpointScan] = []
    for checkpoint, cell in zip(checkpoints, time_cells, strict=True):
        if not cell:
            if sink is not None:
                sink.emit(DiagnosticEvent.of(
                    EventKind.MISSING_TIME_CAPTURED,
                    car_number=car_number_cell,
                    checkpoint=checkpoint.name,
                ))
            scans.append(CheckpointScan(checkpoint_name=checkpoint.name))
            continue

        scanned_at = parse_time_of_day(checkpoint.name, cell)
        scans.append(CheckpointScan(checkpoint_name=checkpoint.name, timestamps=(scanned_at,)))

    return ScanRecord(car_code=format_car_code(car_number, car_code_prefix), scans=tuple(scans))


class MarshalDataReader:
    """Reads and validates marshal point scan data.

    Validation is fail-fast: the first violation aborts the whole read and no
    partial record list is returned.

    Usage:
        reader = MarshalDataReader()
        result = reader.read(csv_text, config.checkpoints)
        if result:
            records = result.records
    """

    def __init__(
        self,
        sink: DiagnosticSink | None = None,
        car_code_prefix: str = DEFAULT_CAR_CODE_PREFIX,
    ) -> None:
        self._sink = sink or LoggingSink(logger)
        self._car_code_prefix = car_code_prefix

    def read(
        self,
        text: str,
        checkpoints: Sequence[Checkpoint],
        source: str | None = None,
    ) -> ReadResult:
        """Parse and validate ``text`` against the ordered ``checkpoints``."""
        try:
            table = parse_table(text, source)
            records = self._validate(table, checkpoints)
        except RallyDataError as exc:
            return self._fail(exc)
        except Exception as exc:
            return self._fail(UnexpectedFailureError(str(exc)), cause=exc)
        return ReadResult(records=tuple(records))

    def read_file(
        self,
        store: FileStore,
        path: str,
        checkpoints: Sequence[Checkpoint],
    ) -> ReadResult:
        """Read marshal data from ``path`` through ``store``."""
        if not store.exists(path):
            return self._fail(InputFileNotFoundError("MarshalData", path))

        try:
            text = store.read_text(path)
        except (OSError, UnicodeError) as exc:
            return self._fail(UnexpectedFailureError(f"Could not read {path}: {exc}"), cause=exc)
        if not text.strip():
            return self._fail(EmptyInputError(path))

        return self.read(text, checkpoints, source=path)

    @log_stage
    def _validate(self, table: ParsedTable, checkpoints: Sequence[Checkpoint]) -> list[ScanRecord]:
        self._sink.emit(DiagnosticEvent.of(EventKind.VALIDATING_HEADERS))
        validate_header(table.headers, checkpoints)

        records: list[ScanRecord] = []
        for row in table.rows:
            self._sink.emit(DiagnosticEvent.of(EventKind.READING_DATA_LINE, raw=row.raw))
            records.append(validate_row(row, checkpoints, self._car_code_prefix, self._sink))
        return records

    def _fail(self, error: RallyDataError, cause: BaseException | None = None) -> ReadResult:
        if cause is not None:
            error.__cause__ = cause
        self._sink.emit(event_for_error(error))
        return ReadResult(error=error)
