"""Compile validated scan records into per-car results."""

from __future__ import annotations

from typing import Sequence

from rallymarshal._logging import get_logger, log_stage
from rallymarshal.events import DiagnosticEvent, DiagnosticSink, EventKind, LoggingSink
from rallymarshal.exceptions import InvariantViolatedError
from rallymarshal.models.checkpoint import Checkpoint, RallyConfig
from rallymarshal.models.result import CarResult, CheckpointRecord
from rallymarshal.models.scan import CheckpointScan, ScanRecord

logger = get_logger(__name__)


def _check_alignment(record: ScanRecord, checkpoints: Sequence[Checkpoint]) -> None:
    if len(record.scans) != len(checkpoints):
        raise InvariantViolatedError(
            f"{record.car_code}: {len(record.scans)} scans for {len(checkpoints)} checkpoints"
        )
    for position, (checkpoint, scan) in enumerate(zip(checkpoints, record.scans), start=1):
        if scan.checkpoint_name != checkpoint.name:
            raise InvariantViolatedError(
                f"{record.car_code}: scan {position} is for {scan.checkpoint_name!r}, "
                f"expected {checkpoint.name!r}"
            )


def compile_checkpoint(config: RallyConfig, checkpoint: Checkpoint, scan: CheckpointScan) -> CheckpointRecord:
    """Build the record for one checkpoint.

    The record starts missed and penalized; scans only fill in arrival and
    departure. Deciding whether a scan clears the miss is left to scoring.
    """
    timestamps = scan.timestamps
    return CheckpointRecord(
        checkpoint_name=checkpoint.name,
        scanned_timestamps=timestamps,
        is_missed=True,
        time_penalty=config.missed_penalty,
        expected_arrival_offset=checkpoint.expected_arrival_offset,
        actual_arrival_time=timestamps[0] if timestamps else None,
        actual_departure_time=timestamps[-1] if timestamps else None,
    )


class ResultCompiler:
    """Turns scan records into one CarResult per car, in input order."""

    def __init__(self, sink: DiagnosticSink | None = None) -> None:
        self._sink = sink or LoggingSink(logger)

    @log_stage
    def compile(self, config: RallyConfig, records: Sequence[ScanRecord]) -> list[CarResult]:
        """Compile ``records`` against the checkpoints and penalty in ``config``.

        Raises:
            InvariantViolatedError: If a record's scans do not line up with
                the configured checkpoints.
        """
        self._sink.emit(DiagnosticEvent.of(EventKind.COMPILING_MARSHAL_DATA, car_count=len(records)))

        results: list[CarResult] = []
        for record in records:
            _check_alignment(record, config.checkpoints)
            results.append(CarResult(
                car_code=record.car_code,
                checkpoint_records=tuple(
                    compile_checkpoint(config, checkpoint, scan)
                    for checkpoint, scan in zip(config.checkpoints, record.scans, strict=True)
                ),
            ))
        return results
