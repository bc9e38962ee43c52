"""Tests for the result compiler."""

from __future__ import annotations

from datetime import time, timedelta

import pytest

from rallymarshal.compiler import ResultCompiler, compile_checkpoint
from rallymarshal.events import EventKind
from rallymarshal.exceptions import InvariantViolatedError
from rallymarshal.models.scan import CheckpointScan, ScanRecord
from rallymarshal.reader import MarshalDataReader
from tests.conftest import SAMPLE_CSV


def _record(car_code: str, *scans: tuple[str, tuple[time, ...]]) -> ScanRecord:
    return ScanRecord(
        car_code=car_code,
        scans=tuple(CheckpointScan(checkpoint_name=name, timestamps=ts) for name, ts in scans),
    )


class TestCompileCheckpoint:
    def test_unscanned(self, config) -> None:
        record = compile_checkpoint(config, config.checkpoints[1], CheckpointScan(checkpoint_name="B"))
        assert record.checkpoint_name == "B"
        assert record.scanned_timestamps == ()
        assert record.is_missed is True
        assert record.time_penalty == timedelta(minutes=15)
        assert record.expected_arrival_offset == timedelta(hours=1)
        assert record.actual_arrival_time is None
        assert record.actual_departure_time is None

    def test_single_scan(self, config) -> None:
        scan = CheckpointScan(checkpoint_name="A", timestamps=(time(9, 5),))
        record = compile_checkpoint(config, config.checkpoints[0], scan)
        assert record.actual_arrival_time == time(9, 5)
        assert record.actual_departure_time == time(9, 5)

    def test_multiple_scans(self, config) -> None:
        scan = CheckpointScan(checkpoint_name="A", timestamps=(time(9, 5), time(9, 6), time(9, 8)))
        record = compile_checkpoint(config, config.checkpoints[0], scan)
        assert record.actual_arrival_time == time(9, 5)
        assert record.actual_departure_time == time(9, 8)
        assert record.scanned_timestamps == (time(9, 5), time(9, 6), time(9, 8))

    def test_scan_does_not_clear_miss(self, config) -> None:
        scan = CheckpointScan(checkpoint_name="A", timestamps=(time(9, 5),))
        record = compile_checkpoint(config, config.checkpoints[0], scan)
        assert record.is_missed is True
        assert record.time_penalty == config.missed_penalty


class TestResultCompiler:
    def test_scenario(self, config, checkpoints) -> None:
        """Car 1 scanned at A only."""
        records = MarshalDataReader().read("Car Number,A,B\n1,09:05:00,\n", checkpoints).unwrap()
        (result,) = ResultCompiler().compile(config, records)

        assert result.car_code == "ART40/24/001"
        a, b = result.checkpoint_records

        assert a.checkpoint_name == "A"
        assert a.scanned_timestamps == (time(9, 5),)
        assert a.is_missed is True
        assert a.time_penalty == timedelta(minutes=15)
        assert a.expected_arrival_offset == timedelta(minutes=30)
        assert a.actual_arrival_time == a.actual_departure_time == time(9, 5)

        assert b.checkpoint_name == "B"
        assert b.scanned_timestamps == ()
        assert b.is_missed is True
        assert b.time_penalty == timedelta(minutes=15)
        assert b.actual_arrival_time is None
        assert b.actual_departure_time is None

    def test_one_result_per_record(self, config, checkpoints) -> None:
        records = MarshalDataReader().read(SAMPLE_CSV, checkpoints).unwrap()
        results = ResultCompiler().compile(config, records)
        assert len(results) == len(records)
        assert [r.car_code for r in results] == [r.car_code for r in records]
        for result in results:
            assert len(result.checkpoint_records) == len(config.checkpoints)
            assert [c.checkpoint_name for c in result.checkpoint_records] == ["A", "B"]

    def test_empty_input(self, config, sink) -> None:
        assert ResultCompiler(sink).compile(config, []) == []
        event = sink.of_kind(EventKind.COMPILING_MARSHAL_DATA)[0]
        assert event.context == {"car_count": 0}

    def test_too_few_scans(self, config) -> None:
        record = _record("ART40/24/001", ("A", ()))
        with pytest.raises(InvariantViolatedError, match="1 scans for 2 checkpoints"):
            ResultCompiler().compile(config, [record])

    def test_misaligned_scans(self, config) -> None:
        record = _record("ART40/24/001", ("B", ()), ("A", ()))
        with pytest.raises(InvariantViolatedError, match="scan 1 is for 'B'"):
            ResultCompiler().compile(config, [record])

    def test_duplicate_car_codes_are_kept(self, config) -> None:
        records = [
            _record("ART40/24/001", ("A", ()), ("B", ())),
            _record("ART40/24/001", ("A", (time(9, 0),)), ("B", ())),
        ]
        results = ResultCompiler().compile(config, records)
        assert len(results) == 2
