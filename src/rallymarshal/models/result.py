"""Per-car compiled results."""

from __future__ import annotations

from datetime import time, timedelta

from pydantic import BaseModel, ConfigDict


class CheckpointRecord(BaseModel):
    """Timing and penalty state for one car at one checkpoint."""

    model_config = ConfigDict(frozen=True)

    checkpoint_name: str
    scanned_timestamps: tuple[time, ...] = ()
    is_missed: bool = True
    time_penalty: timedelta
    expected_arrival_offset: timedelta
    actual_arrival_time: time | None = None
    actual_departure_time: time | None = None

    @property
    def has_scans(self) -> bool:
        """True if at least one scan was recorded at this checkpoint."""
        return len(self.scanned_timestamps) > 0


class CarResult(BaseModel):
    """Compiled result for a single car."""

    model_config = ConfigDict(frozen=True)

    car_code: str
    checkpoint_records: tuple[CheckpointRecord, ...] = ()
