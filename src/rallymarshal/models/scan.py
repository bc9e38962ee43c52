"""Validated per-car scan records produced by the reader."""

from __future__ import annotations

from datetime import time

from pydantic import BaseModel, ConfigDict


class CheckpointScan(BaseModel):
    """Scan times recorded for one car at one checkpoint."""

    model_config = ConfigDict(frozen=True)

    checkpoint_name: str
    timestamps: tuple[time, ...] = ()


class ScanRecord(BaseModel):
    """One car's scans, one entry per configured checkpoint in route order."""

    model_config = ConfigDict(frozen=True)

    car_code: str
    scans: tuple[CheckpointScan, ...] = ()
