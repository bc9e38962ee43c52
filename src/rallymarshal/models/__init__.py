"""Rally marshal data models."""

from rallymarshal.models.checkpoint import Checkpoint, RallyConfig
from rallymarshal.models.result import CarResult, CheckpointRecord
from rallymarshal.models.scan import CheckpointScan, ScanRecord

__all__ = [
    "CarResult",
    "Checkpoint",
    "CheckpointRecord",
    "CheckpointScan",
    "RallyConfig",
    "ScanRecord",
]
