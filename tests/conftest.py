"""Shared test fixtures and sample marshal data."""

from __future__ import annotations

import json

import pytest

from rallymarshal.events import RecordingSink
from rallymarshal.models.checkpoint import Checkpoint, RallyConfig
from rallymarshal.storage import FileStore

SAMPLE_CONFIG = {
    "name": "Test Rally",
    "missed_penalty": "00:15:00",
    "checkpoints": [
        {"name": "A", "expected_arrival_offset": "00:30:00"},
        {"name": "B", "expected_arrival_offset": "01:00:00"},
    ],
}

SAMPLE_CSV = (
    "Car Number,A,B\n"
    "1,09:05:00,\n"
    "7,09:07:30,09:38:00\n"
    "123,,09:40:00\n"
)


class InMemoryStore(FileStore):
    """FileStore backed by a dict of path -> text."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = dict(files or {})

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_text(self, path: str) -> str:
        return self.files[path]


@pytest.fixture
def config() -> RallyConfig:
    return RallyConfig.model_validate(SAMPLE_CONFIG)


@pytest.fixture
def checkpoints(config: RallyConfig) -> tuple[Checkpoint, ...]:
    return config.checkpoints


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore({
        "rally_config.json": json.dumps(SAMPLE_CONFIG),
        "marshal_data.csv": SAMPLE_CSV,
    })
