"""Tests for rally configuration loading."""

from __future__ import annotations

import json
from datetime import timedelta

import pytest
from pydantic import ValidationError

from rallymarshal.config import load_rally_config
from rallymarshal.events import EventKind
from rallymarshal.exceptions import (
    ConfigurationError,
    EmptyInputError,
    InputFileNotFoundError,
    UnexpectedFailureError,
)
from rallymarshal.storage import LocalFileStore
from tests.conftest import SAMPLE_CONFIG, InMemoryStore


class TestLoadRallyConfig:
    def test_success(self, memory_store, sink) -> None:
        config = load_rally_config(memory_store, "rally_config.json", sink)
        assert config.name == "Test Rally"
        assert config.missed_penalty == timedelta(minutes=15)
        assert sink.kinds == [EventKind.CONFIG_READ]
        assert sink.events[0].message == "Rally configuration Test Rally read successfully"

    def test_missing(self, sink) -> None:
        with pytest.raises(InputFileNotFoundError) as exc_info:
            load_rally_config(InMemoryStore(), "rally_config.json", sink)
        assert exc_info.value.file_type == "RallyConfig"
        assert sink.events[0].message == "RallyConfig file not found at: rally_config.json"

    def test_empty(self, sink) -> None:
        with pytest.raises(EmptyInputError):
            load_rally_config(InMemoryStore({"c.json": ""}), "c.json", sink)
        assert sink.kinds == [EventKind.FILE_EMPTY]

    def test_malformed_json(self, sink) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_rally_config(InMemoryStore({"c.json": "{not json"}), "c.json", sink)
        assert isinstance(exc_info.value.__cause__, ValidationError)
        assert sink.kinds == [EventKind.INVALID_DATA_FORMAT]

    def test_duplicate_checkpoints(self, sink) -> None:
        data = {
            **SAMPLE_CONFIG,
            "checkpoints": [
                {"name": "A", "expected_arrival_offset": "00:30:00"},
                {"name": "A", "expected_arrival_offset": "00:45:00"},
            ],
        }
        with pytest.raises(ConfigurationError, match="duplicate checkpoint name"):
            load_rally_config(InMemoryStore({"c.json": json.dumps(data)}), "c.json", sink)

    def test_missing_penalty(self) -> None:
        data = {k: v for k, v in SAMPLE_CONFIG.items() if k != "missed_penalty"}
        with pytest.raises(ConfigurationError):
            load_rally_config(InMemoryStore({"c.json": json.dumps(data)}), "c.json")

    def test_undecodable_file(self, sink, tmp_path) -> None:
        (tmp_path / "c.json").write_bytes(b'{"name": "R\xe9gion"}')
        with pytest.raises(UnexpectedFailureError) as exc_info:
            load_rally_config(LocalFileStore(tmp_path), "c.json", sink)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        assert sink.kinds == [EventKind.UNHANDLED_EXCEPTION]
