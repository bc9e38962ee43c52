"""Checkpoint and rally configuration models."""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Checkpoint(BaseModel):
    """A marshal point on the route, timed against the start."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    expected_arrival_offset: timedelta


class RallyConfig(BaseModel):
    """Route configuration: ordered checkpoints and the penalty for missing one."""

    model_config = ConfigDict(frozen=True)

    name: str
    missed_penalty: timedelta
    checkpoints: tuple[Checkpoint, ...] = Field(min_length=1)

    @field_validator("checkpoints")
    @classmethod
    def _unique_names(cls, value: tuple[Checkpoint, ...]) -> tuple[Checkpoint, ...]:
        seen: set[str] = set()
        for checkpoint in value:
            if checkpoint.name in seen:
                raise ValueError(f"duplicate checkpoint name: {checkpoint.name!r}")
            seen.add(checkpoint.name)
        return value

    @property
    def checkpoint_names(self) -> list[str]:
        """Checkpoint names in route order."""
        return [c.name for c in self.checkpoints]
