"""Change notifications published by the position store."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyisstrack.models.position import Position


class PositionChanged(BaseModel):
    """The store accepted a position that differs from the previous one."""

    model_config = ConfigDict(frozen=True)

    current: Position
    previous: Position | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
