"""Satellite position model."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyisstrack.ingestion.normalize import parse_epoch, safe_float, safe_int, safe_str
from pyisstrack.models._base import FeedEnum, FeedModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Visibility(FeedEnum):
    DAYLIGHT = "daylight"
    ECLIPSED = "eclipsed"
    UNKNOWN = "unknown"


class Position(FeedModel):
    """One fix of the tracked object as reported by the feed.

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    altitude_km : float
        Altitude above the surface in km (feed key ``altitude``).
    velocity_kmh : float
        Ground speed in km/h (feed key ``velocity``).
    visibility : Visibility
        Whether the object is sunlit.
    timestamp : datetime
        UTC time of the fix. The feed reports epoch seconds; when it is
        absent the time of decoding is used.
    name : str or None
        Object name reported by the feed.
    norad_id : int or None
        NORAD catalogue number (feed key ``id``).
    footprint_km : float or None
        Diameter of the visibility footprint in km.
    solar_lat, solar_lon : float or None
        Subsolar point.
    raw : dict
        Full feed payload.
    """

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    altitude_km: float = Field(validation_alias=AliasChoices("altitude_km", "altitude"))
    velocity_kmh: float = Field(validation_alias=AliasChoices("velocity_kmh", "velocity"))
    visibility: Visibility
    timestamp: datetime = Field(default_factory=_utcnow)
    name: str | None = None
    norad_id: int | None = Field(default=None, validation_alias=AliasChoices("norad_id", "id"))
    footprint_km: float | None = Field(default=None, validation_alias=AliasChoices("footprint_km", "footprint"))
    solar_lat: float | None = None
    solar_lon: float | None = None

    @field_validator("latitude", "longitude", "altitude_km", "velocity_kmh", mode="before")
    @classmethod
    def _require_number(cls, value: Any) -> float:
        parsed = safe_float(value)
        if parsed is None:
            raise ValueError(f"expected a number, got {value!r}")
        return parsed

    @field_validator("footprint_km", "solar_lat", "solar_lon", mode="before")
    @classmethod
    def _coerce_optional_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("norad_id", mode="before")
    @classmethod
    def _coerce_norad_id(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("visibility", mode="before")
    @classmethod
    def _coerce_visibility(cls, value: Any) -> Visibility:
        return Visibility(str(value))

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> datetime:
        parsed = parse_epoch(value)
        return parsed if parsed is not None else _utcnow()

    def same_fix(self, other: Position | None) -> bool:
        """Whether *other* carries the same values (the raw payload is ignored)."""
        if other is None:
            return False
        return self.model_dump(exclude={"raw"}) == other.model_dump(exclude={"raw"})
