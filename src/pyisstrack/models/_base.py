"""Base model and enum for feed payloads.

Every feed model inherits from :class:`FeedModel` which provides:

* A ``model_validator(mode="before")`` that strips placeholder values
  (``""``, ``"--"``, NaN) so a required field is reported missing and an
  optional one falls back to its default.
* A ``raw`` dict that captures the original payload.

Enums with an open value set inherit from :class:`FeedEnum`, which adds a
``_missing_`` hook that returns ``UNKNOWN`` for any value without a mapped
member.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Placeholder strings that mean "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan", "null"})


class FeedEnum(StrEnum):
    """Base for string enums decoded from the feed.

    Every subclass **must** define ``UNKNOWN``. Matching is
    case-insensitive; anything else resolves to ``UNKNOWN`` instead of
    raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> FeedEnum:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        unknown: FeedEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class FeedModel(BaseModel):
    """Base for models decoded from feed payloads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)
    """Original feed payload."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_feed_values(cls, values: Any) -> Any:
        """Strip placeholder values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)
        cleaned = FeedModel._clean_dict(original)
        # Keep an explicitly passed raw= (keyword construction); otherwise
        # record what we were validated from.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
