"""Camera intent owned by the view controller."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyisstrack._constants import DEFAULT_ZOOM, MAX_ZOOM, MIN_ZOOM


class CameraMode(StrEnum):
    FOLLOWING = "following"
    FREE = "free"


class CameraIntent(BaseModel):
    """What the camera should do.

    ``FOLLOWING`` recentres on every new position; ``FREE`` only moves on
    direct user input. Instances are immutable; transitions produce a new
    intent via :meth:`with_mode` / :meth:`with_zoom`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: CameraMode = CameraMode.FOLLOWING
    zoom: int = Field(default=DEFAULT_ZOOM, ge=MIN_ZOOM, le=MAX_ZOOM)

    @property
    def following(self) -> bool:
        return self.mode == CameraMode.FOLLOWING

    def with_mode(self, mode: CameraMode) -> CameraIntent:
        return self.model_copy(update={"mode": mode})

    def with_zoom(self, zoom: int) -> CameraIntent:
        # model_copy skips validation; go through the constructor so the
        # zoom range is still enforced.
        return CameraIntent(mode=self.mode, zoom=zoom)
