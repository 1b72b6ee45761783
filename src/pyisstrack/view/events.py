"""User-input events consumed by the view controller.

Every event carries an :class:`EventSource` tag. Widgets report direct user
manipulation as ``GESTURE``; an echo of something the controller itself
asked for (a zoom-changed callback fired by ``set_view``, a slider moved by
a programmatic sync) must be reported as ``COMMAND``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyisstrack.models.basemap import BaseMap


class EventSource(StrEnum):
    GESTURE = "gesture"
    COMMAND = "command"


class _ViewEvent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    source: EventSource = EventSource.GESTURE


class CentreToggled(_ViewEvent):
    """The "centre" checkbox was ticked or cleared."""

    enabled: bool


class ZoomGesture(_ViewEvent):
    """The map reports a zoom level after a drag/zoom on the map itself."""

    zoom: float = Field(gt=0)


class ZoomControlChanged(_ViewEvent):
    """The zoom slider was moved."""

    zoom: int


class BaseMapSelected(_ViewEvent):
    base_map: BaseMap


ViewEvent = CentreToggled | ZoomGesture | ZoomControlChanged | BaseMapSelected
