"""View layer: the controller, its commands and events, and map adapters."""

from pyisstrack.view.commands import MapCommand, MoveMarker, ReplaceTileLayer, SetView, SetZoom
from pyisstrack.view.controller import ViewController
from pyisstrack.view.events import (
    BaseMapSelected,
    CentreToggled,
    EventSource,
    ViewEvent,
    ZoomControlChanged,
    ZoomGesture,
)
from pyisstrack.view.map_view import MapView

__all__ = [
    "BaseMapSelected",
    "CentreToggled",
    "EventSource",
    "MapCommand",
    "MapView",
    "MoveMarker",
    "ReplaceTileLayer",
    "SetView",
    "SetZoom",
    "ViewController",
    "ViewEvent",
    "ZoomControlChanged",
    "ZoomGesture",
]
