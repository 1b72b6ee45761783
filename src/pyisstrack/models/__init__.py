"""Typed models for feed payloads and view state."""

from pyisstrack.models._base import FeedEnum, FeedModel
from pyisstrack.models.basemap import BaseMap, MarkerIcon, icon_asset_path, icon_for
from pyisstrack.models.camera import CameraIntent, CameraMode
from pyisstrack.models.position import Position, Visibility

__all__ = [
    "BaseMap",
    "CameraIntent",
    "CameraMode",
    "FeedEnum",
    "FeedModel",
    "MarkerIcon",
    "Position",
    "Visibility",
    "icon_asset_path",
    "icon_for",
]
