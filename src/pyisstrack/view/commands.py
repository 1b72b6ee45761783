"""Commands issued by the view controller to a :class:`MapView`."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyisstrack.models.basemap import MarkerIcon
from pyisstrack.view.map_view import MapView


class _MapCommand(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class MoveMarker(_MapCommand):
    latitude: float
    longitude: float
    icon: MarkerIcon

    def apply(self, view: MapView) -> None:
        view.move_marker(self.latitude, self.longitude, self.icon)


class SetView(_MapCommand):
    latitude: float
    longitude: float
    zoom: int

    def apply(self, view: MapView) -> None:
        view.set_view(self.latitude, self.longitude, self.zoom)


class SetZoom(_MapCommand):
    zoom: int

    def apply(self, view: MapView) -> None:
        view.set_zoom(self.zoom)


class ReplaceTileLayer(_MapCommand):
    provider: str

    def apply(self, view: MapView) -> None:
        view.replace_tile_layer(self.provider)


MapCommand = MoveMarker | SetView | SetZoom | ReplaceTileLayer
