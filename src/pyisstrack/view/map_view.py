"""Interface of the map widget driven by the view controller."""

from __future__ import annotations

from typing import Protocol

from pyisstrack.models.basemap import MarkerIcon


class MapView(Protocol):
    """One-way command sink for a map widget.

    Implementations render; they never decide. User manipulation flows back
    as :mod:`pyisstrack.view.events` through the session.
    """

    def move_marker(self, latitude: float, longitude: float, icon: MarkerIcon) -> None:
        ...

    def set_view(self, latitude: float, longitude: float, zoom: int) -> None:
        ...

    def set_zoom(self, zoom: int) -> None:
        ...

    def replace_tile_layer(self, provider: str) -> None:
        ...
