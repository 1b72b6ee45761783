"""Leaflet page rendered with folium.

A :class:`MapView` that keeps the commanded view state and writes it out as a
standalone HTML page after every command. The page reloads itself so a
browser tab follows the tracker.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path

import folium
from folium.plugins import MiniMap

from pyisstrack._constants import BASEMAP_LAYER_ID, DEFAULT_ZOOM, MARKER_LAYER_ID
from pyisstrack.models.basemap import BaseMap, MarkerIcon

_logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("iss_map.html")


def icon_data_url(url: str) -> str:
    """Inline a local SVG icon as a data URL; anything else is returned unchanged."""
    path = Path(url)
    if path.suffix.lower() != ".svg" or not path.is_file():
        return url
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


class FoliumMapView:
    """Renders marker, camera and base tiles to an HTML file.

    Parameters
    ----------
    output : Path
        HTML file to (over)write.
    title : str
        Page title.
    refresh_seconds : float or None
        Browser auto-refresh period; ``None`` disables the reload tag.
    auto_save : bool
        Write the page after every command. When ``False`` call
        :meth:`save` yourself.
    """

    def __init__(
        self,
        output: Path = DEFAULT_OUTPUT,
        *,
        title: str = "Where is the ISS?",
        provider: str = BaseMap.VECTOR.provider,
        refresh_seconds: float | None = 2.0,
        auto_save: bool = True,
    ) -> None:
        self._output = Path(output)
        self._title = title
        self._refresh_seconds = refresh_seconds
        self._auto_save = auto_save
        self.provider = provider
        self.center: tuple[float, float] = (0.0, 0.0)
        self.zoom = DEFAULT_ZOOM
        self.marker: tuple[float, float] | None = None
        self.icon: MarkerIcon | None = None

    @property
    def output(self) -> Path:
        return self._output

    # ------------------------------------------------------------------
    # MapView
    # ------------------------------------------------------------------

    def move_marker(self, latitude: float, longitude: float, icon: MarkerIcon) -> None:
        self.marker = (latitude, longitude)
        self.icon = icon
        self._changed()

    def set_view(self, latitude: float, longitude: float, zoom: int) -> None:
        self.center = (latitude, longitude)
        self.zoom = zoom
        self._changed()

    def set_zoom(self, zoom: int) -> None:
        self.zoom = zoom
        self._changed()

    def replace_tile_layer(self, provider: str) -> None:
        self.provider = provider
        self._changed()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def build(self) -> folium.Map:
        """Build the folium map for the current view state."""
        fmap = folium.Map(location=list(self.center), zoom_start=self.zoom, tiles=None)
        folium.TileLayer(self.provider, name=BASEMAP_LAYER_ID).add_to(fmap)

        if self.marker is not None:
            icon = None
            if self.icon is not None:
                width, height = round(self.icon.width), round(self.icon.height)
                icon = folium.DivIcon(
                    html=f'<img src="{icon_data_url(self.icon.url)}" width="{width}" height="{height}">',
                    icon_size=(width, height),
                    icon_anchor=(round(self.icon.anchor_x), round(self.icon.anchor_y)),
                    class_name=MARKER_LAYER_ID,
                )
            folium.Marker(location=list(self.marker), icon=icon, tooltip=MARKER_LAYER_ID.upper()).add_to(fmap)

        MiniMap(toggle_display=True, position="topright").add_to(fmap)

        root = fmap.get_root()
        root.header.add_child(folium.Element(f"<title>{self._title}</title>"))
        if self._refresh_seconds is not None:
            root.header.add_child(
                folium.Element(f'<meta http-equiv="refresh" content="{self._refresh_seconds:g}">')
            )
        return fmap

    def save(self) -> Path:
        self._output.parent.mkdir(parents=True, exist_ok=True)
        self.build().save(str(self._output))
        _logger.debug("Map written to %s", self._output)
        return self._output

    def _changed(self) -> None:
        if self._auto_save:
            self.save()
