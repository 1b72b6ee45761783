"""Base-map choices and the marker icon derived from them."""

from __future__ import annotations

from enum import StrEnum
from importlib.resources import files

from pydantic import BaseModel, ConfigDict

from pyisstrack._constants import ICON_ASPECT, ICON_HEIGHT_PX


class BaseMap(StrEnum):
    """Selectable base maps.

    Each choice maps to a tile provider name (as understood by Leaflet
    provider plugins / ``xyzservices``) and to a marker icon variant that
    contrasts with the tiles.
    """

    VECTOR = "vector"
    SATELLITE = "satellite"

    @property
    def provider(self) -> str:
        return _PROVIDERS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_provider(cls, provider: str) -> BaseMap:
        for choice, name in _PROVIDERS.items():
            if name == provider:
                return choice
        raise ValueError(f"unknown tile provider {provider!r}")


_PROVIDERS: dict[BaseMap, str] = {
    BaseMap.VECTOR: "OpenStreetMap",
    BaseMap.SATELLITE: "Esri.WorldImagery",
}

# Dark artwork on light vector tiles, white artwork on satellite imagery.
_ICON_ASSETS: dict[BaseMap, str] = {
    BaseMap.VECTOR: "iss.svg",
    BaseMap.SATELLITE: "iss_white.svg",
}


class MarkerIcon(BaseModel):
    """Marker icon with its pixel size and anchor."""

    model_config = ConfigDict(frozen=True)

    url: str
    width: float
    height: float
    anchor_x: float
    anchor_y: float


def icon_asset_path(base_map: BaseMap) -> str:
    """Filesystem path of the bundled icon asset for *base_map*."""
    return str(files("pyisstrack").joinpath("assets", _ICON_ASSETS[base_map]))


def icon_for(base_map: BaseMap, *, height: float = ICON_HEIGHT_PX) -> MarkerIcon:
    """Derive the marker icon for *base_map*.

    The icon keeps the artwork's aspect ratio and is anchored at its visual
    centre, so the marker sits on the reported position.
    """
    width = height * ICON_ASPECT
    return MarkerIcon(
        url=icon_asset_path(base_map),
        width=width,
        height=height,
        anchor_x=width / 2,
        anchor_y=height / 2,
    )
