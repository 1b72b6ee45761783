"""Internal constants shared across the library."""

FEED_URL = "https://api.wheretheiss.at/v1/satellites/25544"
USER_AGENT = "pyisstrack (+https://wheretheiss.at/w/developer)"

#: Poll cadence in seconds ("just over once a second").
POLL_INTERVAL = 1.1

# ------------------------------------------------------------------
# Camera zoom range (Leaflet tile zoom levels)
# ------------------------------------------------------------------

MIN_ZOOM = 1
MAX_ZOOM = 18
DEFAULT_ZOOM = 4

#: Leaflet layer id of the single base tile layer.
BASEMAP_LAYER_ID = "basemap"
#: Leaflet layer id of the tracked object's marker.
MARKER_LAYER_ID = "iss"

# ------------------------------------------------------------------
# Marker icon geometry
# ------------------------------------------------------------------

ICON_HEIGHT_PX = 80.0
# Aspect ratio of the station artwork (30 x 18.9).
ICON_ASPECT = 30 / 18.9


def clamp_zoom(zoom: int | float) -> int:
    """Round *zoom* to an integer tile zoom within ``[MIN_ZOOM, MAX_ZOOM]``."""
    return max(MIN_ZOOM, min(MAX_ZOOM, int(round(zoom))))
