"""pyisstrack - Async satellite tracker with a feedback-free map view."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyisstrack")
except PackageNotFoundError:
    __version__ = "0+local"
from pyisstrack.client import FeedClient
from pyisstrack.config import TrackerConfig
from pyisstrack.exceptions import (
    FeedMalformedError,
    FeedUnreachableError,
    FetchError,
    FetchErrorKind,
    TrackerConfigError,
    TrackerError,
)
from pyisstrack.models import (
    BaseMap,
    CameraIntent,
    CameraMode,
    MarkerIcon,
    Position,
    Visibility,
)
from pyisstrack.panels import DisplayPanels, PanelValues, render_panels
from pyisstrack.poller import Poller
from pyisstrack.session import TrackerSession
from pyisstrack.state.store import PositionStore
from pyisstrack.view import (
    BaseMapSelected,
    CentreToggled,
    EventSource,
    MapView,
    ViewController,
    ZoomControlChanged,
    ZoomGesture,
)

__all__ = [
    "__version__",
    "BaseMap",
    "BaseMapSelected",
    "CameraIntent",
    "CameraMode",
    "CentreToggled",
    "DisplayPanels",
    "EventSource",
    "FeedClient",
    "FeedMalformedError",
    "FeedUnreachableError",
    "FetchError",
    "FetchErrorKind",
    "MapView",
    "MarkerIcon",
    "PanelValues",
    "Poller",
    "Position",
    "PositionStore",
    "TrackerConfig",
    "TrackerConfigError",
    "TrackerError",
    "TrackerSession",
    "ViewController",
    "Visibility",
    "ZoomControlChanged",
    "ZoomGesture",
    "render_panels",
]
