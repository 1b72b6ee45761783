"""View-state reconciliation.

The controller owns the camera intent and the base-map selection. It turns
store notifications and user events into :mod:`~pyisstrack.view.commands`
for the map, and keeps its own commands from coming back as user input.

Transitions
-----------
==========================  ===========================================
input                        commands (in order)
==========================  ===========================================
position, following          MoveMarker, SetView(zoom)
position, free               MoveMarker
centre on                    SetView(latest, zoom)
centre off                   none
zoom gesture, free           none (intent zoom + slider follow the map)
zoom gesture, following      none (ignored)
zoom control, following      SetView(latest, new zoom)
zoom control, free           SetZoom(new zoom)
base map                     ReplaceTileLayer, MoveMarker(new icon)
==========================  ===========================================

Until the store holds a position no marker or camera command is issued;
state changes still apply and take effect with the first fix.

Events are told apart from echoes by their source tag only. Anything tagged
``COMMAND``, and anything delivered re-entrantly while the controller is
issuing commands, is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyisstrack._constants import clamp_zoom
from pyisstrack.models.basemap import BaseMap, MarkerIcon, icon_for
from pyisstrack.models.camera import CameraIntent, CameraMode
from pyisstrack.models.position import Position
from pyisstrack.state.events import PositionChanged
from pyisstrack.state.store import PositionStore
from pyisstrack.view.commands import MapCommand, MoveMarker, ReplaceTileLayer, SetView, SetZoom
from pyisstrack.view.events import (
    BaseMapSelected,
    CentreToggled,
    EventSource,
    ViewEvent,
    ZoomControlChanged,
    ZoomGesture,
)
from pyisstrack.view.map_view import MapView

_logger = logging.getLogger(__name__)


class ViewController:
    """Reconciles the latest position and user input into map commands.

    Parameters
    ----------
    view : MapView
        Command sink.
    store : PositionStore
        Source of the latest position. Call :meth:`attach` to subscribe.
    intent : CameraIntent, optional
        Initial camera intent (following, zoom 4).
    base_map : BaseMap
        Initial base map.
    on_zoom_synced : callable, optional
        Called with the new zoom when a free-mode gesture changes it, so a
        zoom slider can mirror the map.
    """

    def __init__(
        self,
        view: MapView,
        store: PositionStore,
        *,
        intent: CameraIntent | None = None,
        base_map: BaseMap = BaseMap.VECTOR,
        on_zoom_synced: Callable[[int], None] | None = None,
    ) -> None:
        self._view = view
        self._store = store
        self._intent = intent if intent is not None else CameraIntent()
        self._base_map = base_map
        self._on_zoom_synced = on_zoom_synced
        self._issuing = False
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def intent(self) -> CameraIntent:
        return self._intent

    @property
    def mode(self) -> CameraMode:
        return self._intent.mode

    @property
    def zoom(self) -> int:
        return self._intent.zoom

    @property
    def base_map(self) -> BaseMap:
        return self._base_map

    @property
    def icon(self) -> MarkerIcon:
        return icon_for(self._base_map)

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self.on_position_changed)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def sync(self) -> list[MapCommand]:
        """Bring the map in line with the current state (tiles, then marker and camera)."""
        commands: list[MapCommand] = [ReplaceTileLayer(provider=self._base_map.provider)]
        position = self._store.current()
        if position is not None:
            commands.append(self._marker_at(position))
            if self._intent.following:
                commands.append(self._view_at(position))
        return self._issue(commands)

    def on_position_changed(self, event: PositionChanged) -> list[MapCommand]:
        position = event.current
        commands: list[MapCommand] = [self._marker_at(position)]
        if self._intent.following:
            commands.append(self._view_at(position))
        return self._issue(commands)

    def handle(self, event: ViewEvent) -> list[MapCommand]:
        """Apply a user event and return the commands it produced."""
        if event.source == EventSource.COMMAND:
            _logger.debug("Ignoring echo of own command: %r", event)
            return []
        if self._issuing:
            _logger.debug("Ignoring event raised while issuing commands: %r", event)
            return []

        if isinstance(event, CentreToggled):
            return self._centre_toggled(event.enabled)
        if isinstance(event, ZoomGesture):
            return self._zoom_gesture(event.zoom)
        if isinstance(event, ZoomControlChanged):
            return self._zoom_control_changed(event.zoom)
        if isinstance(event, BaseMapSelected):
            return self._base_map_selected(event.base_map)
        raise TypeError(f"unsupported view event {event!r}")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _centre_toggled(self, enabled: bool) -> list[MapCommand]:
        if not enabled:
            self._intent = self._intent.with_mode(CameraMode.FREE)
            return []

        self._intent = self._intent.with_mode(CameraMode.FOLLOWING)
        position = self._store.current()
        if position is None:
            return []
        return self._issue([self._view_at(position)])

    def _zoom_gesture(self, zoom: float) -> list[MapCommand]:
        if self._intent.following:
            # Camera belongs to the poll while following.
            _logger.debug("Ignoring zoom gesture %.2f while following", zoom)
            return []

        new_zoom = clamp_zoom(zoom)
        if new_zoom == self._intent.zoom:
            return []
        self._intent = self._intent.with_zoom(new_zoom)
        callback = self._on_zoom_synced
        if callback is not None:
            # The map already shows this zoom; only the slider follows.
            self._issuing = True
            try:
                callback(new_zoom)
            finally:
                self._issuing = False
        return []

    def _zoom_control_changed(self, zoom: int) -> list[MapCommand]:
        self._intent = self._intent.with_zoom(clamp_zoom(zoom))
        position = self._store.current()
        if position is None:
            return []
        if self._intent.following:
            return self._issue([self._view_at(position)])
        return self._issue([SetZoom(zoom=self._intent.zoom)])

    def _base_map_selected(self, base_map: BaseMap) -> list[MapCommand]:
        if base_map == self._base_map:
            return []
        self._base_map = base_map
        commands: list[MapCommand] = [ReplaceTileLayer(provider=base_map.provider)]
        position = self._store.current()
        if position is not None:
            commands.append(self._marker_at(position))
        return self._issue(commands)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _marker_at(self, position: Position) -> MoveMarker:
        return MoveMarker(latitude=position.latitude, longitude=position.longitude, icon=self.icon)

    def _view_at(self, position: Position) -> SetView:
        return SetView(latitude=position.latitude, longitude=position.longitude, zoom=self._intent.zoom)

    def _issue(self, commands: list[MapCommand]) -> list[MapCommand]:
        self._issuing = True
        try:
            for command in commands:
                command.apply(self._view)
        finally:
            self._issuing = False
        return commands
