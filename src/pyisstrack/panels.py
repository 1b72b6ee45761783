"""Read-only text panels derived from the latest position."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from pyisstrack.models.position import Position
from pyisstrack.state.events import PositionChanged
from pyisstrack.state.store import PositionStore

PLACEHOLDER = "--"


class PanelValues(BaseModel):
    """Formatted panel texts."""

    model_config = ConfigDict(frozen=True)

    latitude: str = PLACEHOLDER
    longitude: str = PLACEHOLDER
    altitude: str = PLACEHOLDER
    velocity: str = PLACEHOLDER
    visibility: str = PLACEHOLDER
    stale: bool = False


def _comma(value: float, suffix: str) -> str:
    return f"{value:,.3f}{suffix}"


def render_panels(position: Position | None, *, stale: bool = False) -> PanelValues:
    """Format *position* for display; placeholders before the first fix."""
    if position is None:
        return PanelValues(stale=stale)
    return PanelValues(
        latitude=str(position.latitude),
        longitude=str(position.longitude),
        altitude=_comma(position.altitude_km, " km"),
        velocity=_comma(position.velocity_kmh, " km/h"),
        visibility=position.visibility.value,
        stale=stale,
    )


class DisplayPanels:
    """Re-renders on every store change.

    :attr:`values` is always derived from the store, so a failing feed keeps
    showing the last good values. Call :meth:`refresh` after recording a
    fetch outcome so the stale flag reaches ``on_render`` as well.
    """

    def __init__(
        self,
        store: PositionStore,
        *,
        on_render: Callable[[PanelValues], None] | None = None,
    ) -> None:
        self._store = store
        self._on_render = on_render
        self._unsubscribe: Callable[[], None] | None = None
        self._rendered: PanelValues | None = None

    @property
    def values(self) -> PanelValues:
        return render_panels(self._store.current(), stale=self._store.stale)

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_change)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def refresh(self) -> PanelValues:
        """Push the current values to ``on_render`` if they changed since the last push."""
        values = self.values
        if values != self._rendered:
            self._rendered = values
            if self._on_render is not None:
                self._on_render(values)
        return values

    def _on_change(self, event: PositionChanged) -> None:
        self.refresh()
