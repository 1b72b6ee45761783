"""Tracking session: owns the store, poller, controller and panels."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pyisstrack.client import FeedClient
from pyisstrack.config import TrackerConfig
from pyisstrack.exceptions import FetchError, TrackerError
from pyisstrack.models.camera import CameraIntent, CameraMode
from pyisstrack.panels import DisplayPanels, PanelValues
from pyisstrack.poller import Poller, PollResult, PositionFeed
from pyisstrack.state.store import PositionStore
from pyisstrack.view.commands import MapCommand
from pyisstrack.view.controller import ViewController
from pyisstrack.view.events import ViewEvent
from pyisstrack.view.map_view import MapView

_logger = logging.getLogger(__name__)

# Upper bound on waiting for an in-flight fetch when the session ends.
_STOP_GRACE_SECONDS = 5.0


class TrackerSession:
    """One tracking session, from startup to teardown.

    The configuration is validated on construction, so an unusable
    configuration fails before any polling starts.

    Usage::

        async with TrackerSession(TrackerConfig.from_env(), view) as session:
            session.handle(CentreToggled(enabled=False))
            ...

    Parameters
    ----------
    config : TrackerConfig
        Session configuration.
    view : MapView
        Map widget receiving commands.
    feed : PositionFeed, optional
        Position source. Defaults to a :class:`FeedClient` owned by the
        session.
    http_session : aiohttp.ClientSession, optional
        Shared HTTP session for the default feed client.
    on_zoom_synced : callable, optional
        Zoom slider sync, see :class:`ViewController`.
    on_panels : callable, optional
        Receives freshly rendered :class:`PanelValues`.
    """

    def __init__(
        self,
        config: TrackerConfig,
        view: MapView,
        *,
        feed: PositionFeed | None = None,
        http_session: aiohttp.ClientSession | None = None,
        on_zoom_synced: Callable[[int], None] | None = None,
        on_panels: Callable[[PanelValues], None] | None = None,
    ) -> None:
        config.validate()
        self._config = config
        self._feed = feed
        self._http_session = http_session
        self._owned_client: FeedClient | None = None
        self._alive = False

        self.store = PositionStore()
        self.controller = ViewController(
            view,
            self.store,
            intent=CameraIntent(
                mode=CameraMode.FOLLOWING if config.follow else CameraMode.FREE,
                zoom=config.initial_zoom,
            ),
            base_map=config.initial_base_map,
            on_zoom_synced=on_zoom_synced,
        )
        self.panels = DisplayPanels(self.store, on_render=on_panels)
        self._poller: Poller | None = None

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def poller(self) -> Poller | None:
        return self._poller

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TrackerSession:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        if self._alive:
            raise TrackerError("Session already started")

        feed = self._feed
        if feed is None:
            client = FeedClient(self._config, session=self._http_session)
            await client.__aenter__()
            self._owned_client = client
            feed = client

        self.controller.attach()
        self.panels.attach()
        self.controller.sync()

        self._alive = True
        self._poller = Poller(feed, interval=self._config.poll_interval)
        self._poller.start(self._on_result)
        _logger.debug("Session started: polling %s every %.2fs", self._config.feed_url, self._config.poll_interval)

    async def stop(self) -> None:
        """End the session; a fetch still in flight is discarded."""
        if not self._alive:
            return
        self._alive = False
        poller = self._poller
        if poller is not None:
            poller.stop()
        self.controller.detach()
        self.panels.detach()

        if poller is not None and not await poller.wait_idle(timeout=_STOP_GRACE_SECONDS):
            _logger.debug("Fetch still pending at shutdown; its result will be dropped")
        client = self._owned_client
        self._owned_client = None
        if client is not None:
            await client.close()
        _logger.debug("Session stopped")

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def handle(self, event: ViewEvent) -> list[MapCommand]:
        """Forward a user event to the view controller."""
        return self.controller.handle(event)

    def _on_result(self, result: PollResult) -> None:
        if not self._alive:
            _logger.debug("Session ended; dropping poll result")
            return

        if isinstance(result, FetchError):
            self.store.record_error(result)
            _logger.warning(
                "Feed fetch failed (%s, %d in a row): %s",
                result.kind,
                self.store.consecutive_failures,
                result,
            )
        else:
            self.store.update(result)
        self.panels.refresh()
