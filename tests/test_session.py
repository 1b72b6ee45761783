from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from pyisstrack.config import TrackerConfig
from pyisstrack.exceptions import (
    FeedMalformedError,
    FeedUnreachableError,
    TrackerConfigError,
    TrackerError,
)
from pyisstrack.models.basemap import BaseMap, MarkerIcon, icon_for
from pyisstrack.models.camera import CameraMode
from pyisstrack.models.position import Position
from pyisstrack.panels import PanelValues
from pyisstrack.session import TrackerSession
from pyisstrack.view.events import BaseMapSelected, CentreToggled

_T0 = datetime(2026, 1, 1, tzinfo=UTC)


class _RecordingView:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def move_marker(self, latitude: float, longitude: float, icon: MarkerIcon) -> None:
        self.calls.append(("move_marker", latitude, longitude))

    def set_view(self, latitude: float, longitude: float, zoom: int) -> None:
        self.calls.append(("set_view", latitude, longitude, zoom))

    def set_zoom(self, zoom: int) -> None:
        self.calls.append(("set_zoom", zoom))

    def replace_tile_layer(self, provider: str) -> None:
        self.calls.append(("replace_tile_layer", provider))


class _ScriptedFeed:
    """Plays back outcomes in order, then repeats the last one."""

    def __init__(self, outcomes: list[Position | Exception]) -> None:
        self._outcomes = list(outcomes)
        self.calls = 0

    async def fetch_position(self) -> Position:
        index = min(self.calls, len(self._outcomes) - 1)
        self.calls += 1
        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class _BlockingFeed:
    def __init__(self, position: Position) -> None:
        self._position = position
        self.release = asyncio.Event()

    async def fetch_position(self) -> Position:
        await self.release.wait()
        return self._position


def _position(seconds: float = 0.0, lat: float = 51.5, lng: float = -0.1) -> Position:
    return Position.model_validate(
        {
            "latitude": lat,
            "longitude": lng,
            "altitude": 408.0,
            "velocity": 27600.0,
            "visibility": "daylight",
            "timestamp": (_T0 + timedelta(seconds=seconds)).timestamp(),
        }
    )


def _config(**overrides: Any) -> TrackerConfig:
    return TrackerConfig(poll_interval=0.01, **overrides)


async def _wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.005)


def test_invalid_config_fails_before_polling() -> None:
    with pytest.raises(TrackerConfigError):
        TrackerSession(TrackerConfig(feed_url="iss.local/feed"), _RecordingView())


def test_initial_state_follows_config() -> None:
    session = TrackerSession(
        _config(initial_zoom=9, initial_base_map=BaseMap.SATELLITE, follow=False),
        _RecordingView(),
        feed=_ScriptedFeed([_position()]),
    )
    assert session.controller.mode == CameraMode.FREE
    assert session.controller.zoom == 9
    assert session.controller.base_map == BaseMap.SATELLITE
    assert not session.alive


@pytest.mark.asyncio
async def test_first_position_moves_marker_then_recentres() -> None:
    view = _RecordingView()
    feed = _ScriptedFeed([_position(lat=51.5, lng=-0.1)])

    async with TrackerSession(_config(), view, feed=feed) as session:
        await _wait_for(lambda: session.store.current() is not None)

    assert view.calls == [
        ("replace_tile_layer", "OpenStreetMap"),
        ("move_marker", 51.5, -0.1),
        ("set_view", 51.5, -0.1, 4),
    ]


@pytest.mark.asyncio
async def test_consecutive_failures_keep_last_position() -> None:
    view = _RecordingView()
    good = _position()
    feed = _ScriptedFeed([good, FeedUnreachableError("down"), FeedMalformedError("garbage")])
    rendered: list[PanelValues] = []

    async with TrackerSession(_config(), view, feed=feed, on_panels=rendered.append) as session:
        await _wait_for(lambda: session.store.consecutive_failures >= 2)
        commands_after_failures = list(view.calls)

        assert session.store.current() == good
        assert session.store.stale
        panels = session.panels.values
        assert panels.latitude == "51.5"
        assert panels.stale is True

    assert commands_after_failures == [
        ("replace_tile_layer", "OpenStreetMap"),
        ("move_marker", 51.5, -0.1),
        ("set_view", 51.5, -0.1, 4),
    ]
    assert [values.stale for values in rendered] == [False, True]
    assert rendered[1].latitude == "51.5"


@pytest.mark.asyncio
async def test_user_events_are_forwarded() -> None:
    view = _RecordingView()
    feed = _ScriptedFeed([_position(lat=1.0, lng=2.0)])

    async with TrackerSession(_config(), view, feed=feed) as session:
        await _wait_for(lambda: session.store.current() is not None)
        view.calls.clear()

        session.handle(CentreToggled(enabled=False))
        commands = session.handle(BaseMapSelected(base_map=BaseMap.SATELLITE))

    assert [type(c).__name__ for c in commands] == ["ReplaceTileLayer", "MoveMarker"]
    assert view.calls == [
        ("replace_tile_layer", "Esri.WorldImagery"),
        ("move_marker", 1.0, 2.0),
    ]
    assert session.controller.icon == icon_for(BaseMap.SATELLITE)


@pytest.mark.asyncio
async def test_late_result_after_stop_is_dropped() -> None:
    view = _RecordingView()
    feed = _BlockingFeed(_position())
    session = TrackerSession(_config(), view, feed=feed)

    await session.start()
    await _wait_for(lambda: session.poller is not None and session.poller.in_flight is not None)
    stopping = asyncio.create_task(session.stop())
    await asyncio.sleep(0)
    feed.release.set()
    await stopping

    assert session.store.current() is None
    assert view.calls == [("replace_tile_layer", "OpenStreetMap")]
    assert not session.alive


@pytest.mark.asyncio
async def test_start_twice_rejected() -> None:
    session = TrackerSession(_config(), _RecordingView(), feed=_ScriptedFeed([_position()]))
    await session.start()
    try:
        with pytest.raises(TrackerError):
            await session.start()
    finally:
        await session.stop()


@pytest.mark.asyncio
async def test_panels_render_stale_flag_until_feed_recovers() -> None:
    good = _position()
    feed = _ScriptedFeed([good, FeedUnreachableError("down"), good])
    rendered: list[PanelValues] = []

    async with TrackerSession(_config(), _RecordingView(), feed=feed, on_panels=rendered.append) as session:
        await _wait_for(lambda: feed.calls >= 4)
        assert not session.store.stale

    assert [values.stale for values in rendered] == [False, True, False]
    assert {values.latitude for values in rendered} == {"51.5"}


@pytest.mark.asyncio
async def test_stop_lets_owned_client_finish_pending_request() -> None:
    started = asyncio.Event()
    release = asyncio.Event()
    completed: list[bool] = []

    async def handler(request: web.Request) -> web.Response:
        started.set()
        await release.wait()
        completed.append(True)
        return web.json_response(
            {
                "latitude": 51.5,
                "longitude": -0.1,
                "altitude": 408.0,
                "velocity": 27600.0,
                "visibility": "daylight",
                "timestamp": 1700000000,
            }
        )

    app = web.Application()
    app.router.add_get("/v1/satellites/25544", handler)

    async with TestServer(app) as server:
        config = _config(feed_url=str(server.make_url("/v1/satellites/25544")))
        session = TrackerSession(config, _RecordingView())
        await session.start()
        await asyncio.wait_for(started.wait(), timeout=2.0)

        stopping = asyncio.create_task(session.stop())
        await asyncio.sleep(0)
        release.set()
        await stopping

    assert completed == [True]
    assert session.store.current() is None
    assert session.store.consecutive_failures == 0
