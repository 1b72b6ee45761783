"""Fixed-cadence feed poller."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from pyisstrack._constants import POLL_INTERVAL
from pyisstrack.exceptions import FeedMalformedError, FetchError
from pyisstrack.models.position import Position

_logger = logging.getLogger(__name__)

PollResult = Position | FetchError
ResultHandler = Callable[[PollResult], None]


class PositionFeed(Protocol):
    async def fetch_position(self) -> Position:
        ...


class Poller:
    """Drives a :class:`PositionFeed` on a fixed period.

    At most one fetch is in flight. A tick that fires while the previous
    fetch is still pending is skipped rather than queued.

    Usage::

        poller = Poller(feed, interval=1.1)
        poller.start(handle_result)
        ...
        poller.stop()
    """

    def __init__(self, feed: PositionFeed, *, interval: float = POLL_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._feed = feed
        self._interval = interval
        self._on_result: ResultHandler | None = None
        self._running = False
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: asyncio.Task[None] | None = None
        self.ticks = 0
        self.skipped_ticks = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def in_flight(self) -> asyncio.Task[None] | None:
        """The pending fetch task, if any."""
        task = self._in_flight
        if task is None or task.done():
            return None
        return task

    def start(self, on_result: ResultHandler) -> None:
        """Start polling; must be called from a running event loop."""
        if self._running:
            raise RuntimeError("Poller already started")
        self._on_result = on_result
        self._running = True
        self._timer = asyncio.get_running_loop().create_task(self._run(), name="pyisstrack-poller")

    def stop(self) -> None:
        """Cancel the timer.

        A fetch that is still pending is left to complete; its result is
        discarded.
        """
        self._running = False
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()

    async def wait_idle(self, timeout: float | None = None) -> bool:
        """Wait up to *timeout* seconds for a pending fetch to settle.

        Returns ``True`` when nothing is in flight anymore.
        """
        task = self.in_flight
        if task is None:
            return True
        done, _ = await asyncio.wait({task}, timeout=timeout)
        return bool(done)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while self._running:
            self._tick()
            next_tick += self._interval
            # Keep a fixed cadence; if we fell behind, restart from now.
            delay = next_tick - loop.time()
            if delay < 0:
                next_tick = loop.time()
                delay = 0
            await asyncio.sleep(delay)

    def _tick(self) -> None:
        self.ticks += 1
        if self.in_flight is not None:
            self.skipped_ticks += 1
            _logger.debug("Fetch still pending; skipping tick %d", self.ticks)
            return
        self._in_flight = asyncio.get_running_loop().create_task(self._fetch_once())

    async def _fetch_once(self) -> None:
        result: PollResult
        try:
            result = await self._feed.fetch_position()
        except FetchError as exc:
            result = exc
        except Exception as exc:
            _logger.exception("Unexpected error from position feed")
            error = FeedMalformedError(f"Unexpected feed error: {exc!r}")
            error.__cause__ = exc
            result = error

        if not self._running:
            _logger.debug("Poller stopped; discarding late result %r", result)
            return

        handler = self._on_result
        if handler is None:
            return
        try:
            handler(result)
        except Exception:
            _logger.exception("Poll result handler failed")
