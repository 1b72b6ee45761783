"""In-memory store for the latest known position.

This is the only component allowed to hold the tracked position. The
session's poll handler is its single writer; the view controller and the
display panels read it through change notifications.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pyisstrack.exceptions import FetchError
from pyisstrack.models.position import Position
from pyisstrack.state.events import PositionChanged
from pyisstrack.state.policy import should_accept_update

_logger = logging.getLogger(__name__)

Subscriber = Callable[[PositionChanged], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PositionStore:
    """Latest position plus the outcome of the most recent fetch.

    Updates are monotonic in feed timestamp order: a late response carrying
    an older fix never overwrites a newer one.

    The store assumes the single-threaded asyncio model of the session, so
    no lock guards the swap. Subscribers run after the swap.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._latest: Position | None = None
        self._last_fetch_error: FetchError | None = None
        self._consecutive_failures = 0
        self._subscribers: list[Subscriber] = []

    def current(self) -> Position | None:
        return self._latest

    @property
    def last_fetch_error(self) -> FetchError | None:
        return self._last_fetch_error

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    @property
    def stale(self) -> bool:
        """Whether the most recent fetch failed (the stored value is kept)."""
        return self._last_fetch_error is not None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for change notifications; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def update(self, position: Position) -> bool:
        """Apply a freshly fetched position.

        Returns ``True`` when the stored value changed and subscribers were
        notified.
        """
        # A successful fetch clears the error flag even if the fix is old.
        self._last_fetch_error = None
        self._consecutive_failures = 0

        previous = self._latest
        if not should_accept_update(
            cached_timestamp=previous.timestamp if previous is not None else None,
            incoming_timestamp=position.timestamp,
        ):
            _logger.debug(
                "Dropping out-of-order position ts=%s (have ts=%s)",
                position.timestamp.isoformat(),
                previous.timestamp.isoformat() if previous is not None else None,
            )
            return False

        if position.same_fix(previous):
            return False

        self._latest = position
        self._notify(PositionChanged(current=position, previous=previous, observed_at=self._clock()))
        return True

    def record_error(self, error: FetchError) -> None:
        """Record a failed fetch; the stored position is retained."""
        self._last_fetch_error = error
        self._consecutive_failures += 1

    def _notify(self, event: PositionChanged) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                _logger.warning("Position subscriber %r failed", callback, exc_info=True)
