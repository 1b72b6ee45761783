"""Deterministic acceptance policy for incoming positions."""

from __future__ import annotations

from datetime import datetime


def should_accept_update(
    *,
    cached_timestamp: datetime | None,
    incoming_timestamp: datetime,
) -> bool:
    """Decide whether an incoming position may replace the cached one.

    Policy: accept unless the incoming fix is strictly older than the cached
    one. Equal timestamps are accepted; whether that counts as a change is
    decided by value comparison in the store.
    """
    if cached_timestamp is None:
        return True
    return incoming_timestamp >= cached_timestamp
