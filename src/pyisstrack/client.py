"""Async client for the satellite position feed."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from pyisstrack._transport import HttpTransport, Transport
from pyisstrack.config import TrackerConfig
from pyisstrack.exceptions import FeedMalformedError, TrackerError
from pyisstrack.models.position import Position

_logger = logging.getLogger(__name__)


def parse_position(payload: dict[str, Any], *, endpoint: str = "") -> Position:
    """Decode a feed payload into a :class:`Position`.

    Raises :class:`FeedMalformedError` when a required field is missing,
    non-numeric or out of range.
    """
    try:
        return Position.model_validate(payload)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
        raise FeedMalformedError(
            f"Malformed position from {endpoint or 'feed'}: bad fields {fields}",
            endpoint=endpoint,
        ) from exc


class FeedClient:
    """Fetches the current position with one request per call.

    There is no retry logic here; the poller simply tries again on its next
    tick.

    Usage::

        async with FeedClient(config) as feed:
            position = await feed.fetch_position()
    """

    def __init__(
        self,
        config: TrackerConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FeedClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise TrackerError("Client not initialized. Use 'async with FeedClient(...) as feed:'")
        return self._transport

    async def fetch_position(self) -> Position:
        """Perform one request/response cycle against the feed.

        Raises
        ------
        FeedUnreachableError
            Network-level failure.
        FeedMalformedError
            The body could not be decoded into a position.
        """
        transport = self._require_transport()
        url = self._config.feed_url
        payload = await transport.get_json(url)
        position = parse_position(payload, endpoint=url)
        _logger.debug(
            "Position lat=%.4f lng=%.4f ts=%s",
            position.latitude,
            position.longitude,
            position.timestamp.isoformat(),
        )
        return position
