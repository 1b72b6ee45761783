"""HTTP transport for the position feed."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pyisstrack._constants import USER_AGENT
from pyisstrack.exceptions import FeedMalformedError, FeedUnreachableError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by :class:`~pyisstrack.client.FeedClient`.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> dict[str, Any]:
        ...


class HttpTransport:
    """Plain JSON-over-HTTP GET transport."""

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float | None = None,
    ) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout is not None else None

    async def get_json(self, url: str) -> dict[str, Any]:
        """GET *url* and return the decoded JSON object.

        Raises
        ------
        FeedUnreachableError
            Connection failure, timeout or non-200 status.
        FeedMalformedError
            The body is not a JSON object.
        """
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", url)

        try:
            request_kwargs: dict[str, Any] = {"headers": headers}
            if self._timeout is not None:
                request_kwargs["timeout"] = self._timeout
            async with self._http.get(url, **request_kwargs) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise FeedUnreachableError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except FeedUnreachableError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise FeedUnreachableError(
                f"Request to {url} failed: {exc!r}",
                endpoint=url,
            ) from exc

        try:
            body: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FeedMalformedError(
                f"Invalid JSON from {url}: {text[:200]}",
                endpoint=url,
            ) from exc

        if not isinstance(body, dict):
            raise FeedMalformedError(
                f"Expected a JSON object from {url}, got {type(body).__name__}",
                endpoint=url,
            )
        return body
