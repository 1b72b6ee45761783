"""Tracker configuration for pyisstrack."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from pyisstrack._constants import DEFAULT_ZOOM, FEED_URL, MAX_ZOOM, MIN_ZOOM, POLL_INTERVAL
from pyisstrack.exceptions import TrackerConfigError
from pyisstrack.models.basemap import BaseMap


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class TrackerConfig:
    """Session configuration.

    Parameters
    ----------
    feed_url : str
        Position feed endpoint. Defaults to the "Where is the ISS?" API for
        NORAD id 25544.
    poll_interval : float
        Seconds between poll ticks.
    request_timeout : float or None
        Total per-request timeout in seconds. ``None`` keeps the aiohttp
        default.
    initial_zoom : int
        Camera zoom at session start (1-18).
    initial_base_map : BaseMap
        Base map selected at session start.
    follow : bool
        Whether the camera starts in following mode.
    map_output : Path or None
        Where :class:`~pyisstrack.view.folium_view.FoliumMapView` writes its
        HTML page, when used.
    """

    feed_url: str = FEED_URL
    poll_interval: float = POLL_INTERVAL
    request_timeout: float | None = None
    initial_zoom: int = DEFAULT_ZOOM
    initial_base_map: BaseMap = BaseMap.VECTOR
    follow: bool = True
    map_output: Path | None = None

    def validate(self) -> None:
        """Raise :class:`TrackerConfigError` if the configuration is unusable."""
        parts = urlsplit(self.feed_url)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise TrackerConfigError(f"feed_url must be an absolute http(s) URL, got {self.feed_url!r}")
        if self.poll_interval <= 0:
            raise TrackerConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise TrackerConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if not MIN_ZOOM <= self.initial_zoom <= MAX_ZOOM:
            raise TrackerConfigError(
                f"initial_zoom must be between {MIN_ZOOM} and {MAX_ZOOM}, got {self.initial_zoom}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> TrackerConfig:
        """Create configuration from environment variables.

        Reads optional ``ISS_*`` variables. Explicit keyword arguments
        override environment values. Unparseable values raise
        :class:`TrackerConfigError`.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = env.get("ISS_FEED_URL")
        if url is not None:
            config_kwargs["feed_url"] = url.strip()

        try:
            interval_env = env.get("ISS_POLL_INTERVAL")
            if interval_env is not None:
                config_kwargs["poll_interval"] = float(interval_env)

            timeout_env = env.get("ISS_REQUEST_TIMEOUT")
            if timeout_env is not None:
                config_kwargs["request_timeout"] = float(timeout_env)

            zoom_env = env.get("ISS_INITIAL_ZOOM")
            if zoom_env is not None:
                config_kwargs["initial_zoom"] = int(zoom_env)

            base_map_env = env.get("ISS_BASE_MAP")
            if base_map_env is not None:
                config_kwargs["initial_base_map"] = BaseMap(base_map_env.strip().lower())
        except ValueError as exc:
            raise TrackerConfigError(f"Invalid ISS_* environment value: {exc}") from exc

        if "follow" not in overrides:
            config_kwargs["follow"] = _env_bool(env.get("ISS_FOLLOW"), True)

        output_env = env.get("ISS_MAP_OUTPUT")
        if output_env:
            config_kwargs["map_output"] = Path(output_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
