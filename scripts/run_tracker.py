#!/usr/bin/env python3
"""Run a tracking session that writes a self-refreshing Leaflet page.

Configuration comes from ``ISS_*`` environment variables (see
``pyisstrack.config.TrackerConfig.from_env``). The page is written to
``ISS_MAP_OUTPUT`` (default ``iss_map.html``) and panel values are logged at
INFO level. Stop with Ctrl+C.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyisstrack import PanelValues, TrackerConfig, TrackerConfigError, TrackerSession  # noqa: E402
from pyisstrack.view.folium_view import DEFAULT_OUTPUT, FoliumMapView  # noqa: E402

_logger = logging.getLogger("run_tracker")


def _log_panels(values: PanelValues) -> None:
    _logger.info(
        "lat=%s lng=%s alt=%s vel=%s vis=%s%s",
        values.latitude,
        values.longitude,
        values.altitude,
        values.velocity,
        values.visibility,
        " (stale)" if values.stale else "",
    )


async def _main() -> int:
    try:
        config = TrackerConfig.from_env()
        view = FoliumMapView(config.map_output or DEFAULT_OUTPUT)
        session = TrackerSession(config, view, on_panels=_log_panels)
    except TrackerConfigError as exc:
        _logger.error("Configuration error: %s", exc)
        return 2

    _logger.info("Writing map to %s", view.output.resolve())
    async with session:
        with contextlib.suppress(asyncio.CancelledError):
            await asyncio.Event().wait()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        raise SystemExit(asyncio.run(_main()))
    except KeyboardInterrupt:
        raise SystemExit(130) from None
