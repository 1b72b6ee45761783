from __future__ import annotations

from pathlib import Path

import pytest

from pyisstrack._constants import FEED_URL
from pyisstrack.config import TrackerConfig
from pyisstrack.exceptions import TrackerConfigError
from pyisstrack.models.basemap import BaseMap

_ENV_KEYS = (
    "ISS_FEED_URL",
    "ISS_POLL_INTERVAL",
    "ISS_REQUEST_TIMEOUT",
    "ISS_INITIAL_ZOOM",
    "ISS_BASE_MAP",
    "ISS_FOLLOW",
    "ISS_MAP_OUTPUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_are_valid() -> None:
    config = TrackerConfig()
    config.validate()
    assert config.feed_url == FEED_URL
    assert config.poll_interval == pytest.approx(1.1)
    assert config.initial_zoom == 4
    assert config.initial_base_map == BaseMap.VECTOR
    assert config.follow is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"feed_url": "ftp://example.com/feed"},
        {"feed_url": "not a url"},
        {"feed_url": "https://"},
        {"poll_interval": 0},
        {"request_timeout": -1.0},
        {"initial_zoom": 0},
        {"initial_zoom": 19},
    ],
)
def test_validate_rejects_bad_values(overrides: dict[str, object]) -> None:
    with pytest.raises(TrackerConfigError):
        TrackerConfig(**overrides).validate()  # type: ignore[arg-type]


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISS_FEED_URL", "http://localhost:8080/iss")
    monkeypatch.setenv("ISS_POLL_INTERVAL", "2.5")
    monkeypatch.setenv("ISS_REQUEST_TIMEOUT", "10")
    monkeypatch.setenv("ISS_INITIAL_ZOOM", "7")
    monkeypatch.setenv("ISS_BASE_MAP", "Satellite")
    monkeypatch.setenv("ISS_FOLLOW", "no")
    monkeypatch.setenv("ISS_MAP_OUTPUT", "out/map.html")

    config = TrackerConfig.from_env()

    assert config.feed_url == "http://localhost:8080/iss"
    assert config.poll_interval == 2.5
    assert config.request_timeout == 10.0
    assert config.initial_zoom == 7
    assert config.initial_base_map == BaseMap.SATELLITE
    assert config.follow is False
    assert config.map_output == Path("out/map.html")


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISS_INITIAL_ZOOM", "7")
    monkeypatch.setenv("ISS_FOLLOW", "0")

    config = TrackerConfig.from_env(initial_zoom=3, follow=True)

    assert config.initial_zoom == 3
    assert config.follow is True


@pytest.mark.parametrize(
    ("key", "value"),
    [("ISS_POLL_INTERVAL", "fast"), ("ISS_INITIAL_ZOOM", "4.5"), ("ISS_BASE_MAP", "terrain")],
)
def test_from_env_unparseable_value(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(TrackerConfigError):
        TrackerConfig.from_env()
