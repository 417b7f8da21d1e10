"""Shared fixtures: headless SDL and a deterministic ephemeris."""

from __future__ import annotations

import math
import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from core.types import Body, CelestialPosition, GeoCoordinate  # noqa: E402
from ui.theme import Fonts  # noqa: E402
from universe.ephemeris import DayTimes  # noqa: E402

GRAND_TETON = GeoCoordinate(43.833333, -110.700833)


class FakeEphemeris:
    """Sun circles the sky once per UTC day, rising 06:00 and setting 18:00; Moon lags 30°."""

    moon_lag = math.radians(30.0)

    def __init__(self) -> None:
        self.calls = 0

    @staticmethod
    def _day_fraction(instant: datetime) -> float:
        utc = instant.astimezone(timezone.utc)
        midnight = utc.replace(hour=0, minute=0, second=0, microsecond=0)
        return (utc - midnight).total_seconds() / 86400.0

    def _pos(self, instant: datetime, lag: float) -> CelestialPosition:
        self.calls += 1
        frac = self._day_fraction(instant)
        az = math.remainder(2.0 * math.pi * frac - math.pi - lag, 2.0 * math.pi)
        alt = 0.8 * math.sin(2.0 * math.pi * (frac - 0.25) - lag)
        return CelestialPosition(azimuth=az, altitude=alt)

    def position_of(self, body: Body, instant: datetime, lat_deg: float, lon_deg: float) -> CelestialPosition:
        return self._pos(instant, 0.0 if body is Body.SUN else self.moon_lag)

    def sun_position(self, instant: datetime, lat_deg: float, lon_deg: float) -> CelestialPosition:
        return self.position_of(Body.SUN, instant, lat_deg, lon_deg)

    def moon_position(self, instant: datetime, lat_deg: float, lon_deg: float) -> CelestialPosition:
        return self.position_of(Body.MOON, instant, lat_deg, lon_deg)

    def day_times(self, instant: datetime, lat_deg: float, lon_deg: float) -> DayTimes:
        utc = instant.astimezone(timezone.utc)
        midnight = utc.replace(hour=0, minute=0, second=0, microsecond=0)
        return DayTimes(
            solar_noon=midnight + timedelta(hours=12),
            nadir=midnight,
            sunrise=midnight + timedelta(hours=6),
            sunset=midnight + timedelta(hours=18),
        )


@pytest.fixture(autouse=True)
def fresh_fonts():
    yield
    Fonts.release()


@pytest.fixture
def fake_ephemeris() -> FakeEphemeris:
    return FakeEphemeris()


@pytest.fixture
def grand_teton() -> GeoCoordinate:
    return GRAND_TETON
