"""
Sky Projector — Sun/Moon positions → screen sprites and horizon line.

Pipeline per body:
    (azimuth, altitude)  ── sph2cart ──►  (x, y) in [-180, 180]
    (x, y)               ── map_range ─►  screen px, both axes inverted
    truncate → sprite center, minus d//2 → sprite top-left

The horizon is the Sun's projected Y at sunrise of the current day: it rises
and falls with the season, not with the Sun's current position.

No state, no caching: the same inputs always give the same frame.
"""

from __future__ import annotations
from datetime import datetime

from core.coords import CART_DOMAIN, map_range, sph2cart, to_pixel
from core.settings import MOON_D, SCREEN, SUN_D, YOU_OFFSET
from core.time_controller import SimulationState
from core.types import (
    CelestialPosition,
    GeoCoordinate,
    ScreenSize,
    SkyFrame,
    SpritePlacement,
)
from universe.ephemeris import Ephemeris


def project_x(pos: CelestialPosition, width: int, diameter: int) -> int:
    x, _ = sph2cart(pos.azimuth, pos.altitude)
    return to_pixel(map_range(CART_DOMAIN, (width - diameter // 2, diameter), x))


def project_y(pos: CelestialPosition, height: int, diameter: int) -> int:
    _, y = sph2cart(pos.azimuth, pos.altitude)
    return to_pixel(map_range(CART_DOMAIN, (height - diameter // 2, diameter), y))


def place_sprite(pos: CelestialPosition, screen: ScreenSize, diameter: int) -> SpritePlacement:
    return SpritePlacement(
        center_x=project_x(pos, screen.width, diameter),
        center_y=project_y(pos, screen.height, diameter),
        diameter=diameter,
    )


def horizon_y(instant: datetime, geo: GeoCoordinate, screen: ScreenSize,
              ephemeris: Ephemeris, sun_d: int = SUN_D) -> int:
    """Projected Y of the Sun at sunrise of the instant's day."""
    sunrise = ephemeris.day_times(instant, geo.lat_deg, geo.lon_deg).require("sunrise")
    pos = ephemeris.sun_position(sunrise, geo.lat_deg, geo.lon_deg)
    return project_y(pos, screen.height, sun_d)


def project(instant: datetime, geo: GeoCoordinate, ephemeris: Ephemeris,
            screen: ScreenSize = SCREEN,
            sun_d: int = SUN_D, moon_d: int = MOON_D,
            you_offset: int = YOU_OFFSET) -> SkyFrame:
    """
    Project Sun, Moon, horizon and observer marker for one instant.

    Args:
        instant: timezone-aware datetime
        geo: observer location
        ephemeris: anything exposing sun_position/moon_position/day_times
        screen: target surface size
        sun_d, moon_d: sprite diameters in px
        you_offset: height of the observer marker above the horizon

    Returns:
        SkyFrame with integer pixel placements
    """
    sun_pos = ephemeris.sun_position(instant, geo.lat_deg, geo.lon_deg)
    moon_pos = ephemeris.moon_position(instant, geo.lat_deg, geo.lon_deg)
    h_y = horizon_y(instant, geo, screen, ephemeris, sun_d)

    return SkyFrame(
        sun=place_sprite(sun_pos, screen, sun_d),
        moon=place_sprite(moon_pos, screen, moon_d),
        horizon_y=h_y,
        you=(screen.width // 2, h_y - you_offset),
        sun_position=sun_pos,
        moon_position=moon_pos,
    )


def project_state(state: SimulationState, ephemeris: Ephemeris,
                  screen: ScreenSize = SCREEN) -> SkyFrame:
    return project(state.clock, state.geo, ephemeris, screen)
