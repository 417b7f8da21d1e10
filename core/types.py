from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Body(Enum):
    SUN = "sun"
    MOON = "moon"


@dataclass(frozen=True, slots=True)
class GeoCoordinate:
    # decimal degrees, positive = North / East
    lat_deg: float
    lon_deg: float


@dataclass(frozen=True, slots=True)
class CelestialPosition:
    # radians; azimuth measured from South, positive towards West
    azimuth: float
    altitude: float


@dataclass(frozen=True, slots=True)
class ScreenSize:
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class SpritePlacement:
    """Projected sprite: center pixel plus the top-left corner used for blitting."""
    center_x: int
    center_y: int
    diameter: int

    @property
    def x(self) -> int:
        return self.center_x - self.diameter // 2

    @property
    def y(self) -> int:
        return self.center_y - self.diameter // 2


@dataclass(frozen=True, slots=True)
class SkyFrame:
    sun: SpritePlacement
    moon: SpritePlacement
    horizon_y: int
    you: tuple[int, int]
    sun_position: CelestialPosition
    moon_position: CelestialPosition
