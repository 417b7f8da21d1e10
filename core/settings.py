"""
Settings — window, timing and starting-scenario constants.

Presets bundle an observer location with a start time. The default is
Grand Teton NP at the predicted totality of the 2017-08-21 eclipse.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from core.types import GeoCoordinate, ScreenSize

# Window settings
WIDTH, HEIGHT = 1024, 746
SCREEN = ScreenSize(WIDTH, HEIGHT)
TITLE = "Eclipse"

# Frame rates: full speed while stepping, throttled (~250 ms) when idle
FPS = 60
IDLE_FPS = 4

# Sprite diameters (px)
SUN_D = 50
MOON_D = 49
YOU_D = SUN_D // 4
# Observer marker sits this far above the horizon line
YOU_OFFSET = 10


@dataclass(frozen=True)
class Preset:
    name: str
    geo: GeoCoordinate
    start: datetime
    description: str = ""


DENVER = ZoneInfo("America/Denver")

PRESETS: dict[str, Preset] = {
    p.name: p for p in (
        Preset("grand_teton_2017",
               GeoCoordinate(43.833333, -110.700833),
               datetime(2017, 8, 21, 11, 36, tzinfo=DENVER),
               "Grand Teton NP, 2017 eclipse totality (17:36 UTC)"),
        Preset("salt_lake_city_2017",
               GeoCoordinate(40.768860, -111.893273),
               datetime(2017, 8, 21, 11, 36, tzinfo=DENVER),
               "Salt Lake City, 2017 eclipse (partial)"),
        Preset("grand_teton_1978",
               GeoCoordinate(43.833333, -110.700833),
               datetime(1978, 4, 7, 6, 28, tzinfo=DENVER),
               "Grand Teton NP, 1978 eclipse near totality"),
    )
}
DEFAULT_PRESET = "grand_teton_2017"
