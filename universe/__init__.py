"""
Universe module — Sun and Moon ephemeris.

Usage:
    from universe import Ephemeris
    eph = Ephemeris()
    sun = eph.sun_position(when, lat_deg, lon_deg)
    sunrise = eph.day_times(when, lat_deg, lon_deg).require("sunrise")
"""

from .ephemeris import DAY_EVENT_NAMES, DayTimes, Ephemeris

__all__ = [
    "DAY_EVENT_NAMES",
    "DayTimes",
    "Ephemeris",
]
