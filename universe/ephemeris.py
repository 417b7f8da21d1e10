"""
Ephemeris — apparent Sun and Moon positions for an observer on Earth.

Positions are computed from low-precision analytic series:
  - Sun:  geometric mean longitude + equation of center (~0.01°)
  - Moon: truncated lunar theory (Meeus ch. 47, main terms, ~0.05°)
          with diurnal parallax applied for the observer (topocentric)

Horizontal coordinates are returned in radians, azimuth measured from
South towards West (the convention the sky projector is calibrated on):
    az = 0    → due South
    az = +π/2 → West
    az = ±π   → North

Day times (sunrise, sunset, twilight…) come from astral, at fixed geometric
sun altitudes, for the local-mean-time date of the given instant: every
instant of that day resolves to the same events.

Usage:
    eph = Ephemeris()
    pos = eph.position_of(Body.SUN, when, lat_deg, lon_deg)
    times = eph.day_times(when, lat_deg, lon_deg)
    times.require("sunrise")
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, fields
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from astral import Observer
from astral.sun import SunDirection, noon, time_at_elevation

from core.astro_time import (
    centuries_since_j2000,
    datetime_to_julian_date,
    lst_deg,
    require_aware,
)
from core.coords import wrap_pi
from core.errors import EphemerisFailure
from core.types import Body, CelestialPosition

logger = logging.getLogger(__name__)

_OBLIQUITY_J2000 = 23.439291     # degrees
_EARTH_RADIUS_KM = 6378.14


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _normalize_deg(x: float) -> float:
    return x % 360.0


def _validate_geo(lat_deg: float, lon_deg: float) -> None:
    if not (math.isfinite(lat_deg) and -90.0 <= lat_deg <= 90.0):
        raise EphemerisFailure(f"latitude out of range: {lat_deg!r}")
    if not (math.isfinite(lon_deg) and -180.0 <= lon_deg <= 180.0):
        raise EphemerisFailure(f"longitude out of range: {lon_deg!r}")


def equatorial_to_altaz(ra_deg: float, dec_deg: float,
                        lat_deg: float, lon_deg: float,
                        jd: float) -> Tuple[float, float]:
    """
    RA/Dec (of date) → (altitude_deg, azimuth_deg) with azimuth N=0, E=90.
    """
    lha_r = math.radians(_normalize_deg(lst_deg(jd, lon_deg) - ra_deg))
    dec_r = math.radians(dec_deg)
    lat_r = math.radians(lat_deg)

    sin_alt = (math.sin(dec_r)*math.sin(lat_r)
               + math.cos(dec_r)*math.cos(lat_r)*math.cos(lha_r))
    alt = math.asin(max(-1.0, min(1.0, sin_alt)))

    # atan2 form stays well defined at the poles and at the zenith
    az = math.atan2(-math.cos(dec_r)*math.sin(lha_r),
                    math.sin(dec_r)*math.cos(lat_r)
                    - math.cos(dec_r)*math.sin(lat_r)*math.cos(lha_r))
    return math.degrees(alt), _normalize_deg(math.degrees(az))


def _to_celestial_position(alt_deg: float, az_north_deg: float) -> CelestialPosition:
    return CelestialPosition(
        azimuth=wrap_pi(math.radians(az_north_deg) - math.pi),
        altitude=math.radians(alt_deg),
    )


# ---------------------------------------------------------------------------
# Sun (VSOP87 low-precision, ~0.01° accuracy)
# ---------------------------------------------------------------------------

def sun_equatorial(jd: float) -> Tuple[float, float]:
    """Apparent geocentric RA/Dec of the Sun, degrees."""
    T = centuries_since_j2000(jd)
    # Geometric mean longitude and mean anomaly
    L0 = _normalize_deg(280.46646 + 36000.76983 * T)
    M = _normalize_deg(357.52911 + 35999.05029 * T - 0.0001537 * T*T)
    M_r = math.radians(M)
    # Equation of center
    C = ((1.914602 - 0.004817*T - 0.000014*T*T) * math.sin(M_r)
         + (0.019993 - 0.000101*T) * math.sin(2*M_r)
         + 0.000289 * math.sin(3*M_r))
    # Apparent longitude (aberration + nutation quick correction)
    omega = _normalize_deg(125.04 - 1934.136 * T)
    lam = L0 + C - 0.00569 - 0.00478 * math.sin(math.radians(omega))
    eps = _OBLIQUITY_J2000 - 0.013004 * T + 0.00000164 * T*T
    eps_r = math.radians(eps + 0.00256 * math.cos(math.radians(omega)))
    lam_r = math.radians(lam)

    ra = math.degrees(math.atan2(math.cos(eps_r)*math.sin(lam_r), math.cos(lam_r)))
    dec = math.degrees(math.asin(math.sin(eps_r)*math.sin(lam_r)))
    return ra % 360.0, dec


# ---------------------------------------------------------------------------
# Moon (Meeus ch. 47, largest periodic terms)
# ---------------------------------------------------------------------------

# (D, M, M', F, Σl coeff, Σr coeff)
_MOON_LON_DIST_TERMS = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
)

# (D, M, M', F, Σb coeff)
_MOON_LAT_TERMS = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
)


def moon_equatorial(jd: float) -> Tuple[float, float, float]:
    """Apparent geocentric RA/Dec of the Moon (degrees) and distance (km)."""
    T = centuries_since_j2000(jd)
    # Fundamental arguments (degrees)
    Lp = _normalize_deg(218.3164477 + 481267.88123421*T)   # Mean longitude
    D = _normalize_deg(297.8501921 + 445267.1114034*T)     # Mean elongation
    M = _normalize_deg(357.5291092 + 35999.0502909*T)      # Sun mean anomaly
    Mp = _normalize_deg(134.9633964 + 477198.8675055*T)    # Moon mean anomaly
    F = _normalize_deg(93.2720950 + 483202.0175233*T)      # Arg of latitude
    E = 1.0 - 0.002516*T - 0.0000074*T*T

    A1 = math.radians(_normalize_deg(119.75 + 131.849*T))
    A2 = math.radians(_normalize_deg(53.09 + 479264.290*T))
    A3 = math.radians(_normalize_deg(313.45 + 481266.484*T))
    Lp_r, D_r, M_r, Mp_r, F_r = (math.radians(x) for x in (Lp, D, M, Mp, F))

    sum_l = 0.0
    sum_r = 0.0
    for d, m, mp, f, cl, cr in _MOON_LON_DIST_TERMS:
        arg = d*D_r + m*M_r + mp*Mp_r + f*F_r
        ecc = E ** abs(m)
        sum_l += cl * ecc * math.sin(arg)
        sum_r += cr * ecc * math.cos(arg)

    sum_b = 0.0
    for d, m, mp, f, cb in _MOON_LAT_TERMS:
        arg = d*D_r + m*M_r + mp*Mp_r + f*F_r
        sum_b += cb * (E ** abs(m)) * math.sin(arg)

    # Venus, Jupiter and flattening corrections
    sum_l += 3958*math.sin(A1) + 1962*math.sin(Lp_r - F_r) + 318*math.sin(A2)
    sum_b += (-2235*math.sin(Lp_r) + 382*math.sin(A3)
              + 175*math.sin(A1 - F_r) + 175*math.sin(A1 + F_r)
              + 127*math.sin(Lp_r - Mp_r) - 115*math.sin(Lp_r + Mp_r))

    omega = _normalize_deg(125.04 - 1934.136 * T)
    lam = Lp + sum_l/1e6 - 0.00478*math.sin(math.radians(omega))
    beta = sum_b / 1e6
    dist_km = 385000.56 + sum_r/1000.0

    # Ecliptic → equatorial
    eps = math.radians(_OBLIQUITY_J2000 - 0.013004*T
                       + 0.00256*math.cos(math.radians(omega)))
    lam_r = math.radians(lam)
    beta_r = math.radians(beta)
    x = math.cos(beta_r)*math.cos(lam_r)
    y = math.cos(eps)*math.cos(beta_r)*math.sin(lam_r) - math.sin(eps)*math.sin(beta_r)
    z = math.sin(eps)*math.cos(beta_r)*math.sin(lam_r) + math.cos(eps)*math.sin(beta_r)

    ra = math.degrees(math.atan2(y, x)) % 360.0
    dec = math.degrees(math.asin(max(-1.0, min(1.0, z))))
    return ra, dec, dist_km


def topocentric_equatorial(ra_deg: float, dec_deg: float, dist_km: float,
                           lat_deg: float, lon_deg: float,
                           jd: float) -> Tuple[float, float]:
    """Apply diurnal parallax (spherical Earth, sea level) to RA/Dec."""
    sin_pi = _EARTH_RADIUS_KM / dist_km
    lat_r = math.radians(lat_deg)
    dec_r = math.radians(dec_deg)
    H = math.radians(lst_deg(jd, lon_deg) - ra_deg)

    rho_cos = math.cos(lat_r)
    rho_sin = math.sin(lat_r)
    denom = math.cos(dec_r) - rho_cos*sin_pi*math.cos(H)
    d_ra = math.atan2(-rho_cos*sin_pi*math.sin(H), denom)
    dec_t = math.atan2((math.sin(dec_r) - rho_sin*sin_pi)*math.cos(d_ra), denom)
    return (ra_deg + math.degrees(d_ra)) % 360.0, math.degrees(dec_t)


# ---------------------------------------------------------------------------
# Day times (astral)
# ---------------------------------------------------------------------------

# (sun altitude deg, morning event, evening event); geometric, no refraction
_DAY_EVENTS = (
    (-0.833, "sunrise", "sunset"),
    (-0.3, "sunrise_end", "sunset_start"),
    (-6.0, "dawn", "dusk"),
    (-12.0, "nautical_dawn", "nautical_dusk"),
    (-18.0, "night_end", "night"),
    (6.0, "golden_hour_end", "golden_hour"),
)


@dataclass(frozen=True)
class DayTimes:
    """Sun events of one solar day (UTC). None = the Sun never reaches that altitude."""
    solar_noon: datetime
    nadir: datetime
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    sunrise_end: Optional[datetime] = None
    sunset_start: Optional[datetime] = None
    dawn: Optional[datetime] = None
    dusk: Optional[datetime] = None
    nautical_dawn: Optional[datetime] = None
    nautical_dusk: Optional[datetime] = None
    night_end: Optional[datetime] = None
    night: Optional[datetime] = None
    golden_hour_end: Optional[datetime] = None
    golden_hour: Optional[datetime] = None

    def require(self, name: str) -> datetime:
        """Return the named event or raise EphemerisFailure if it does not occur."""
        if name not in DAY_EVENT_NAMES:
            raise KeyError(name)
        value = getattr(self, name)
        if value is None:
            raise EphemerisFailure(f"no {name} on the solar day of {self.solar_noon.isoformat()}")
        return value


DAY_EVENT_NAMES: tuple[str, ...] = tuple(f.name for f in fields(DayTimes))


def local_mean_time(lon_deg: float) -> timezone:
    """Fixed-offset zone of local mean solar time (15° of longitude per hour)."""
    return timezone(timedelta(hours=lon_deg / 15.0))


def _on_day(solve: Callable[[date], datetime], day: date, lmt: timezone) -> Optional[datetime]:
    """
    First solution of `solve` falling on `day` in local mean time, in UTC.

    astral works on UTC dates, so an event of the local day may come from
    the neighbouring date. ValueError from astral means no crossing.
    """
    for candidate in (day, day - timedelta(days=1), day + timedelta(days=1)):
        try:
            when = solve(candidate)
        except ValueError:
            continue
        if when.astimezone(lmt).date() == day:
            return when.astimezone(timezone.utc)
    return None


def _crossing(observer: Observer, altitude: float, direction: SunDirection,
              day: date, lmt: timezone) -> Optional[datetime]:
    return _on_day(
        lambda d: time_at_elevation(observer, elevation=altitude, date=d,
                                    direction=direction, tzinfo=lmt,
                                    with_refraction=False),
        day, lmt)


# ---------------------------------------------------------------------------
# Ephemeris
# ---------------------------------------------------------------------------

class Ephemeris:
    """
    Sun/Moon positions and day times for an observer.

    Stateless: every call recomputes from scratch, the same input always
    gives the same output.
    """

    def position_of(self, body: Body, instant: datetime,
                    lat_deg: float, lon_deg: float) -> CelestialPosition:
        _validate_geo(lat_deg, lon_deg)
        jd = datetime_to_julian_date(instant)

        if body is Body.SUN:
            ra, dec = sun_equatorial(jd)
        elif body is Body.MOON:
            ra, dec, dist_km = moon_equatorial(jd)
            ra, dec = topocentric_equatorial(ra, dec, dist_km, lat_deg, lon_deg, jd)
        else:
            raise EphemerisFailure(f"unsupported body: {body!r}")

        alt, az = equatorial_to_altaz(ra, dec, lat_deg, lon_deg, jd)
        return _to_celestial_position(alt, az)

    def sun_position(self, instant: datetime, lat_deg: float, lon_deg: float) -> CelestialPosition:
        return self.position_of(Body.SUN, instant, lat_deg, lon_deg)

    def moon_position(self, instant: datetime, lat_deg: float, lon_deg: float) -> CelestialPosition:
        return self.position_of(Body.MOON, instant, lat_deg, lon_deg)

    def day_times(self, instant: datetime, lat_deg: float, lon_deg: float) -> DayTimes:
        """
        Sun events for the solar day of `instant`.

        The day is the local-mean-time date of the instant (midnight to
        midnight around the solar transit). Every event found lies on that
        same date, so any instant of the day, sunrise included, resolves to
        identical events.
        """
        _validate_geo(lat_deg, lon_deg)
        lmt = local_mean_time(lon_deg)
        day = require_aware(instant).astimezone(lmt).date()
        observer = Observer(latitude=lat_deg, longitude=lon_deg)

        solar_noon = _on_day(lambda d: noon(observer, d, tzinfo=lmt), day, lmt)
        if solar_noon is None:
            raise EphemerisFailure(f"no solar transit on {day} at lon {lon_deg}")

        events: dict[str, Optional[datetime]] = {}
        for h0, morning, evening in _DAY_EVENTS:
            events[morning] = _crossing(observer, h0, SunDirection.RISING, day, lmt)
            events[evening] = _crossing(observer, h0, SunDirection.SETTING, day, lmt)

        logger.debug("day times %s lat=%.4f lon=%.4f sunrise=%s sunset=%s",
                     day, lat_deg, lon_deg, events["sunrise"], events["sunset"])
        return DayTimes(
            solar_noon=solar_noon,
            nadir=solar_noon - timedelta(hours=12),
            **events,
        )
