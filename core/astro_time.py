from __future__ import annotations
from datetime import datetime, timezone

from core.errors import EphemerisFailure

# Lightweight time utilities (no external deps).
# We use UTC internally; the caller keeps its own display zone.

J2000_JD = 2451545.0
J2000_UTC = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
SECONDS_PER_DAY = 86400.0

# Range where the low-precision series stay within a fraction of a degree
MIN_YEAR = 1000
MAX_YEAR = 3000


def require_aware(dt: datetime) -> datetime:
    """Return dt in UTC; naive datetimes are rejected (ambiguous wall clock)."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise EphemerisFailure(f"naive datetime not accepted: {dt.isoformat()}")
    if not (MIN_YEAR <= dt.year <= MAX_YEAR):
        raise EphemerisFailure(
            f"{dt.isoformat()} outside supported years {MIN_YEAR}-{MAX_YEAR}")
    return dt.astimezone(timezone.utc)


def datetime_to_julian_date(dt: datetime) -> float:
    """datetime (timezone-aware) → Julian Date."""
    utc = require_aware(dt)
    return J2000_JD + (utc - J2000_UTC).total_seconds() / SECONDS_PER_DAY


def centuries_since_j2000(jd: float) -> float:
    return (jd - J2000_JD) / 36525.0


def gmst_deg(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees [0, 360) — IAU 1982.
    """
    T = centuries_since_j2000(jd)
    gmst = 280.46061837 + 360.98564736629*(jd - J2000_JD) + 0.000387933*T*T - (T*T*T)/38710000.0
    return gmst % 360.0


def lst_deg(jd: float, lon_deg: float) -> float:
    return (gmst_deg(jd) + lon_deg) % 360.0
