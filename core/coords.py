from __future__ import annotations
import math
from fractions import Fraction
from numbers import Real

# Scale of the intermediate cartesian plane; map_range domain is [-K, +K]
SPH2CART_SCALE = 180
CART_DOMAIN = (-SPH2CART_SCALE, SPH2CART_SCALE)


def wrap_pi(x: float) -> float:
    """Wrap radians to (-pi, pi]."""
    x = math.fmod(x + math.pi, 2.0 * math.pi)
    if x <= 0.0:
        x += 2.0 * math.pi
    return x - math.pi


def sph2cart(azimuth: float, altitude: float) -> tuple[float, float]:
    """
    Flatten (azimuth, altitude) onto the sky plane used by the viewer.

    Not a true spherical→cartesian conversion: the screen calibration
    (horizon height, sunrise line) is tuned against exactly this formula.
    """
    c = SPH2CART_SCALE * math.cos(altitude)
    return c * math.sin(azimuth), c * math.cos(azimuth)


def map_range(a: tuple[Real, Real], b: tuple[Real, Real], s: Real) -> float:
    """
    Map s linearly from range a onto range b.

    Computed with exact rationals and rounded once, so the endpoints of a
    land exactly on the endpoints of b (b may be decreasing).
    """
    a0, a1 = Fraction(a[0]), Fraction(a[1])
    b0, b1 = Fraction(b[0]), Fraction(b[1])
    if a0 == a1:
        raise ValueError(f"degenerate source range {a!r}")
    return float(b0 + (Fraction(s) - a0) * (b1 - b0) / (a1 - a0))


def to_pixel(value: float) -> int:
    """Truncate towards zero, like the sprite placement expects."""
    return int(value)
