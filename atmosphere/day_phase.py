"""
DayPhase — stato della luce solare basato sull'altitudine del Sole.

Each phase defines the sky background painted behind the Sun and Moon
sprites and the label shown in the status line.
"""
from __future__ import annotations
import math
from enum import Enum
from dataclasses import dataclass
from typing import Tuple


class DayPhase(Enum):
    """
    Fasi della giornata in ordine di altitudine solare crescente.
    I confini sono altitudini del Sole in gradi.
    """
    NIGHT                 = "night"              # Sol < -18°
    ASTRONOMICAL_TWILIGHT = "astro_twilight"     # -18° < Sol < -12°
    NAUTICAL_TWILIGHT     = "nautical_twilight"  # -12° < Sol < -6°
    CIVIL_TWILIGHT        = "civil_twilight"     # -6°  < Sol < -0.833°
    SUNRISE_SUNSET        = "sunrise_sunset"     # -0.833° < Sol < 0° (refrazione)
    GOLDEN_HOUR           = "golden_hour"        # 0°  < Sol < 6°
    DAY                   = "day"                # Sol > 6°

    @classmethod
    def from_solar_altitude(cls, alt_deg: float) -> 'DayPhase':
        if   alt_deg < -18.0:    return cls.NIGHT
        elif alt_deg < -12.0:    return cls.ASTRONOMICAL_TWILIGHT
        elif alt_deg <  -6.0:    return cls.NAUTICAL_TWILIGHT
        elif alt_deg <  -0.833:  return cls.CIVIL_TWILIGHT
        elif alt_deg <   0.0:    return cls.SUNRISE_SUNSET
        elif alt_deg <   6.0:    return cls.GOLDEN_HOUR
        else:                    return cls.DAY

    @classmethod
    def from_solar_altitude_rad(cls, alt_rad: float) -> 'DayPhase':
        return cls.from_solar_altitude(math.degrees(alt_rad))


@dataclass(frozen=True)
class PhaseProperties:
    # Sky background (R,G,B 0-255)
    sky_color: Tuple[int, int, int]
    label: str


PHASE_PROPERTIES: dict[DayPhase, PhaseProperties] = {
    DayPhase.NIGHT:                 PhaseProperties((2, 4, 12), "Night"),
    DayPhase.ASTRONOMICAL_TWILIGHT: PhaseProperties((4, 8, 28), "Astro Twilight"),
    DayPhase.NAUTICAL_TWILIGHT:     PhaseProperties((12, 20, 52), "Nautical Twilight"),
    DayPhase.CIVIL_TWILIGHT:        PhaseProperties((36, 46, 96), "Civil Twilight"),
    DayPhase.SUNRISE_SUNSET:        PhaseProperties((96, 60, 36), "Sunrise / Sunset"),
    DayPhase.GOLDEN_HOUR:           PhaseProperties((110, 78, 40), "Golden Hour"),
    DayPhase.DAY:                   PhaseProperties((40, 72, 120), "Day"),   # smorzato, sprite leggibili
}


def get_phase_properties(phase: DayPhase) -> PhaseProperties:
    return PHASE_PROPERTIES[phase]
