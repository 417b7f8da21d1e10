"""
Atmosphere package — sky appearance driven by the Sun's altitude.

Main exports:
    DayPhase              — enum: NIGHT / ASTRO_TWILIGHT / ... / DAY
    get_phase_properties  — sky colour + label for a phase
"""
from .day_phase import DayPhase, get_phase_properties, PHASE_PROPERTIES

__all__ = [
    "DayPhase",
    "get_phase_properties",
    "PHASE_PROPERTIES",
]
