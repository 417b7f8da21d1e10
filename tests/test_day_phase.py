import math

import pytest

from atmosphere.day_phase import PHASE_PROPERTIES, DayPhase, get_phase_properties


@pytest.mark.parametrize('alt_deg, phase', [
    (-40.0, DayPhase.NIGHT),
    (-18.0, DayPhase.ASTRONOMICAL_TWILIGHT),
    (-12.5, DayPhase.ASTRONOMICAL_TWILIGHT),
    (-8.0, DayPhase.NAUTICAL_TWILIGHT),
    (-3.0, DayPhase.CIVIL_TWILIGHT),
    (-0.833, DayPhase.SUNRISE_SUNSET),
    (-0.5, DayPhase.SUNRISE_SUNSET),
    (0.0, DayPhase.GOLDEN_HOUR),
    (5.9, DayPhase.GOLDEN_HOUR),
    (6.0, DayPhase.DAY),
    (48.0, DayPhase.DAY),
])
def test_phase_boundaries(alt_deg, phase) -> None:
    assert DayPhase.from_solar_altitude(alt_deg) is phase


def test_radians_entry_point() -> None:
    assert DayPhase.from_solar_altitude_rad(math.radians(30.0)) is DayPhase.DAY
    assert DayPhase.from_solar_altitude_rad(-math.pi / 2) is DayPhase.NIGHT


def test_every_phase_has_properties() -> None:
    assert set(PHASE_PROPERTIES) == set(DayPhase)
    for phase in DayPhase:
        props = get_phase_properties(phase)
        assert props.label
        assert all(0 <= c <= 255 for c in props.sky_color)


def test_night_darker_than_day() -> None:
    night = sum(get_phase_properties(DayPhase.NIGHT).sky_color)
    day = sum(get_phase_properties(DayPhase.DAY).sky_color)
    assert night < day
