"""Tests for the step/mode state machine."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from core.errors import EphemerisFailure
from core.time_controller import (
    DEFAULT_MODE_IDX,
    STEP_MODES,
    InputAction,
    SimulationState,
    advance,
    caption,
    current_mode,
    handle_action,
    is_stepping,
)

DENVER = ZoneInfo('America/Denver')


@pytest.fixture
def state(grand_teton) -> SimulationState:
    return SimulationState.start(grand_teton, datetime(2017, 8, 21, 10, 36, tzinfo=DENVER))


def run_ticks(state: SimulationState, n: int) -> SimulationState:
    for _ in range(n):
        state = advance(state)
    return state


def test_step_mode_table() -> None:
    """Six modes in fixed order; 5 years uses 365.25-day years."""
    assert [m.name for m in STEP_MODES] == [
        '1 Minute', '1 Hour', '1 Day', '30 Days', '365 Days', '5 years']
    assert STEP_MODES[1].repeats == 60
    assert STEP_MODES[1].seconds_per_repeat == 60
    assert STEP_MODES[5].total_seconds == 5 * 86400 * 365.25


def test_start_defaults(state) -> None:
    assert state.mode_idx == DEFAULT_MODE_IDX
    assert current_mode(state).name == '1 Hour'
    assert state.counter == 0
    assert not is_stepping(state)
    assert state.running
    assert state.clock.tzinfo == timezone.utc
    assert state.clock == datetime(2017, 8, 21, 16, 36, tzinfo=timezone.utc)


def test_start_rejects_naive_datetime(grand_teton) -> None:
    with pytest.raises(EphemerisFailure):
        SimulationState.start(grand_teton, datetime(2017, 8, 21, 10, 36))


def test_start_clamps_mode_index(grand_teton) -> None:
    s = SimulationState.start(grand_teton, datetime(2017, 8, 21, tzinfo=DENVER), mode_idx=42)
    assert s.mode_idx == len(STEP_MODES) - 1


def test_mode_down_wraps_from_first_to_last(state, fake_ephemeris) -> None:
    s = replace(state, mode_idx=0)
    s = handle_action(s, InputAction.MODE_DOWN, fake_ephemeris)
    assert s.mode_idx == len(STEP_MODES) - 1


def test_mode_up_wraps_from_last_to_first(state, fake_ephemeris) -> None:
    s = replace(state, mode_idx=len(STEP_MODES) - 1)
    s = handle_action(s, InputAction.MODE_UP, fake_ephemeris)
    assert s.mode_idx == 0


def test_step_forward_arms_counter(state, fake_ephemeris) -> None:
    s = handle_action(state, InputAction.STEP_FORWARD, fake_ephemeris)
    assert s.counter == 60
    assert is_stepping(s)
    assert s.clock == state.clock


def test_step_backward_arms_negative_counter(state, fake_ephemeris) -> None:
    s = handle_action(state, InputAction.STEP_BACKWARD, fake_ephemeris)
    assert s.counter == -60


@pytest.mark.parametrize('action', [InputAction.STEP_FORWARD, InputAction.STEP_BACKWARD])
def test_step_input_ignored_while_stepping(state, fake_ephemeris, action) -> None:
    """A running step is not re-armed or reversed by further step input."""
    s = handle_action(state, InputAction.STEP_FORWARD, fake_ephemeris)
    s = run_ticks(s, 5)
    again = handle_action(s, action, fake_ephemeris)
    assert again.counter == s.counter == 55
    assert again.mode_idx == s.mode_idx


def test_counter_exhaustion_one_hour(state, fake_ephemeris) -> None:
    """1 Hour forward: exactly 60 ticks bring the counter to zero, clock +3600 s."""
    s = handle_action(state, InputAction.STEP_FORWARD, fake_ephemeris)
    s = run_ticks(s, 59)
    assert s.counter == 1
    s = advance(s)
    assert s.counter == 0
    assert not is_stepping(s)
    assert (s.clock - state.clock).total_seconds() == 3600


def test_advance_when_idle_is_noop(state) -> None:
    assert advance(state) is state


@pytest.mark.parametrize('mode_idx', range(len(STEP_MODES)))
def test_backward_then_forward_restores_clock(state, fake_ephemeris, mode_idx) -> None:
    s = replace(state, mode_idx=mode_idx)
    repeats = STEP_MODES[mode_idx].repeats

    s = handle_action(s, InputAction.STEP_BACKWARD, fake_ephemeris)
    s = run_ticks(s, repeats)
    assert s.counter == 0
    assert s.clock == state.clock - timedelta(seconds=STEP_MODES[mode_idx].total_seconds)

    s = handle_action(s, InputAction.STEP_FORWARD, fake_ephemeris)
    s = run_ticks(s, repeats)
    assert s.counter == 0
    assert s.clock == state.clock


def test_mode_change_mid_step_keeps_step_size(state, fake_ephemeris) -> None:
    """Mode can change while stepping, the running step keeps its seconds per repeat."""
    s = handle_action(state, InputAction.STEP_FORWARD, fake_ephemeris)
    s = run_ticks(s, 10)
    s = handle_action(s, InputAction.MODE_UP, fake_ephemeris)
    assert s.mode_idx == 2
    assert s.counter == 50
    s = run_ticks(s, 50)
    assert s.counter == 0
    assert (s.clock - state.clock).total_seconds() == 3600
    assert current_mode(s).name == '1 Day'


def test_end_to_end_one_hour_step(state, fake_ephemeris) -> None:
    """10:36 local + one '1 Hour' step = 11:36 local, mode unchanged."""
    s = handle_action(state, InputAction.STEP_FORWARD, fake_ephemeris)
    s = run_ticks(s, 60)
    assert s.local_time.replace(tzinfo=None) == datetime(2017, 8, 21, 11, 36)
    assert s.counter == 0
    assert s.mode_idx == state.mode_idx


def test_crossing_dst_uses_elapsed_time(grand_teton, fake_ephemeris) -> None:
    """One day forward across the autumn DST change is 24 elapsed hours."""
    s = SimulationState.start(grand_teton, datetime(2017, 11, 4, 12, 0, tzinfo=DENVER), mode_idx=2)
    s = handle_action(s, InputAction.STEP_FORWARD, fake_ephemeris)
    s = run_ticks(s, 24)
    assert s.local_time.replace(tzinfo=None) == datetime(2017, 11, 5, 11, 0)


def test_jump_to_sunrise_and_sunset(state, fake_ephemeris) -> None:
    s = handle_action(state, InputAction.JUMP_SUNRISE, fake_ephemeris)
    assert s.clock == datetime(2017, 8, 21, 6, 0, tzinfo=timezone.utc)
    s = handle_action(s, InputAction.JUMP_SUNSET, fake_ephemeris)
    assert s.clock == datetime(2017, 8, 21, 18, 0, tzinfo=timezone.utc)


def test_jump_allowed_while_stepping(state, fake_ephemeris) -> None:
    s = handle_action(state, InputAction.STEP_FORWARD, fake_ephemeris)
    s = run_ticks(s, 3)
    s = handle_action(s, InputAction.JUMP_SUNRISE, fake_ephemeris)
    assert s.clock == datetime(2017, 8, 21, 6, 0, tzinfo=timezone.utc)
    assert s.counter == 57


def test_quit_stops_session(state, fake_ephemeris) -> None:
    s = handle_action(state, InputAction.QUIT, fake_ephemeris)
    assert not s.running


def test_caption(state, fake_ephemeris) -> None:
    assert caption(state) == '2017-08-21 10:36:00 -0600 - 1 Hour'
    s = handle_action(state, InputAction.MODE_DOWN, fake_ephemeris)
    assert caption(s) == '2017-08-21 10:36:00 -0600 - 1 Minute'
