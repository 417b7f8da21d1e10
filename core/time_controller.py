"""
TimeController — simulated clock, step mode and step counter.

One key press does not jump the clock in one go: it arms a signed counter
with the repeat count of the current step mode, and each update tick moves
the clock by one repeat until the counter is back to zero. That is what
makes the Sun and Moon glide across the screen.

Step modes (repeats × seconds per repeat):
    1 Minute   1   × 60 s
    1 Hour     60  × 60 s
    1 Day      24  × 1 h
    30 Days    30  × 1 d
    365 Days   365 × 1 d
    5 years    5   × 365.25 d

States:
    Idle      counter == 0   — step input arms the counter
    Stepping  counter != 0   — step input ignored, ticks consume the counter

The whole session lives in one immutable SimulationState, threaded through:
    state = handle_action(state, InputAction.STEP_FORWARD, ephemeris)
    state = advance(state)          # once per update tick
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum

from core.errors import EphemerisFailure
from core.types import GeoCoordinate
from universe.ephemeris import Ephemeris

logger = logging.getLogger(__name__)


class InputAction(Enum):
    STEP_FORWARD = "step_forward"
    STEP_BACKWARD = "step_backward"
    MODE_UP = "mode_up"
    MODE_DOWN = "mode_down"
    JUMP_SUNRISE = "jump_sunrise"
    JUMP_SUNSET = "jump_sunset"
    QUIT = "quit"


@dataclass(frozen=True)
class StepMode:
    name: str
    repeats: int
    seconds_per_repeat: float

    @property
    def total_seconds(self) -> float:
        return self.repeats * self.seconds_per_repeat


STEP_MODES: tuple[StepMode, ...] = (
    StepMode("1 Minute", 1, 60),
    StepMode("1 Hour", 60, 60),
    StepMode("1 Day", 24, 3600),
    StepMode("30 Days", 30, 86400),
    StepMode("365 Days", 365, 86400),
    StepMode("5 years", 5, 86400 * 365.25),
)
DEFAULT_MODE_IDX = 1


@dataclass(frozen=True)
class SimulationState:
    """
    Everything the update/draw cycle needs.

    clock is kept in UTC; display_tz is only used for captions, so
    DST changes never disturb the step arithmetic.
    step_seconds is locked when a step starts: changing mode mid-step
    does not alter the step in progress.
    """
    geo: GeoCoordinate
    clock: datetime
    display_tz: tzinfo = timezone.utc
    mode_idx: int = DEFAULT_MODE_IDX
    counter: int = 0
    step_seconds: float = 0.0
    running: bool = True

    @classmethod
    def start(cls, geo: GeoCoordinate, start: datetime,
              mode_idx: int = DEFAULT_MODE_IDX) -> SimulationState:
        if start.tzinfo is None or start.utcoffset() is None:
            raise EphemerisFailure(f"start time must be timezone-aware: {start.isoformat()}")
        return cls(
            geo=geo,
            clock=start.astimezone(timezone.utc),
            display_tz=start.tzinfo,
            mode_idx=max(0, min(mode_idx, len(STEP_MODES) - 1)),
        )

    # ── Proprietà ────────────────────────────────────────────────────────────

    @property
    def mode(self) -> StepMode:
        return STEP_MODES[self.mode_idx]

    @property
    def stepping(self) -> bool:
        return self.counter != 0

    @property
    def local_time(self) -> datetime:
        return self.clock.astimezone(self.display_tz)


def current_mode(state: SimulationState) -> StepMode:
    return state.mode


def is_stepping(state: SimulationState) -> bool:
    return state.stepping


def caption(state: SimulationState) -> str:
    """Window title: local time and step mode, e.g. '2017-08-21 10:36:00 -0600 - 1 Hour'."""
    return f"{state.local_time:%Y-%m-%d %H:%M:%S %z} - {state.mode.name}"


# ── Controlli ─────────────────────────────────────────────────────────────────

def _start_step(state: SimulationState, direction: int) -> SimulationState:
    if state.stepping:
        return state
    mode = state.mode
    logger.info("%s in time %s", "Forward" if direction > 0 else "Backward", mode.name)
    return replace(state,
                   counter=direction * mode.repeats,
                   step_seconds=mode.seconds_per_repeat)


def _cycle_mode(state: SimulationState, delta: int) -> SimulationState:
    idx = (state.mode_idx + delta) % len(STEP_MODES)
    logger.info("Step mode: %s", STEP_MODES[idx].name)
    return replace(state, mode_idx=idx)


def _jump_to(state: SimulationState, event: str, ephemeris: Ephemeris) -> SimulationState:
    times = ephemeris.day_times(state.clock, state.geo.lat_deg, state.geo.lon_deg)
    when = times.require(event).astimezone(timezone.utc)
    logger.info("Jump to %s: %s", event, when.astimezone(state.display_tz))
    return replace(state, clock=when)


def handle_action(state: SimulationState, action: InputAction,
                  ephemeris: Ephemeris) -> SimulationState:
    """Apply one input to the state; returns the new state."""
    if action is InputAction.STEP_FORWARD:
        return _start_step(state, +1)
    if action is InputAction.STEP_BACKWARD:
        return _start_step(state, -1)
    if action is InputAction.MODE_UP:
        return _cycle_mode(state, +1)
    if action is InputAction.MODE_DOWN:
        return _cycle_mode(state, -1)
    if action is InputAction.JUMP_SUNRISE:
        return _jump_to(state, "sunrise", ephemeris)
    if action is InputAction.JUMP_SUNSET:
        return _jump_to(state, "sunset", ephemeris)
    if action is InputAction.QUIT:
        return replace(state, running=False)
    raise ValueError(f"Unknown input action: {action!r}")


# ── Aggiornamento tick ───────────────────────────────────────────────────────

def advance(state: SimulationState) -> SimulationState:
    """
    One update tick: consume one repeat of the running step.
    Idle states are returned unchanged.
    """
    if state.counter == 0:
        return state
    direction = 1 if state.counter > 0 else -1
    counter = state.counter - direction
    clock = state.clock + direction * timedelta(seconds=state.step_seconds)
    if counter == 0:
        logger.debug("Step finished at %s", clock.astimezone(state.display_tz))
        return replace(state, clock=clock, counter=0, step_seconds=0.0)
    return replace(state, clock=clock, counter=counter)
