"""
Eclipse Screen

Thin pygame adapter around the core:
  - KEYDOWN events → InputAction (arrows, R, S, ESC)
  - update tick    → advance() + project()
  - render         → sky tint, horizon line, observer marker, Sun, Moon

Controls:
  → / ←   step forward / backward by the current mode
  ↑ / ↓   next / previous step mode
  R / S   jump to sunrise / sunset of the current day
  ESC     quit
"""

from __future__ import annotations
import logging
from typing import Optional

import pygame

from atmosphere.day_phase import DayPhase, get_phase_properties
from core.settings import SCREEN, YOU_D
from core.sky_projector import project_state
from core.time_controller import (
    InputAction,
    SimulationState,
    advance,
    caption,
    handle_action,
)
from core.types import ScreenSize, SkyFrame
from rendering.sprites import make_disk_sprite
from universe.ephemeris import Ephemeris
from .theme import get_theme

logger = logging.getLogger(__name__)


KEY_ACTIONS: dict[int, InputAction] = {
    pygame.K_RIGHT: InputAction.STEP_FORWARD,
    pygame.K_LEFT: InputAction.STEP_BACKWARD,
    pygame.K_UP: InputAction.MODE_UP,
    pygame.K_DOWN: InputAction.MODE_DOWN,
    pygame.K_r: InputAction.JUMP_SUNRISE,
    pygame.K_s: InputAction.JUMP_SUNSET,
    pygame.K_ESCAPE: InputAction.QUIT,
}


def action_for_event(event: pygame.event.Event) -> Optional[InputAction]:
    """Translate one pygame event into an InputAction (None = not ours)."""
    if event.type == pygame.QUIT:
        return InputAction.QUIT
    if event.type == pygame.KEYDOWN:
        return KEY_ACTIONS.get(event.key)
    return None


class EclipseScreen:
    """
    Sun/Moon sky view for one observer.

    Owns the SimulationState and the last projected SkyFrame; the frame is
    recomputed on every update so it always matches the current clock.
    """

    def __init__(self, state: SimulationState, ephemeris: Ephemeris,
                 screen: ScreenSize = SCREEN):
        self.theme = get_theme()
        self.state = state
        self.ephemeris = ephemeris
        self.screen_size = screen
        # Fail fast: an unusable location/time surfaces here, before the loop
        self.frame: SkyFrame = project_state(self.state, self.ephemeris, self.screen_size)
        self._sprites: dict[str, pygame.Surface] = {}

    # ── Stato ────────────────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def stepping(self) -> bool:
        return self.state.stepping

    @property
    def caption(self) -> str:
        return caption(self.state)

    @property
    def phase(self) -> DayPhase:
        return DayPhase.from_solar_altitude_rad(self.frame.sun_position.altitude)

    # ── Ciclo ────────────────────────────────────────────────────────────────

    def on_enter(self):
        logger.info("Observer at %.6f, %.6f, %s",
                    self.state.geo.lat_deg, self.state.geo.lon_deg, self.caption)

    def on_exit(self):
        logger.info("Leaving at %s", self.caption)

    def handle_input(self, events: list[pygame.event.Event]):
        for event in events:
            action = action_for_event(event)
            if action is None:
                continue
            self.state = handle_action(self.state, action, self.ephemeris)
            if not self.state.running:
                break

    def update(self, dt: float):
        self.state = advance(self.state)
        self.frame = project_state(self.state, self.ephemeris, self.screen_size)

    def render(self, surface: pygame.Surface):
        colors = self.theme.colors
        frame = self.frame
        phase = self.phase

        surface.fill(get_phase_properties(phase).sky_color)

        # Horizon + "you"
        self.theme.draw_hline(surface, frame.horizon_y, colors.HORIZON)
        you_x, you_y = frame.you
        pygame.draw.rect(surface, colors.YOU, pygame.Rect(you_x, you_y, YOU_D, YOU_D))

        # Sun below, Moon on top (covers the Sun at totality)
        surface.blit(self._sprite("sun", frame.sun.diameter), (frame.sun.x, frame.sun.y))
        surface.blit(self._sprite("moon", frame.moon.diameter), (frame.moon.x, frame.moon.y))

        pad = self.theme.padding
        line_h = self.theme.draw_text(surface, self.theme.fonts.caption(), pad, pad,
                                      self.caption, colors.FG_PRIMARY)
        self.theme.draw_text(surface, self.theme.fonts.small(), pad, pad + line_h,
                             get_phase_properties(phase).label, colors.FG_DIM)

    def _sprite(self, name: str, diameter: int) -> pygame.Surface:
        if name not in self._sprites:
            if name == "sun":
                self._sprites[name] = make_disk_sprite(diameter, self.theme.colors.SUN,
                                                       limb_darkening=0.4)
            else:
                self._sprites[name] = make_disk_sprite(diameter, self.theme.colors.MOON)
        return self._sprites[name]
