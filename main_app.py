"""
Eclipse Viewer - Main Application

Animates the Sun and Moon in the sky of one observer. The green line is the
horizon: it sits at the Sun's height at sunrise, so it moves with the season.

Default start: Grand Teton NP at the 2017-08-21 eclipse totality.
"""

import argparse
import logging
import sys
from typing import Optional

import pygame

from core.errors import EclipseViewerError, RenderSurfaceFailure
from core.logging_config import setup_logging
from core.settings import (
    DEFAULT_PRESET,
    FPS,
    HEIGHT,
    IDLE_FPS,
    PRESETS,
    TITLE,
    WIDTH,
)
from core.time_controller import DEFAULT_MODE_IDX, STEP_MODES, SimulationState
from universe.ephemeris import DAY_EVENT_NAMES, Ephemeris
from ui.screen_eclipse import EclipseScreen
from ui.theme import Fonts

logger = logging.getLogger(__name__)


def build_initial_state(preset_name: str = DEFAULT_PRESET,
                        at: Optional[str] = None,
                        mode_idx: int = DEFAULT_MODE_IDX,
                        ephemeris: Optional[Ephemeris] = None) -> SimulationState:
    """
    Starting state for a preset.

    Args:
        preset_name: key of core.settings.PRESETS
        at: optional day event (e.g. 'solar_noon', 'sunrise') of the preset day
        mode_idx: initial step mode index
        ephemeris: used to resolve `at`
    """
    preset = PRESETS[preset_name]
    logger.info("Preset %s: %s", preset.name, preset.description)
    start = preset.start
    if at is not None:
        ephemeris = ephemeris or Ephemeris()
        times = ephemeris.day_times(start, preset.geo.lat_deg, preset.geo.lon_deg)
        start = times.require(at).astimezone(start.tzinfo)
    return SimulationState.start(preset.geo, start, mode_idx)


class EclipseApp:
    """
    Main application

    Owns the window, the clock and the eclipse screen; runs the
    input → update → render loop until ESC or window close.
    """

    def __init__(self, state: SimulationState, ephemeris: Optional[Ephemeris] = None):
        """Initialize window and screen"""
        try:
            pygame.init()
            self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
            pygame.display.set_caption(TITLE)
        except pygame.error as e:
            pygame.quit()
            raise RenderSurfaceFailure(f"cannot open {WIDTH}x{HEIGHT} window: {e}") from e

        self.clock = pygame.time.Clock()
        self.eclipse = EclipseScreen(state, ephemeris or Ephemeris())
        self.eclipse.on_enter()

        print(f"\n{TITLE}")
        print("=" * 60)
        print("  ←/→ step   ↑/↓ step size   R sunrise   S sunset   ESC quit")
        print("=" * 60)

    @property
    def running(self) -> bool:
        return self.eclipse.running

    def run(self):
        """Main loop"""
        while self.running:
            # Throttle when nothing moves (~250 ms per frame)
            fps = FPS if self.eclipse.stepping else IDLE_FPS
            dt = self.clock.tick(fps) / 1000.0

            self.eclipse.handle_input(pygame.event.get())
            if not self.running:
                break

            self.eclipse.update(dt)
            try:
                self.eclipse.render(self.screen)
                pygame.display.set_caption(self.eclipse.caption)
                pygame.display.flip()
            except pygame.error as e:
                raise RenderSurfaceFailure(f"display lost: {e}") from e

        self.quit()

    def quit(self):
        """Cleanup and quit"""
        self.eclipse.on_exit()
        logger.info("Shutting down")
        Fonts.release()
        pygame.quit()


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Sun and Moon eclipse viewer.")
    ap.add_argument("--preset", choices=sorted(PRESETS), default=DEFAULT_PRESET,
                    help="Observer location and start time (default: %(default)s)")
    ap.add_argument("--at", choices=DAY_EVENT_NAMES, default=None,
                    help="Start at this sun event of the preset day instead of the preset time")
    ap.add_argument("--mode", type=int, choices=range(len(STEP_MODES)), default=DEFAULT_MODE_IDX,
                    help="Initial step mode: " + ", ".join(
                        f"{i}={m.name}" for i, m in enumerate(STEP_MODES)))
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    ap.add_argument("--log-file", default=None, help="Also write the log to this file")
    return ap.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point"""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        ephemeris = Ephemeris()
        state = build_initial_state(args.preset, args.at, args.mode, ephemeris)
        app = EclipseApp(state, ephemeris)
        app.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        Fonts.release()
        pygame.quit()
        return 0
    except EclipseViewerError:
        logger.exception("FATAL ERROR")
        Fonts.release()
        pygame.quit()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
