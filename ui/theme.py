"""
UI Theme

Colours and fonts for the eclipse viewer: dark sky, phosphor green horizon,
warm Sun, grey Moon, blue observer marker.
"""

import pygame
from typing import Tuple
from dataclasses import dataclass


class Colors:
    """Colour palette (RGB)."""

    FG_PRIMARY = (0, 255, 120)     # Bright green (status text)
    FG_DIM = (0, 180, 80)          # Dimmed green (secondary text)

    HORIZON = (0, 255, 0)          # Horizon line
    SUN = (255, 96, 48)            # Sun disk (red/orange)
    MOON = (170, 170, 170)         # Moon disk (grey)
    YOU = (80, 120, 255)           # Observer marker


@dataclass
class FontConfig:
    """Font configuration"""
    family: str = "Consolas,Courier New,Courier,monospace"
    size_caption: int = 30
    size_small: int = 14


class Fonts:
    """
    Font manager

    Loads and caches fonts on first use (pygame.font must be initialised).
    """

    _initialized = False
    _fonts: dict = {}
    _config = FontConfig()

    @classmethod
    def initialize(cls, config: FontConfig = None):
        if config is not None:
            cls._config = config

        pygame.font.init()
        # SysFont picks the first installed family and falls back to the default font
        cls._fonts['caption'] = pygame.font.SysFont(cls._config.family, cls._config.size_caption)
        cls._fonts['small'] = pygame.font.SysFont(cls._config.family, cls._config.size_small)
        cls._initialized = True

    @classmethod
    def release(cls):
        """Drop the cached fonts; call before pygame.quit()."""
        cls._fonts.clear()
        cls._initialized = False

    @classmethod
    def get(cls, size: str = 'caption') -> pygame.font.Font:
        # Cached fonts die with pygame.quit(); reload after a re-init
        if not cls._initialized or not pygame.font.get_init():
            cls.initialize()
        return cls._fonts.get(size, cls._fonts['caption'])

    @classmethod
    def caption(cls) -> pygame.font.Font:
        return cls.get('caption')

    @classmethod
    def small(cls) -> pygame.font.Font:
        return cls.get('small')


class Theme:
    """Bundles colours and fonts with the draw helpers the screens use."""

    def __init__(self):
        self.colors = Colors()
        self.fonts = Fonts()
        self.padding = 5

    def draw_text(self, surface: pygame.Surface, font: pygame.font.Font,
                  x: int, y: int, text: str, color: Tuple[int, int, int]) -> int:
        """Blit one line of text with its top-left at (x, y); returns the line height."""
        rendered = font.render(text, True, color)
        surface.blit(rendered, (x, y))
        return rendered.get_height()

    def draw_hline(self, surface: pygame.Surface, y: int,
                   color: Tuple[int, int, int] = None):
        """Full-width 1 px horizontal line."""
        if color is None:
            color = self.colors.HORIZON
        pygame.draw.line(surface, color, (0, y), (surface.get_width(), y), 1)


# Global theme instance
_theme = None

def get_theme() -> Theme:
    """Get global theme instance"""
    global _theme
    if _theme is None:
        _theme = Theme()
    return _theme
