"""
UI Module - pygame screens for the eclipse viewer
"""
from .theme import get_theme, Colors, Fonts
from .screen_eclipse import EclipseScreen, action_for_event, KEY_ACTIONS

__all__ = [
    "get_theme", "Colors", "Fonts",
    "EclipseScreen", "action_for_event", "KEY_ACTIONS",
]
