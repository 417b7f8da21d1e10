"""
Error types for the eclipse viewer.

Two failure kinds are fatal at startup and abort the loop if they show up
during a tick:
    EphemerisFailure      — invalid geo/time input or missing day event
    RenderSurfaceFailure  — window/display unavailable
"""


class EclipseViewerError(Exception):
    """Base class for all eclipse viewer errors."""


class EphemerisFailure(EclipseViewerError, ValueError):
    """Sun/Moon position or day times cannot be computed for the given input."""


class RenderSurfaceFailure(EclipseViewerError, RuntimeError):
    """The pygame window or display could not be created or drawn to."""
