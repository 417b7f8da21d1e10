"""
sprites.py
==========
Filled disk sprites for the Sun and Moon.

The alpha mask is built with numpy (optionally limb-darkened, like a real
solar disk) and copied into a per-pixel-alpha pygame surface.
"""
from __future__ import annotations
import numpy as np
import pygame
from typing import Tuple


def disk_alpha(diameter: int, intensity: int = 255,
               limb_darkening: float = 0.0) -> np.ndarray:
    """
    Alpha mask of a filled disk, shape (diameter, diameter), indexed [y, x].

    limb_darkening: 0 = flat disk, 1 = fully darkened edge.
    """
    if diameter <= 0:
        raise ValueError(f"diameter must be positive, got {diameter}")
    R = diameter / 2.0
    yy, xx = np.mgrid[0:diameter, 0:diameter].astype(np.float32)
    dr = np.sqrt((xx + 0.5 - R)**2 + (yy + 0.5 - R)**2)
    limb = np.sqrt(np.clip(1.0 - (dr / R)**2, 0.0, 1.0))
    shade = (1.0 - limb_darkening) + limb_darkening * limb
    alpha = np.where(dr <= R, intensity * shade, 0.0)
    return np.clip(np.round(alpha), 0, 255).astype(np.uint8)


def make_disk_sprite(diameter: int, colour: Tuple[int, int, int],
                     intensity: int = 255,
                     limb_darkening: float = 0.0) -> pygame.Surface:
    """Per-pixel-alpha surface holding a disk of the given colour."""
    surf = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
    surf.fill((*colour, 0))
    alpha = pygame.surfarray.pixels_alpha(surf)   # indexed [x, y]
    alpha[:, :] = disk_alpha(diameter, intensity, limb_darkening).T
    del alpha  # release the surface lock
    return surf
