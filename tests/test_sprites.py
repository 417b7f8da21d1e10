import numpy as np
import pygame
import pytest

from rendering.sprites import disk_alpha, make_disk_sprite


def test_disk_alpha_shape_and_fill() -> None:
    mask = disk_alpha(50)
    assert mask.shape == (50, 50)
    assert mask.dtype == np.uint8
    assert mask[25, 25] == 255
    # Corners lie outside the disk
    for y, x in ((0, 0), (0, 49), (49, 0), (49, 49)):
        assert mask[y, x] == 0


def test_disk_alpha_is_symmetric() -> None:
    mask = disk_alpha(49)
    assert np.array_equal(mask, mask.T)
    assert np.array_equal(mask, mask[::-1, :])


def test_disk_alpha_intensity() -> None:
    assert disk_alpha(20, intensity=100).max() == 100


def test_limb_darkening_dims_the_edge() -> None:
    flat = disk_alpha(50)
    dark = disk_alpha(50, limb_darkening=1.0)
    assert dark[25, 0] < flat[25, 0]
    assert dark[25, 0] < dark[25, 25]
    assert dark[25, 25] >= 250


@pytest.mark.parametrize('diameter', [0, -3])
def test_disk_alpha_rejects_bad_diameter(diameter) -> None:
    with pytest.raises(ValueError):
        disk_alpha(diameter)


def test_make_disk_sprite() -> None:
    sprite = make_disk_sprite(12, (80, 120, 255))
    assert sprite.get_size() == (12, 12)
    assert sprite.get_at((6, 6)) == pygame.Color(80, 120, 255, 255)
    assert sprite.get_at((0, 0)).a == 0
