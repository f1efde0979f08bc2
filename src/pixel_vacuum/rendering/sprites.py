"""Cached sprites for squares, glows and confetti."""
from __future__ import annotations

from functools import lru_cache
from typing import Tuple

import numpy as np
import pygame

ALPHA_STEPS = 16


def quantize_alpha(opacity: float) -> int:
    """Map an opacity in [0, 1] onto one of ALPHA_STEPS alpha levels."""
    opacity = min(max(opacity, 0.0), 1.0)
    step = round(opacity * (ALPHA_STEPS - 1))
    return int(step * 255 / (ALPHA_STEPS - 1))


@lru_cache(maxsize=64)
def _glow_falloff(radius: int) -> np.ndarray:
    size = radius * 2 + 1
    ys = np.arange(size, dtype=np.float32)[:, None] - radius
    xs = np.arange(size, dtype=np.float32)[None, :] - radius
    distance = np.sqrt(xs * xs + ys * ys) / max(radius, 1)
    return np.clip(1.0 - distance, 0.0, 1.0) ** 2


@lru_cache(maxsize=256)
def glow_sprite(radius: int, color: Tuple[int, int, int], alpha: int) -> pygame.Surface:
    """Soft radial glow, brightest in the center and fading to transparent."""
    radius = max(int(radius), 1)
    falloff = _glow_falloff(radius)
    surface = pygame.Surface(falloff.shape, pygame.SRCALPHA)
    surface.fill((*color, 0))
    alpha_view = pygame.surfarray.pixels_alpha(surface)
    alpha_view[:] = (falloff * alpha).astype(np.uint8)
    del alpha_view
    return surface


@lru_cache(maxsize=1024)
def square_sprite(size: int, color: Tuple[int, int, int], alpha: int) -> pygame.Surface:
    size = max(int(size), 1)
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    surface.fill((*color, alpha))
    return surface


def clear_caches() -> None:
    _glow_falloff.cache_clear()
    glow_sprite.cache_clear()
    square_sprite.cache_clear()
