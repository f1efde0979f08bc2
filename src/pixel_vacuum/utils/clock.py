"""Frame timing utilities."""
from __future__ import annotations

from dataclasses import dataclass

import pygame


@dataclass
class FrameClock:
    target_fps: int

    def __post_init__(self) -> None:
        self._clock = pygame.time.Clock()
        self.frame_count = 0

    def tick(self) -> float:
        self.frame_count += 1
        return self._clock.tick(self.target_fps) / 1000.0

    def now(self) -> float:
        """Seconds since pygame.init()."""
        return pygame.time.get_ticks() / 1000.0

    def fps(self) -> float:
        return self._clock.get_fps()
