"""Pointer input tracking for the vacuum field."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame


@dataclass
class VacuumState:
    active: bool = False
    x: float = 0.0
    y: float = 0.0


_ACTIVATE_EVENTS = (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN)
_RELEASE_EVENTS = (pygame.MOUSEBUTTONUP, pygame.WINDOWLEAVE, pygame.WINDOWFOCUSLOST)


class TouchInput:
    """Maps mouse and finger events onto a single VacuumState.

    Finger coordinates arrive normalized to [0, 1] and are scaled to the
    current playfield. Mouse events synthesized by SDL from touches are
    ignored so a finger is never counted twice.
    """

    def __init__(self, playfield_size: Tuple[int, int] = (0, 0)) -> None:
        self.state = VacuumState()
        self.playfield_size = playfield_size

    def press(self, x: float, y: float) -> None:
        self.state.active = True
        self.state.x = float(x)
        self.state.y = float(y)

    def release(self) -> None:
        self.state.active = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type in _ACTIVATE_EVENTS and not getattr(event, "touch", False):
            self.press(*event.pos)
        elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
            width, height = self.playfield_size
            self.press(event.x * width, event.y * height)
        elif event.type == pygame.FINGERUP:
            self.release()
        elif event.type in _RELEASE_EVENTS and not getattr(event, "touch", False):
            self.release()
