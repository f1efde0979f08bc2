"""Heads-up display: level, progress, coins, shop prices and messages."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import pygame

from pixel_vacuum.core.game import Game

TEXT_COLOR = (240, 240, 240)
MUTED_COLOR = (148, 163, 184)
COIN_COLOR = (245, 158, 11)
MESSAGE_COLOR = (34, 211, 238)
TURBO_COLOR = (255, 120, 0)


@dataclass
class Hud:
    margin: int = 16
    _fonts: Dict[Tuple[int, bool], pygame.font.Font] = field(default_factory=dict)

    def _font(self, size: int, bold: bool = False) -> pygame.font.Font:
        key = (size, bold)
        if key not in self._fonts:
            font = pygame.font.Font(None, size)
            font.set_bold(bold)
            self._fonts[key] = font
        return self._fonts[key]

    def _text(self, surface: pygame.Surface, text: str, pos, size=24, color=TEXT_COLOR, anchor="topleft"):
        rendered = self._font(size, bold=True).render(text, True, color)
        rect = rendered.get_rect(**{anchor: pos})
        surface.blit(rendered, rect)
        return rect

    def shop_lines(self, game: Game) -> List[str]:
        progression = game.progression
        if not progression.shop_unlocked:
            return [f"Shop unlocks at level {progression.economy.shop_unlock_level}"]
        size_label = "MAX" if game.is_size_maxed() else str(progression.size_cost)
        return [
            f"[P] Power {progression.upgrades.power}  cost {progression.power_cost}",
            f"[S] Size {progression.upgrades.size}  cost {size_label}",
        ]

    def turbo_label(self, game: Game) -> str:
        progression = game.progression
        if progression.turbo_active:
            return f"BOOST {math.ceil(progression.turbo_time_left)}s"
        return f"[T] SUPER POWER  cost {progression.turbo_cost}"

    def draw(self, surface: pygame.Surface, game: Game, now: float) -> None:
        width, height = surface.get_size()
        progression = game.progression
        m = self.margin

        self._text(surface, "LEVEL", (m, m), size=18, color=MUTED_COLOR)
        self._text(surface, str(progression.level), (m, m + 16), size=48)
        self._text(surface, f"{progression.score} / {progression.total}", (m, m + 56), size=28)

        self._text(surface, f"{progression.coins} coins", (width - m, m), size=36,
                   color=COIN_COLOR, anchor="topright")
        turbo_color = TURBO_COLOR if progression.turbo_active else TEXT_COLOR
        self._text(surface, self.turbo_label(game), (width - m, m + 36), size=24,
                   color=turbo_color, anchor="topright")

        message = game.feed.message
        if message:
            self._text(surface, message, (width // 2, height // 3), size=28,
                       color=MESSAGE_COLOR, anchor="center")

        if game.announcement.show:
            self._text(surface, f"LEVEL {game.announcement.level}", (width // 2, height // 2),
                       size=96, anchor="center")

        y = height - m
        for line in reversed(self.shop_lines(game)):
            rect = self._text(surface, line, (m, y), size=24, anchor="bottomleft")
            y = rect.top - 4
        self._text(surface, f"Manual power x{progression.manual_power:.1f}  [+/-]  [R] reset",
                   (width - m, height - m), size=20, color=MUTED_COLOR, anchor="bottomright")
