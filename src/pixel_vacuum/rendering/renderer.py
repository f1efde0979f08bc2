#!/usr/bin/env python3
"""
Renderer for the playfield
Collects draw operations per layer and executes them in layer order
"""

import math
from enum import IntEnum
from typing import Callable, List, Tuple

import pygame

from pixel_vacuum.core.config import AppConfig
from pixel_vacuum.core.game import Game
from pixel_vacuum.input.touch import VacuumState
from pixel_vacuum.physics.entities import ConfettiParticle, Pixel
from pixel_vacuum.rendering.sprites import glow_sprite, quantize_alpha, square_sprite

FLASH_COLOR = (22, 78, 99)
TURBO_COLOR = (255, 120, 0)
IDLE_RING_COLOR = (255, 255, 255, 13)
OUTLINE_COLOR = (255, 255, 255)


class RenderLayer(IntEnum):
    """Layer ordering for rendering (lower = drawn first, appears behind)"""
    BACKGROUND = 0
    CONFETTI = 10
    PIXELS = 20
    VACUUM = 30
    UI_TEXT = 50


def pulse(now: float, period: float) -> float:
    """Oscillate between 0 and 1; `period` is in seconds per radian"""
    return (math.sin(now / period) + 1) / 2


class Renderer:
    """Draws the game state onto a surface"""

    def __init__(self, config: AppConfig, screen: pygame.Surface):
        """
        Initialize the renderer

        Args:
            config: Application configuration
            screen: Surface to draw onto
        """
        self.config = config
        self.screen = screen
        self.draw_operations: List[Tuple[int, Callable[[pygame.Surface], None]]] = []

    def add_draw_operation(self, layer: int, draw_func: Callable[[pygame.Surface], None]):
        """
        Add a drawing operation to the render queue

        Args:
            layer: Layer number (lower = drawn first/behind)
            draw_func: Function that takes a surface and draws to it
        """
        self.draw_operations.append((layer, draw_func))

    def render(self):
        """Execute all queued operations in layer order, then clear the queue"""
        self.draw_operations.sort(key=lambda x: x[0])
        for _layer, draw_func in self.draw_operations:
            draw_func(self.screen)
        self.draw_operations.clear()

    def draw(self, game: Game, vacuum: VacuumState, now: float):
        """
        Queue and render one frame

        Args:
            game: Game whose entities are drawn
            vacuum: Current pointer field state
            now: Time in seconds, drives pulsing effects
        """
        background = FLASH_COLOR if game.flash_active(now) else self.config.window.background_color
        turbo = game.progression.turbo_active
        radius = game.field_radius()
        ending = game.is_ending

        self.add_draw_operation(RenderLayer.BACKGROUND, lambda s: s.fill(background))
        self.add_draw_operation(
            RenderLayer.CONFETTI, lambda s: self._draw_confetti(s, game.particles.confetti)
        )
        self.add_draw_operation(
            RenderLayer.PIXELS, lambda s: self._draw_pixels(s, game.particles.pixels, ending, now)
        )
        if vacuum.active:
            self.add_draw_operation(
                RenderLayer.VACUUM, lambda s: self._draw_vacuum(s, vacuum, radius, turbo, now)
            )
        self.render()

    def _draw_confetti(self, surface: pygame.Surface, confetti: List[ConfettiParticle]):
        for particle in confetti:
            alpha = quantize_alpha(particle.life / particle.max_life)
            sprite = square_sprite(round(particle.size), particle.color, alpha)
            rotated = pygame.transform.rotate(sprite, -math.degrees(particle.rotation))
            rect = rotated.get_rect(center=(int(particle.position[0]), int(particle.position[1])))
            surface.blit(rotated, rect)

    def _draw_pixels(self, surface: pygame.Surface, pixels: List[Pixel], ending: bool, now: float):
        scale = self.config.difficulty.ending_scale if ending else 1.0
        glow_pulse = pulse(now, 0.15)

        for pixel in pixels:
            draw_size = max(round(pixel.size * scale), 1)
            center = (int(pixel.position[0]), int(pixel.position[1]))

            if ending:
                glow_radius = int(draw_size / 2 + 15 + glow_pulse * 15)
                glow = glow_sprite(glow_radius, pixel.color, pixel.glow_color[3])
                surface.blit(glow, glow.get_rect(center=center))
            elif pixel.is_gold:
                glow = glow_sprite(int(draw_size * 2), pixel.glow_color[:3], pixel.glow_color[3])
                surface.blit(glow, glow.get_rect(center=center))

            sprite = square_sprite(draw_size, pixel.color, quantize_alpha(pixel.opacity))
            rect = sprite.get_rect(center=center)
            surface.blit(sprite, rect)
            if pixel.is_heavy:
                pygame.draw.rect(surface, OUTLINE_COLOR, rect, width=1)

    def _draw_vacuum(
        self,
        surface: pygame.Surface,
        vacuum: VacuumState,
        radius: float,
        turbo: bool,
        now: float,
    ):
        suck_radius = int(self.config.vacuum.suck_radius)
        if turbo:
            ring_pulse = pulse(now, 0.1)
            ring_color = (*TURBO_COLOR, int((0.4 + ring_pulse * 0.4) * 255))
            ring_width = int(4 + ring_pulse * 4)
            disk_color = (*TURBO_COLOR, 51)
        else:
            ring_color = IDLE_RING_COLOR
            ring_width = 2
            disk_color = (255, 255, 255, 26)

        halo = 15 if turbo else 0
        extent = int(radius) + ring_width + halo
        overlay = pygame.Surface((extent * 2 + 1, extent * 2 + 1), pygame.SRCALPHA)
        center = (extent, extent)
        if turbo:
            glow = glow_sprite(extent, TURBO_COLOR, 60)
            overlay.blit(glow, glow.get_rect(center=center))
        pygame.draw.circle(overlay, ring_color, center, int(radius), width=ring_width)
        pygame.draw.circle(overlay, disk_color, center, suck_radius)
        surface.blit(overlay, overlay.get_rect(center=(int(vacuum.x), int(vacuum.y))))
