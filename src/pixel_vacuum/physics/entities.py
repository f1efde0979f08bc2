"""Pixel and confetti entities and the factory that spawns them."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from pixel_vacuum.core.config import (
    NEON_PALETTE,
    Color,
    ConfettiConfig,
    GlowColor,
    LevelConfig,
    RarityRule,
)


@dataclass
class Pixel:
    id: int
    position: List[float]
    velocity: List[float]
    size: float
    color: Color
    glow_color: GlowColor
    opacity: float
    is_heavy: bool = False
    is_gold: bool = False
    mass_factor: float = 1.0
    reward_multiplier: int = 1
    outside_since: Optional[float] = None


@dataclass
class ConfettiParticle:
    position: List[float]
    velocity: List[float]
    color: Color
    size: float
    life: float
    max_life: float
    rotation: float = 0.0
    rotation_speed: float = 0.0


@dataclass
class EntityFactory:
    """Builds randomized pixels and confetti bursts.

    Rarity rules are evaluated in order and the first rule whose level gate
    passes and whose roll succeeds decides the variant, so a rule listed
    earlier takes precedence when several would fire.
    """

    levels: LevelConfig
    confetti: ConfettiConfig
    rarity_rules: Sequence[RarityRule] = ()
    rng: random.Random = field(default_factory=random.Random)

    def roll_rarity(self, level: int) -> Optional[RarityRule]:
        for rule in self.rarity_rules:
            if level >= rule.min_level and self.rng.random() < rule.probability:
                return rule
        return None

    def create_pixel(self, pixel_id: int, width: float, height: float, level: int) -> Pixel:
        padding = self.levels.spawn_padding
        safe_width = max(width - padding * 2, self.levels.min_safe_extent)
        safe_height = max(height - padding * 2, self.levels.min_safe_extent)

        rule = self.roll_rarity(level)
        if rule is not None:
            color, glow_color = rule.color, rule.glow_color
            size = self.rng.uniform(rule.size_min, rule.size_max)
        else:
            color, glow_color = self.rng.choice(NEON_PALETTE)
            size = self.rng.random() * 3 + 2.5

        return Pixel(
            id=pixel_id,
            position=[
                padding + self.rng.random() * safe_width,
                padding + self.rng.random() * safe_height,
            ],
            velocity=[(self.rng.random() - 0.5) * 2, (self.rng.random() - 0.5) * 2],
            size=size,
            color=color,
            glow_color=glow_color,
            opacity=0.6 + self.rng.random() * 0.4,
            is_heavy=rule is not None and rule.name == "heavy",
            is_gold=rule is not None and rule.name == "gold",
            mass_factor=rule.mass_factor if rule is not None else 1.0,
            reward_multiplier=rule.reward_multiplier if rule is not None else 1,
        )

    def create_pixels(self, count: int, width: float, height: float, level: int) -> List[Pixel]:
        return [self.create_pixel(index, width, height, level) for index in range(count)]

    def create_confetti_burst(self, x: float, y: float) -> List[ConfettiParticle]:
        cfg = self.confetti
        particles = []
        for _ in range(cfg.count):
            angle = self.rng.random() * math.pi * 2
            speed = self.rng.uniform(cfg.speed_min, cfg.speed_max)
            life = self.rng.uniform(cfg.life_min, cfg.life_max)
            color, _glow = self.rng.choice(NEON_PALETTE)
            particles.append(
                ConfettiParticle(
                    position=[x, y],
                    velocity=[math.cos(angle) * speed, math.sin(angle) * speed],
                    color=color,
                    size=self.rng.uniform(cfg.size_min, cfg.size_max),
                    life=life,
                    max_life=life,
                    rotation=self.rng.random() * math.pi * 2,
                    rotation_speed=(self.rng.random() - 0.5) * cfg.rotation_speed,
                )
            )
        return particles
