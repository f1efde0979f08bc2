"""Per-frame pixel and confetti physics."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List

from pixel_vacuum.core.config import ConfettiConfig, PhysicsConfig
from pixel_vacuum.input.touch import VacuumState
from pixel_vacuum.physics.entities import ConfettiParticle, Pixel


@dataclass(frozen=True)
class VacuumField:
    """Snapshot of the field parameters for a single tick."""

    radius: float
    suck_radius: float
    power: float
    resistance: float = 1.0
    turbo: bool = False
    base_reward: int = 1


@dataclass
class StepResult:
    collected: int = 0
    coins: int = 0


@dataclass
class ParticleSystem:
    """Live entities of the playfield.

    The system is advanced once per animation frame. Velocities are in
    pixels per frame, so integration does not scale by elapsed time; `now`
    is only used for the out-of-bounds grace timer.
    """

    config: PhysicsConfig
    confetti_config: ConfettiConfig
    width: float = 0.0
    height: float = 0.0
    pixels: List[Pixel] = field(default_factory=list)
    confetti: List[ConfettiParticle] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random)

    def update(self, now: float, vacuum: VacuumState, vacuum_field: VacuumField) -> StepResult:
        result = StepResult()
        survivors: List[Pixel] = []
        for pixel in self.pixels:
            self._integrate(pixel)
            self._handle_bounds(pixel, now)
            if vacuum.active and self._apply_vacuum(pixel, vacuum, vacuum_field):
                result.collected += 1
                result.coins += vacuum_field.base_reward * pixel.reward_multiplier
                continue
            survivors.append(pixel)
        self.pixels = survivors
        self._update_confetti()
        return result

    def _integrate(self, pixel: Pixel) -> None:
        friction = self.config.friction
        pixel.position[0] += pixel.velocity[0]
        pixel.position[1] += pixel.velocity[1]
        pixel.velocity[0] *= friction
        pixel.velocity[1] *= friction

    def _handle_bounds(self, pixel: Pixel, now: float) -> None:
        x, y = pixel.position
        if 0 <= x <= self.width and 0 <= y <= self.height:
            pixel.outside_since = None
            return

        if pixel.outside_since is None:
            pixel.outside_since = now
        elif now - pixel.outside_since > self.config.grace_period:
            self._recenter(pixel)

        if pixel.position[0] < 0:
            pixel.position[0] = 0.0
            pixel.velocity[0] = abs(pixel.velocity[0])
        elif pixel.position[0] > self.width:
            pixel.position[0] = float(self.width)
            pixel.velocity[0] = -abs(pixel.velocity[0])
        if pixel.position[1] < 0:
            pixel.position[1] = 0.0
            pixel.velocity[1] = abs(pixel.velocity[1])
        elif pixel.position[1] > self.height:
            pixel.position[1] = float(self.height)
            pixel.velocity[1] = -abs(pixel.velocity[1])

    def _recenter(self, pixel: Pixel) -> None:
        jitter = self.config.recenter_jitter
        pixel.position[0] = self.width / 2 + (self.rng.random() - 0.5) * jitter
        pixel.position[1] = self.height / 2 + (self.rng.random() - 0.5) * jitter
        pixel.velocity[0] = 0.0
        pixel.velocity[1] = 0.0
        pixel.outside_since = None

    def _apply_vacuum(self, pixel: Pixel, vacuum: VacuumState, vacuum_field: VacuumField) -> bool:
        """Pull the pixel toward the field center. Returns True if it was collected."""
        dx = vacuum.x - pixel.position[0]
        dy = vacuum.y - pixel.position[1]
        distance = math.hypot(dx, dy)

        # suck_radius > 0, so a zero distance never reaches the division below
        if distance < vacuum_field.suck_radius:
            return True
        if distance >= vacuum_field.radius:
            return False

        mass = pixel.mass_factor / vacuum_field.resistance
        force = (1 - distance / vacuum_field.radius) * vacuum_field.power * mass
        pixel.velocity[0] += dx / distance * force
        pixel.velocity[1] += dy / distance * force

        if vacuum_field.turbo:
            jitter = self.config.turbo_jitter
            pixel.position[0] += (self.rng.random() - 0.5) * jitter
            pixel.position[1] += (self.rng.random() - 0.5) * jitter
        return False

    def _update_confetti(self) -> None:
        cfg = self.confetti_config
        alive: List[ConfettiParticle] = []
        for particle in self.confetti:
            particle.position[0] += particle.velocity[0]
            particle.position[1] += particle.velocity[1]
            particle.velocity[1] += cfg.gravity
            particle.velocity[0] *= cfg.damping
            particle.rotation += particle.rotation_speed
            particle.life -= 1
            if particle.life > 0:
                alive.append(particle)
        self.confetti = alive

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        margin = self.config.resize_margin
        for pixel in self.pixels:
            if pixel.position[0] < 0:
                pixel.position[0] = margin
            elif pixel.position[0] > width:
                pixel.position[0] = width - margin
            if pixel.position[1] < 0:
                pixel.position[1] = margin
            elif pixel.position[1] > height:
                pixel.position[1] = height - margin
