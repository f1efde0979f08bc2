"""Game orchestration: one tick of physics plus the progression rules around it."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from pixel_vacuum.core.config import AppConfig
from pixel_vacuum.core.progression import ProgressState, Progression
from pixel_vacuum.hardware.haptics import HapticNotifier, NullHapticNotifier
from pixel_vacuum.input.touch import VacuumState
from pixel_vacuum.physics.entities import EntityFactory
from pixel_vacuum.physics.particles import ParticleSystem, StepResult, VacuumField
from pixel_vacuum.services.motivation import MotivationFeed

logger = logging.getLogger(__name__)


@dataclass
class Announcement:
    show: bool = False
    level: int = 0
    hide_at: float = 0.0


class Game:
    """Owns the simulation state and advances it one frame at a time.

    Nothing here touches the display, so the whole loop can be driven from
    tests with synthetic timestamps and pointer states.
    """

    def __init__(
        self,
        config: AppConfig,
        progress: Optional[ProgressState] = None,
        haptics: Optional[HapticNotifier] = None,
        feed: Optional[MotivationFeed] = None,
        rng: Optional[random.Random] = None,
        size: tuple = (0, 0),
    ) -> None:
        self.config = config
        self.rng = rng or random.Random()
        self.progression = Progression(
            economy=config.economy,
            vacuum=config.vacuum,
            levels=config.levels,
            difficulty=config.difficulty,
            state=progress,
        )
        self.factory = EntityFactory(
            levels=config.levels,
            confetti=config.confetti,
            rarity_rules=config.rarity,
            rng=self.rng,
        )
        width, height = size
        self.particles = ParticleSystem(
            config=config.physics,
            confetti_config=config.confetti,
            width=width,
            height=height,
            rng=self.rng,
        )
        self.haptics = haptics or NullHapticNotifier()
        self.feed = feed or MotivationFeed(config.feedback, rng=self.rng)
        self.announcement = Announcement()
        self.flash_until = 0.0
        # no wave on the field until spawn_level runs
        self._transitioning = True

    # --- viewport --------------------------------------------------------

    @property
    def width(self) -> float:
        return self.particles.width

    @property
    def height(self) -> float:
        return self.particles.height

    def resize(self, width: float, height: float) -> None:
        self.particles.resize(width, height)
        logger.debug("Playfield resized to %dx%d", width, height)

    # --- derived state ---------------------------------------------------

    @property
    def remaining(self) -> int:
        return len(self.particles.pixels)

    @property
    def is_ending(self) -> bool:
        return self.remaining <= self.config.difficulty.ending_threshold

    def field_radius(self) -> float:
        return self.progression.field_radius(self.width)

    def is_size_maxed(self) -> bool:
        return self.progression.is_size_maxed(self.width)

    def flash_active(self, now: float) -> bool:
        return now < self.flash_until

    def vacuum_field(self) -> VacuumField:
        return VacuumField(
            radius=self.field_radius(),
            suck_radius=self.config.vacuum.suck_radius,
            power=self.progression.attraction_power(),
            resistance=self.progression.level_resistance(),
            turbo=self.progression.turbo_active,
            base_reward=self.config.economy.base_reward,
        )

    def _heavy_level(self) -> Optional[int]:
        levels = [rule.min_level for rule in self.config.rarity if rule.name == "heavy"]
        return min(levels) if levels else None

    # --- level flow ------------------------------------------------------

    def spawn_level(self, now: float) -> int:
        level = self.progression.level
        count = self.progression.spawn_count(level)
        center_x, center_y = self.width / 2, self.height / 2

        self.particles.confetti.extend(self.factory.create_confetti_burst(center_x, center_y))
        self.particles.pixels = self.factory.create_pixels(count, self.width, self.height, level)
        self.progression.start_level(count)

        self.announcement = Announcement(
            show=True,
            level=level,
            hide_at=now + self.config.levels.announcement_duration,
        )
        self.flash_until = now + self.config.levels.flash_duration
        if level == self._heavy_level():
            self.feed.set_message("Warning: heavy pixels!")
        else:
            self.feed.set_message(f"Level {level} started!")

        self._transitioning = False
        logger.info("Level %d spawned with %d pixels", level, count)
        return count

    def force_reset(self, now: float) -> int:
        return self.spawn_level(now)

    def update(self, now: float, vacuum: VacuumState) -> StepResult:
        """Advance one frame. Levels only advance once spawn_level has run."""
        vacuum_field = self.vacuum_field()
        result = self.particles.update(now, vacuum, vacuum_field)

        if result.collected:
            previous_total = self.progression.total_collected
            self.progression.record_collection(result.collected, result.coins)
            self.haptics.impact("medium" if vacuum_field.turbo else "light")
            self.feed.maybe_random_phrase()
            self.feed.on_collected(previous_total, self.progression.total_collected)

        if not self.particles.pixels and not self._transitioning:
            self._transitioning = True
            self.progression.advance_level()
            self.spawn_level(now)

        if self.announcement.show and now >= self.announcement.hide_at:
            self.announcement.show = False
        return result

    # --- player actions --------------------------------------------------

    def buy_power(self) -> bool:
        return self.progression.buy_power()

    def buy_size(self) -> bool:
        return self.progression.buy_size(self.width)

    def activate_turbo(self) -> bool:
        if not self.progression.activate_turbo():
            return False
        self.feed.set_message("SUPER POWER ACTIVATED!")
        self.haptics.success()
        return True

    def countdown_turbo(self) -> None:
        self.progression.countdown_turbo()
