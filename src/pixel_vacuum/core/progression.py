"""Level, currency, upgrade and turbo bookkeeping."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional

from pixel_vacuum.core.config import DifficultyConfig, EconomyConfig, LevelConfig, VacuumConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Upgrades:
    power: int = 0
    size: int = 0


@dataclass(frozen=True)
class ProgressState:
    """The persisted part of a player's progress."""

    level: int = 1
    coins: int = 0
    upgrades: Upgrades = field(default_factory=Upgrades)
    turbo_cost: int = 20


ChangeListener = Callable[[ProgressState], None]


class Progression:
    """Owns the economy and level counters and enforces their rules.

    Rejected operations (not enough coins, turbo already running, size
    already maxed, shop still locked) return False and leave every counter
    untouched. Listeners are notified with a fresh ProgressState after every
    change to the persisted fields.
    """

    def __init__(
        self,
        economy: EconomyConfig,
        vacuum: VacuumConfig,
        levels: LevelConfig,
        difficulty: DifficultyConfig,
        state: Optional[ProgressState] = None,
    ) -> None:
        self.economy = economy
        self.vacuum = vacuum
        self.levels = levels
        self.difficulty = difficulty

        state = state or ProgressState(turbo_cost=economy.turbo_initial_cost)
        self.level = state.level
        self.coins = state.coins
        self.upgrades = state.upgrades
        self.turbo_cost = state.turbo_cost

        self.score = 0
        self.total = 0
        self.total_collected = 0
        self.turbo_time_left = 0.0
        self.manual_power = 1.0
        self._listeners: List[ChangeListener] = []

    # --- persisted state -------------------------------------------------

    @property
    def state(self) -> ProgressState:
        return ProgressState(
            level=self.level,
            coins=self.coins,
            upgrades=self.upgrades,
            turbo_cost=self.turbo_cost,
        )

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        snapshot = self.state
        for listener in self._listeners:
            listener(snapshot)

    # --- vacuum field ----------------------------------------------------

    def max_field_radius(self, width: float) -> float:
        return width * self.vacuum.max_screen_ratio

    def _uncapped_radius(self) -> float:
        return self.vacuum.base_radius + self.upgrades.size * self.vacuum.radius_per_level

    def field_radius(self, width: float) -> float:
        return min(self._uncapped_radius(), self.max_field_radius(width))

    def is_size_maxed(self, width: float) -> bool:
        return self._uncapped_radius() >= self.max_field_radius(width)

    @property
    def turbo_active(self) -> bool:
        return self.turbo_time_left > 0

    def attraction_power(self) -> float:
        power = self.vacuum.base_force + self.upgrades.power * self.vacuum.force_per_level
        power *= self.manual_power
        if self.turbo_active:
            power *= self.economy.turbo_multiplier
        return power

    def set_manual_power(self, value: float) -> float:
        low, high = self.vacuum.manual_power_min, self.vacuum.manual_power_max
        self.manual_power = round(min(max(value, low), high), 2)
        return self.manual_power

    def nudge_manual_power(self, steps: int) -> float:
        return self.set_manual_power(self.manual_power + steps * self.vacuum.manual_power_step)

    # --- shop ------------------------------------------------------------

    def upgrade_cost(self, upgrade_level: int) -> int:
        return math.floor(
            self.economy.upgrade_base_cost * self.economy.upgrade_cost_multiplier ** upgrade_level
        )

    @property
    def power_cost(self) -> int:
        return self.upgrade_cost(self.upgrades.power)

    @property
    def size_cost(self) -> int:
        return self.upgrade_cost(self.upgrades.size)

    @property
    def shop_unlocked(self) -> bool:
        return self.level >= self.economy.shop_unlock_level

    def buy_power(self) -> bool:
        cost = self.power_cost
        if not self.shop_unlocked or self.coins < cost:
            return False
        self.coins -= cost
        self.upgrades = replace(self.upgrades, power=self.upgrades.power + 1)
        logger.info("Power upgraded to %d for %d coins", self.upgrades.power, cost)
        self._changed()
        return True

    def buy_size(self, width: float) -> bool:
        cost = self.size_cost
        if not self.shop_unlocked or self.is_size_maxed(width) or self.coins < cost:
            return False
        self.coins -= cost
        self.upgrades = replace(self.upgrades, size=self.upgrades.size + 1)
        logger.info("Size upgraded to %d for %d coins", self.upgrades.size, cost)
        self._changed()
        return True

    # --- turbo -----------------------------------------------------------

    def activate_turbo(self) -> bool:
        if self.turbo_active or self.coins < self.turbo_cost:
            return False
        self.coins -= self.turbo_cost
        self.turbo_cost += self.economy.turbo_cost_step
        self.turbo_time_left = self.economy.turbo_duration
        logger.info("Turbo activated, next activation costs %d", self.turbo_cost)
        self._changed()
        return True

    def countdown_turbo(self, step: Optional[float] = None) -> None:
        if not self.turbo_active:
            return
        step = self.economy.turbo_tick if step is None else step
        # Rounded so repeated 0.1 steps land exactly on zero.
        self.turbo_time_left = max(0.0, round(self.turbo_time_left - step, 6))

    # --- levels ----------------------------------------------------------

    def spawn_count(self, level: Optional[int] = None) -> int:
        level = self.level if level is None else level
        exponent = level - 1
        if self.levels.growth_mode == "saturating":
            exponent = min(level, self.levels.saturation_level) - 1
        return math.floor(self.levels.initial_count * self.levels.growth_rate ** exponent)

    def level_resistance(self, level: Optional[int] = None) -> float:
        level = self.level if level is None else level
        excess = level - self.difficulty.resistance_start_level
        return 1.0 + max(0, excess) * self.difficulty.resistance_step

    def start_level(self, total: int) -> None:
        self.score = 0
        self.total = total

    def advance_level(self) -> int:
        self.level += 1
        logger.info("Level cleared, advancing to level %d", self.level)
        self._changed()
        return self.level

    def record_collection(self, count: int, coins: int) -> None:
        if count <= 0:
            return
        self.score += count
        self.total_collected += count
        self.coins += coins
        self._changed()
