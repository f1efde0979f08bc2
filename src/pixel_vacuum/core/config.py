"""Configuration models and loaders."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

Color = Tuple[int, int, int]
GlowColor = Tuple[int, int, int, int]


NEON_PALETTE: Tuple[Tuple[Color, GlowColor], ...] = (
    ((0, 242, 255), (0, 242, 255, 153)),     # Cyan
    ((255, 0, 255), (255, 0, 255, 153)),     # Magenta
    ((57, 255, 20), (57, 255, 20, 153)),     # Lime
    ((255, 240, 31), (255, 240, 31, 153)),   # Yellow
    ((255, 77, 0), (255, 77, 0, 153)),       # Orange
    ((138, 43, 226), (138, 43, 226, 153)),   # Violet
)


@dataclass(frozen=True)
class WindowConfig:
    size: Tuple[int, int] = (1280, 720)
    fullscreen: bool = False
    resizable: bool = True
    title: str = "Pixel Vacuum"
    target_fps: int = 60
    background_color: Color = (15, 23, 42)


@dataclass(frozen=True)
class PhysicsConfig:
    friction: float = 0.94
    grace_period: float = 1.0
    recenter_jitter: float = 50.0
    turbo_jitter: float = 1.5
    resize_margin: float = 10.0


@dataclass(frozen=True)
class VacuumConfig:
    base_radius: float = 60.0
    radius_per_level: float = 20.0
    max_screen_ratio: float = 0.2
    suck_radius: float = 15.0
    base_force: float = 0.8
    force_per_level: float = 0.4
    manual_power_min: float = 0.2
    manual_power_max: float = 2.5
    manual_power_step: float = 0.1


@dataclass(frozen=True)
class EconomyConfig:
    upgrade_base_cost: int = 50
    upgrade_cost_multiplier: float = 1.8
    shop_unlock_level: int = 3
    base_reward: int = 1
    turbo_initial_cost: int = 20
    turbo_cost_step: int = 15
    turbo_duration: float = 5.0
    turbo_multiplier: float = 8.0
    turbo_tick: float = 0.1


@dataclass(frozen=True)
class LevelConfig:
    initial_count: int = 80
    growth_rate: float = 1.2
    growth_mode: str = "exponential"
    saturation_level: int = 15
    spawn_padding: float = 30.0
    min_safe_extent: float = 20.0
    announcement_duration: float = 1.5
    flash_duration: float = 0.3


@dataclass(frozen=True)
class DifficultyConfig:
    ending_threshold: int = 5
    ending_scale: float = 2.5
    resistance_start_level: int = 10
    resistance_step: float = 0.05


@dataclass(frozen=True)
class ConfettiConfig:
    count: int = 50
    speed_min: float = 5.0
    speed_max: float = 15.0
    life_min: float = 40.0
    life_max: float = 100.0
    size_min: float = 2.0
    size_max: float = 6.0
    rotation_speed: float = 0.2
    gravity: float = 0.25
    damping: float = 0.98


@dataclass(frozen=True)
class RarityRule:
    name: str
    min_level: int
    probability: float
    size_min: float
    size_max: float
    mass_factor: float
    reward_multiplier: int
    color: Color
    glow_color: GlowColor


DEFAULT_RARITY_RULES: Tuple[RarityRule, ...] = (
    RarityRule(
        name="gold",
        min_level=20,
        probability=0.05,
        size_min=6.0,
        size_max=8.0,
        mass_factor=0.25,
        reward_multiplier=5,
        color=(255, 215, 0),
        glow_color=(255, 215, 0, 180),
    ),
    RarityRule(
        name="heavy",
        min_level=10,
        probability=0.2,
        size_min=5.0,
        size_max=7.0,
        mass_factor=0.33,
        reward_multiplier=1,
        color=(168, 85, 247),
        glow_color=(168, 85, 247, 153),
    ),
)


@dataclass(frozen=True)
class FeedbackConfig:
    milestone_interval: int = 25
    random_phrase_chance: float = 0.02
    fallback_phrase: str = "Great!"
    empty_phrase: str = "Keep it up!"
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    model: str = "gemini-2.0-flash"
    api_key_env: str = "GEMINI_API_KEY"
    language: str = "English"
    timeout: float = 5.0


@dataclass(frozen=True)
class HapticsConfig:
    enabled: bool = False
    port: str = "/dev/ttyACM0"
    baud_rate: int = 115200
    timeout: float = 0.01


@dataclass(frozen=True)
class StorageConfig:
    path: str = "save/pixel_vacuum.json"
    key: str = "pixel_vacuum_save_v2"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    log_file: str = "logs/pixel_vacuum.log"
    fps_log_interval: int = 600


@dataclass(frozen=True)
class AppConfig:
    window: WindowConfig = field(default_factory=WindowConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    vacuum: VacuumConfig = field(default_factory=VacuumConfig)
    economy: EconomyConfig = field(default_factory=EconomyConfig)
    levels: LevelConfig = field(default_factory=LevelConfig)
    difficulty: DifficultyConfig = field(default_factory=DifficultyConfig)
    confetti: ConfettiConfig = field(default_factory=ConfettiConfig)
    rarity: Tuple[RarityRule, ...] = DEFAULT_RARITY_RULES
    feedback: FeedbackConfig = field(default_factory=FeedbackConfig)
    haptics: HapticsConfig = field(default_factory=HapticsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _load_json(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text())


def _as_color(value: Any) -> Tuple[int, ...]:
    return tuple(int(channel) for channel in value)


def _load_rarity(entries: Optional[list]) -> Tuple[RarityRule, ...]:
    if entries is None:
        return DEFAULT_RARITY_RULES
    rules = []
    for entry in entries:
        rules.append(
            RarityRule(
                name=entry["name"],
                min_level=int(entry["min_level"]),
                probability=float(entry["probability"]),
                size_min=float(entry["size_min"]),
                size_max=float(entry["size_max"]),
                mass_factor=float(entry["mass_factor"]),
                reward_multiplier=int(entry.get("reward_multiplier", 1)),
                color=_as_color(entry["color"]),
                glow_color=_as_color(entry["glow_color"]),
            )
        )
    return tuple(rules)


def parse_app_config(payload: Dict[str, Any]) -> AppConfig:
    """Build an AppConfig from a decoded JSON payload, defaulting missing keys."""
    window_payload = dict(payload.get("window", {}))
    if "size" in window_payload:
        window_payload["size"] = tuple(window_payload["size"])
    if "background_color" in window_payload:
        window_payload["background_color"] = _as_color(window_payload["background_color"])

    return AppConfig(
        window=WindowConfig(**window_payload),
        physics=PhysicsConfig(**payload.get("physics", {})),
        vacuum=VacuumConfig(**payload.get("vacuum", {})),
        economy=EconomyConfig(**payload.get("economy", {})),
        levels=LevelConfig(**payload.get("levels", {})),
        difficulty=DifficultyConfig(**payload.get("difficulty", {})),
        confetti=ConfettiConfig(**payload.get("confetti", {})),
        rarity=_load_rarity(payload.get("rarity")),
        feedback=FeedbackConfig(**payload.get("feedback", {})),
        haptics=HapticsConfig(**payload.get("haptics", {})),
        storage=StorageConfig(**payload.get("storage", {})),
        logging=LoggingConfig(**payload.get("logging", {})),
    )


def load_app_config(path: Path) -> AppConfig:
    if not path.exists():
        return AppConfig()
    return parse_app_config(_load_json(path))
