"""Key-value persistence for player progress."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from pixel_vacuum.core.progression import ProgressState, Upgrades

logger = logging.getLogger(__name__)


class ProgressLoadError(Exception):
    """Raised when a stored progress record is missing or unreadable."""


class JsonFileStore:
    """A tiny string key-value store backed by one JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            logger.warning("Store %s is unreadable, starting empty: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2))
        tmp_path.replace(self.path)


def _positive_int(value: Any, default: int, minimum: int) -> int:
    # bool is an int subclass but never a valid counter
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not math.isfinite(value):
        return default
    value = int(value)
    return value if value >= minimum else default


def serialize_progress(state: ProgressState) -> str:
    return json.dumps(
        {
            "level": state.level,
            "coins": state.coins,
            "upgrades": {"power": state.upgrades.power, "size": state.upgrades.size},
            "turboCost": state.turbo_cost,
        }
    )


def deserialize_progress(raw: str, default_turbo_cost: int) -> ProgressState:
    """Parse a stored record, substituting defaults for missing or bad fields."""
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ProgressLoadError(f"corrupt progress record: {e}") from e
    if not isinstance(data, dict):
        raise ProgressLoadError("progress record is not an object")

    upgrades = data.get("upgrades")
    if not isinstance(upgrades, dict):
        upgrades = {}

    return ProgressState(
        level=_positive_int(data.get("level"), 1, 1),
        coins=_positive_int(data.get("coins"), 0, 0),
        upgrades=Upgrades(
            power=_positive_int(upgrades.get("power"), 0, 0),
            size=_positive_int(upgrades.get("size"), 0, 0),
        ),
        turbo_cost=_positive_int(data.get("turboCost"), default_turbo_cost, 1),
    )


@dataclass
class ProgressRepository:
    store: JsonFileStore
    key: str
    default_turbo_cost: int = 20

    def __post_init__(self) -> None:
        self._last_saved: Optional[str] = None

    def default_state(self) -> ProgressState:
        return ProgressState(turbo_cost=self.default_turbo_cost)

    def load(self) -> ProgressState:
        raw = self.store.get(self.key)
        if raw is None:
            raise ProgressLoadError(f"no progress stored under {self.key!r}")
        state = deserialize_progress(raw, self.default_turbo_cost)
        self._last_saved = serialize_progress(state)
        return state

    def load_or_default(self) -> ProgressState:
        try:
            state = self.load()
        except ProgressLoadError as e:
            logger.info("Using default progress: %s", e)
            return self.default_state()
        logger.info("Loaded progress: level %d, %d coins", state.level, state.coins)
        return state

    def save(self, state: ProgressState) -> None:
        raw = serialize_progress(state)
        if raw == self._last_saved:
            return
        try:
            self.store.set(self.key, raw)
        except OSError as e:
            logger.error("Failed to save progress: %s", e)
            return
        self._last_saved = raw
