import json
import random

import pytest

from pixel_vacuum.core.game import Game
from pixel_vacuum.core.progression import ProgressState, Upgrades
from pixel_vacuum.services.storage import (
    JsonFileStore,
    ProgressLoadError,
    ProgressRepository,
    deserialize_progress,
    serialize_progress,
)

KEY = "pixel_vacuum_save_v2"


@pytest.fixture
def store(tmp_path):
    return JsonFileStore(tmp_path / "save" / "store.json")


@pytest.fixture
def repository(store):
    return ProgressRepository(store=store, key=KEY, default_turbo_cost=20)


def test_round_trip(repository):
    state = ProgressState(level=7, coins=321, upgrades=Upgrades(power=2, size=3), turbo_cost=65)
    repository.save(state)
    assert repository.load() == state


def test_record_uses_the_documented_field_names():
    raw = serialize_progress(ProgressState(level=2, coins=5, upgrades=Upgrades(1, 0), turbo_cost=35))
    assert json.loads(raw) == {
        "level": 2,
        "coins": 5,
        "upgrades": {"power": 1, "size": 0},
        "turboCost": 35,
    }


def test_missing_record_falls_back_to_defaults(repository):
    with pytest.raises(ProgressLoadError):
        repository.load()
    assert repository.load_or_default() == ProgressState(level=1, coins=0, upgrades=Upgrades(), turbo_cost=20)


def test_corrupt_record_falls_back_to_defaults(store, repository):
    store.set(KEY, "{not json")
    assert repository.load_or_default() == repository.default_state()

    store.set(KEY, "[1, 2, 3]")
    assert repository.load_or_default() == repository.default_state()


def test_corrupt_store_file_is_treated_as_empty(store, repository):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("garbage")
    assert store.get(KEY) is None
    assert repository.load_or_default() == repository.default_state()


def test_bad_fields_are_replaced_individually():
    raw = json.dumps({"level": 0, "coins": "many", "upgrades": {"power": 4}, "turboCost": True})
    state = deserialize_progress(raw, default_turbo_cost=20)
    assert state == ProgressState(level=1, coins=0, upgrades=Upgrades(power=4, size=0), turbo_cost=20)


def test_records_under_other_keys_are_ignored(store, repository):
    store.set("pixel_vacuum_save_v1", serialize_progress(ProgressState(level=9)))
    assert repository.load_or_default().level == 1


def test_every_change_overwrites_the_record(config, store, repository):
    game = Game(config, progress=repository.load_or_default(), rng=random.Random(2), size=(800, 600))
    game.progression.subscribe(repository.save)
    assert store.get(KEY) is None

    game.progression.record_collection(3, 3)
    assert json.loads(store.get(KEY))["coins"] == 3

    game.progression.advance_level()
    assert json.loads(store.get(KEY)) == {
        "level": 2,
        "coins": 3,
        "upgrades": {"power": 0, "size": 0},
        "turboCost": 20,
    }


def test_store_keeps_other_keys(store):
    store.set("a", "1")
    store.set("b", "2")
    assert store.get("a") == "1"
    assert store.get("b") == "2"


@pytest.mark.parametrize(
    "raw",
    ['{"level": NaN}', '{"coins": Infinity}', '{"level": 1e400}'],
)
def test_non_finite_numbers_fall_back_to_defaults(store, repository, raw):
    store.set(KEY, raw)
    assert repository.load_or_default() == repository.default_state()
