"""Tests for bonsaigotchi.simulation.snapshot - export, import and storage."""

import json
from pathlib import Path
from typing import Any

import pytest

from bonsaigotchi.errors import LoadFailed
from bonsaigotchi.pet.states import HealthCondition
from bonsaigotchi.simulation.config import SimulationConfig
from bonsaigotchi.simulation.engine import SimulationEngine
from bonsaigotchi.simulation.snapshot import (
    SCHEMA_VERSION,
    from_snapshot,
    load_or_new,
    new_game,
    read_snapshot,
    to_snapshot,
    write_snapshot,
)


@pytest.fixture
def played() -> SimulationEngine:
    """An engine with some history: actions, levels, a pending onset."""
    engine = SimulationEngine(config=SimulationConfig(time_speed=10, seed=9))
    engine.actions.water()
    engine.actions.feed("vegetables")
    engine.pet.experience += 250.0
    engine.run(ticks=100)
    engine.pet.stats.cleanliness = 5.0
    engine.run(ticks=3)
    return engine


@pytest.fixture
def snapshot(played: SimulationEngine) -> dict[str, Any]:
    return played.snapshot()


class TestRoundTrip:
    """Export then import reproduces the game."""

    def test_restores_pet_and_environment(self, played: SimulationEngine) -> None:
        pet, environment = from_snapshot(played.snapshot())
        assert pet == played.pet
        assert environment == played.environment

    def test_export_is_stable(self, snapshot: dict[str, Any]) -> None:
        pet, environment = from_snapshot(snapshot)
        assert to_snapshot(pet, environment) == snapshot

    def test_keeps_pending_onset(self, played: SimulationEngine) -> None:
        assert played.pet.health.onset_ticks[HealthCondition.PEST_INFESTATION] == 3
        pet, _ = from_snapshot(played.snapshot())
        assert pet.health.onset_ticks == played.pet.health.onset_ticks

    def test_through_json_file(self, tmp_path: Path, snapshot: dict[str, Any]) -> None:
        path = tmp_path / "saves" / "bonsai.json"
        write_snapshot(path, snapshot)
        assert read_snapshot(path) == snapshot
        assert not path.with_suffix(".json.tmp").exists()

    def test_snapshot_is_flat_json(self, snapshot: dict[str, Any]) -> None:
        assert json.loads(json.dumps(snapshot)) == snapshot
        assert snapshot["schema_version"] == SCHEMA_VERSION
        assert "mood" not in snapshot

    def test_derived_state_recomputed(self, played: SimulationEngine) -> None:
        pet, environment = from_snapshot(played.snapshot())
        restored = SimulationEngine(
            config=played.config,
            game=(pet, environment),
        )
        assert restored.derived == played.derived


class TestLoadFailed:
    """Malformed snapshots raise LoadFailed, never crash."""

    def test_not_a_mapping(self) -> None:
        with pytest.raises(LoadFailed):
            from_snapshot(["water", 50])

    def test_wrong_version(self, snapshot: dict[str, Any]) -> None:
        snapshot["schema_version"] = SCHEMA_VERSION + 1
        with pytest.raises(LoadFailed):
            from_snapshot(snapshot)

    @pytest.mark.parametrize("key", ["water", "level", "weather", "day", "inventory"])
    def test_missing_field(self, snapshot: dict[str, Any], key: str) -> None:
        del snapshot[key]
        with pytest.raises(LoadFailed):
            from_snapshot(snapshot)

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("water", "lots"),
            ("level", 2.5),
            ("level", True),
            ("level", 0),
            ("hour", 24),
            ("minute", 60),
            ("day", 0),
            ("season_length_days", 0),
            ("season_length_days", -3),
            ("weather", "hail"),
            ("health_condition", "flu"),
            ("morning_hours", [5]),
            ("morning_hours", [10, 5]),
            ("evening_hours", [18, 30]),
            ("inventory", {"burger": "three"}),
        ],
    )
    def test_bad_value(self, snapshot: dict[str, Any], key: str, value: Any) -> None:
        snapshot[key] = value
        with pytest.raises(LoadFailed):
            from_snapshot(snapshot)

    def test_season_must_match_day(self, snapshot: dict[str, Any]) -> None:
        snapshot["day"] = 1
        snapshot["season"] = "winter"
        with pytest.raises(LoadFailed):
            from_snapshot(snapshot)

    def test_weather_must_fit_season(self, snapshot: dict[str, Any]) -> None:
        snapshot["day"] = 31
        snapshot["season"] = "summer"
        snapshot["weather"] = "snow"
        with pytest.raises(LoadFailed):
            from_snapshot(snapshot)

    def test_stats_clamped_on_load(self, snapshot: dict[str, Any]) -> None:
        snapshot["water"] = 250
        pet, _ = from_snapshot(snapshot)
        assert pet.stats.water == 100.0


class TestStorage:
    """File helpers and the fallback to a new game."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(LoadFailed):
            read_snapshot(tmp_path / "missing.json")

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(LoadFailed):
            read_snapshot(path)

    def test_non_object_file(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(LoadFailed):
            read_snapshot(path)

    def test_load_or_new_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        config = SimulationConfig(pet_name="Fresh")
        pet, environment = load_or_new(path, config)
        assert pet.name == "Fresh"
        assert pet.level == 1
        assert environment.day == 1

    def test_load_or_new_rejects_zero_length_seasons(
        self,
        tmp_path: Path,
        snapshot: dict[str, Any],
    ) -> None:
        snapshot["season_length_days"] = 0
        path = tmp_path / "bonsai.json"
        write_snapshot(path, snapshot)
        pet, environment = load_or_new(path, SimulationConfig(pet_name="Fresh"))
        assert pet.name == "Fresh"
        assert environment.season_length_days == 30

    def test_load_or_new_restores(
        self,
        tmp_path: Path,
        played: SimulationEngine,
    ) -> None:
        path = tmp_path / "bonsai.json"
        write_snapshot(path, played.snapshot())
        pet, _ = load_or_new(path, SimulationConfig())
        assert pet.id == played.pet.id

    def test_new_game_uses_config(self) -> None:
        config = SimulationConfig(pet_name="Kiko", start_hour=9, season_length_days=7)
        pet, environment = new_game(config)
        assert pet.name == "Kiko"
        assert environment.hour == 9
        assert environment.season_length_days == 7
