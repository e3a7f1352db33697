"""Snapshot — flat, JSON-compatible export and import of a game.

``to_snapshot`` and ``from_snapshot`` are the whole persistence contract
of the core.  The JSON helpers below are a minimal host-side store; a
front end may keep the dicts anywhere it likes.  Any malformed input
surfaces as ``LoadFailed``, never as a crash.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from bonsaigotchi.errors import ConfigurationError, LoadFailed
from bonsaigotchi.pet.bonsai import Bonsai
from bonsaigotchi.pet.health import HealthMonitor
from bonsaigotchi.pet.inventory import Inventory, Wallet
from bonsaigotchi.pet.states import BonsaiState, HealthCondition
from bonsaigotchi.pet.stats import STAT_NAMES, Stats
from bonsaigotchi.world.environment import (
    Environment,
    Season,
    TimeWindows,
    Weather,
    valid_weather,
)

if TYPE_CHECKING:
    from bonsaigotchi.simulation.config import SimulationConfig

log = structlog.get_logger(__name__)

SCHEMA_VERSION = 1


def to_snapshot(pet: Bonsai, environment: Environment) -> dict[str, Any]:
    """Export every persistent field of ``pet`` and ``environment``.

    Derived state (mood, growth stage, visible state) is not stored; it
    is recomputed after loading.  ``season`` is included for readability
    and checked against the day counter on import.
    """
    data: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "id": pet.id,
        "name": pet.name,
    }
    data.update(pet.stats.as_dict())
    data.update(
        {
            "level": pet.level,
            "experience": pet.experience,
            "good_care_streak": pet.good_care_streak,
            "activity": pet.activity.value,
            "activity_ticks": pet.activity_ticks,
            "age_minutes": pet.age_minutes,
            "health_condition": pet.health.condition.value,
            "health_onset_ticks": {
                condition.value: ticks
                for condition, ticks in pet.health.onset_ticks.items()
            },
            "health_recovery_ticks": pet.health.recovery_ticks,
            "inventory": dict(pet.inventory.items),
            "bills": pet.wallet.bills,
            "day": environment.day,
            "hour": environment.hour,
            "minute": environment.minute,
            "season": environment.season.value,
            "weather": environment.weather.value if environment.weather else None,
            "season_length_days": environment.season_length_days,
            "weather_change_chance": environment.weather_change_chance,
            "morning_hours": list(environment.windows.morning),
            "day_hours": list(environment.windows.day),
            "evening_hours": list(environment.windows.evening),
        },
    )
    return data


def from_snapshot(data: Any) -> tuple[Bonsai, Environment]:
    """Rebuild a pet and environment from ``to_snapshot`` output.

    Raises:
        LoadFailed: If a field is missing, has the wrong type, or holds
            a value the core does not recognise.
    """
    if not isinstance(data, dict):
        raise LoadFailed(f"snapshot must be a mapping, got {type(data).__name__}")
    version = _field(data, "schema_version", int)
    if version != SCHEMA_VERSION:
        raise LoadFailed(f"unsupported snapshot schema version {version}")

    stats = Stats(**{name: _number(data, name) for name in STAT_NAMES})

    onset_raw = _field(data, "health_onset_ticks", dict)
    health = HealthMonitor(
        condition=_enum(HealthCondition, data, "health_condition"),
        onset_ticks={
            _parse_enum(HealthCondition, key, "health_onset_ticks"): _as_int(
                value,
                "health_onset_ticks",
            )
            for key, value in onset_raw.items()
        },
        recovery_ticks=_field(data, "health_recovery_ticks", int),
    )

    items_raw = _field(data, "inventory", dict)
    inventory = Inventory(
        items={str(key): _as_int(value, "inventory") for key, value in items_raw.items()},
    )

    level = _field(data, "level", int)
    if level < 1:
        raise LoadFailed(f"level must be >= 1, got {level}")

    pet = Bonsai(
        name=_field(data, "name", str),
        id=_field(data, "id", str),
        stats=stats,
        level=level,
        experience=_number(data, "experience"),
        good_care_streak=_field(data, "good_care_streak", int),
        activity=_enum(BonsaiState, data, "activity"),
        activity_ticks=_field(data, "activity_ticks", int),
        age_minutes=_field(data, "age_minutes", int),
        health=health,
        inventory=inventory,
        wallet=Wallet(bills=_field(data, "bills", int)),
    )

    day = _field(data, "day", int)
    hour = _field(data, "hour", int)
    minute = _field(data, "minute", int)
    season_length_days = _field(data, "season_length_days", int)
    if day < 1 or not 0 <= hour < 24 or not 0 <= minute < 60:
        raise LoadFailed(f"clock fields out of range: day {day}, {hour}:{minute}")
    if season_length_days < 1:
        raise LoadFailed(f"season_length_days must be >= 1, got {season_length_days}")

    season = _enum(Season, data, "season")
    weather = _enum(Weather, data, "weather")
    if weather not in valid_weather(season):
        raise LoadFailed(f"weather {weather.value!r} is not possible in {season.value}")

    try:
        environment = Environment(
            day=day,
            hour=hour,
            minute=minute,
            weather=weather,
            season_length_days=season_length_days,
            weather_change_chance=_number(data, "weather_change_chance"),
            windows=TimeWindows(
                morning=_hours(data, "morning_hours"),
                day=_hours(data, "day_hours"),
                evening=_hours(data, "evening_hours"),
            ),
        )
    except ConfigurationError as exc:
        raise LoadFailed(f"invalid environment in snapshot: {exc}") from exc
    if season is not environment.season:
        raise LoadFailed(f"season {season.value!r} does not match day {day}")

    return pet, environment


def new_game(config: SimulationConfig) -> tuple[Bonsai, Environment]:
    """Create a fresh default pet and environment."""
    pet = Bonsai(name=config.pet_name)
    environment = Environment(
        hour=config.start_hour,
        season_length_days=config.season_length_days,
        weather_change_chance=config.weather_change_chance,
        windows=config.time_windows,
    )
    return pet, environment


def write_snapshot(path: str | Path, data: dict[str, Any]) -> None:
    """Write a snapshot as JSON, replacing the target atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)
    os.replace(tmp, path)


def read_snapshot(path: str | Path) -> dict[str, Any]:
    """Read a JSON snapshot file.

    Raises:
        LoadFailed: If the file is missing, unreadable or not a JSON object.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise LoadFailed(f"cannot read snapshot {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise LoadFailed(f"snapshot {path} is not a JSON object")
    return data


def load_or_new(
    path: str | Path,
    config: SimulationConfig,
) -> tuple[Bonsai, Environment]:
    """Load a saved game, or start a new one if the save is unusable."""
    try:
        return from_snapshot(read_snapshot(path))
    except LoadFailed as exc:
        log.warning("snapshot load failed, starting new game", path=str(path), error=str(exc))
        return new_game(config)


# -- Field readers -----------------------------------------------------------


def _field(data: dict[str, Any], key: str, kind: type) -> Any:
    try:
        value = data[key]
    except KeyError:
        raise LoadFailed(f"snapshot is missing {key!r}") from None
    # bool is an int subclass; reject it where a count is expected
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise LoadFailed(f"snapshot field {key!r} must be {kind.__name__}")
    return value


def _number(data: dict[str, Any], key: str) -> float:
    try:
        value = data[key]
    except KeyError:
        raise LoadFailed(f"snapshot is missing {key!r}") from None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LoadFailed(f"snapshot field {key!r} must be a number")
    return float(value)


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LoadFailed(f"snapshot field {key!r} must hold integers")
    return value


def _hours(data: dict[str, Any], key: str) -> tuple[int, int]:
    value = _field(data, key, list)
    if len(value) != 2:
        raise LoadFailed(f"snapshot field {key!r} must be [start, end]")
    return (_as_int(value[0], key), _as_int(value[1], key))


def _enum(enum_type: Any, data: dict[str, Any], key: str) -> Any:
    return _parse_enum(enum_type, _field(data, key, str), key)


def _parse_enum(enum_type: Any, raw: str, key: str) -> Any:
    try:
        return enum_type(raw)
    except ValueError:
        raise LoadFailed(f"unknown {key} value {raw!r}") from None
