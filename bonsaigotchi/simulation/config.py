"""Config — load simulation parameters from YAML files.

All tunable constants (clock speed, dwell times, decay rates, auto-save
schedule, bonus windows) live in YAML and are parsed into typed
dataclasses here.  The resulting object is passed explicitly to the
engine and the action processor; there is no global settings instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from bonsaigotchi.errors import ConfigurationError
from bonsaigotchi.pet.decay import DEFAULT_DECAY_PER_HOUR
from bonsaigotchi.pet.stats import STAT_NAMES
from bonsaigotchi.world.environment import TimeWindows

TIME_SPEEDS = frozenset({1, 2, 5, 10})
AUTOSAVE_INTERVALS = frozenset({1, 5, 10, 15, 30, 60})


@dataclass(frozen=True)
class AutoSaveConfig:
    """When the engine hands a snapshot to the host's save hook.

    Attributes:
        enabled: Whether auto-save runs at all.
        interval_minutes: Real-time minutes between saves.
    """

    enabled: bool = True
    interval_minutes: int = 5

    def __post_init__(self) -> None:
        if self.interval_minutes not in AUTOSAVE_INTERVALS:
            raise ConfigurationError(
                f"auto-save interval must be one of {sorted(AUTOSAVE_INTERVALS)}, "
                f"got {self.interval_minutes!r}",
            )


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        pet_name: Name given to a freshly created pet.
        tick_seconds: Real-time seconds between ticks.
        minutes_per_tick: In-game minutes per tick at 1x speed.
        time_speed: Time-progression multiplier (1, 2, 5 or 10).
        start_hour: Clock hour of a new game.
        season_length_days: In-game days per season.
        weather_change_chance: Probability per in-game hour of a
            weather re-roll.
        onset_dwell_ticks: Consecutive bad ticks before a health
            condition is committed.
        recovery_dwell_ticks: Consecutive good ticks before a condition
            clears.
        activity_ticks: Ticks an action's activity stays visible.
        condition_damage_per_hour: Health lost per in-game hour while
            a condition is active.
        passive_xp_per_hour: Experience per in-game hour of good care.
        decay_per_hour: Signed stat change per in-game hour.
        auto_save: Auto-save schedule.
        time_windows: Hour ranges of morning, day and evening.
        play_sounds: Front-end sound toggle (no effect on the core).
        play_music: Front-end music toggle (no effect on the core).
    """

    seed: int = 42
    pet_name: str = "Bonsai"
    tick_seconds: float = 1.0
    minutes_per_tick: int = 1
    time_speed: int = 1
    start_hour: int = 6
    season_length_days: int = 30
    weather_change_chance: float = 0.05

    # Health condition hysteresis
    onset_dwell_ticks: int = 30
    recovery_dwell_ticks: int = 30
    condition_damage_per_hour: float = 3.0

    activity_ticks: int = 5
    passive_xp_per_hour: float = 6.0

    decay_per_hour: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_DECAY_PER_HOUR),
    )
    auto_save: AutoSaveConfig = field(default_factory=AutoSaveConfig)
    time_windows: TimeWindows = field(default_factory=TimeWindows)

    play_sounds: bool = True
    play_music: bool = True

    def __post_init__(self) -> None:
        """Reject values the core cannot run with."""
        if self.time_speed not in TIME_SPEEDS:
            raise ConfigurationError(
                f"time_speed must be one of {sorted(TIME_SPEEDS)}, got {self.time_speed!r}",
            )
        if not 0 <= self.start_hour < 24:
            raise ConfigurationError(f"start_hour out of range: {self.start_hour!r}")
        if self.minutes_per_tick < 1 or self.season_length_days < 1:
            raise ConfigurationError("minutes_per_tick and season_length_days must be >= 1")
        if self.tick_seconds <= 0:
            raise ConfigurationError("tick_seconds must be positive")
        if self.onset_dwell_ticks < 1 or self.recovery_dwell_ticks < 1:
            raise ConfigurationError("dwell ticks must be >= 1")
        unknown = set(self.decay_per_hour) - set(STAT_NAMES)
        if unknown:
            raise ConfigurationError(f"unknown stats in decay_per_hour: {sorted(unknown)}")

    @property
    def minutes_per_step(self) -> int:
        """In-game minutes covered by one tick at the configured speed."""
        return self.minutes_per_tick * self.time_speed

    @property
    def autosave_every_ticks(self) -> int:
        """Ticks between auto-saves (at least 1)."""
        return max(1, round(self.auto_save.interval_minutes * 60 / self.tick_seconds))

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigurationError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationConfig:
        """Build a config from an already-parsed mapping."""
        defaults = cls()

        decay = dict(defaults.decay_per_hour)
        decay.update(data.get("decay_per_hour") or {})

        auto_save_data = data.get("auto_save") or {}
        auto_save = AutoSaveConfig(
            enabled=bool(auto_save_data.get("enabled", defaults.auto_save.enabled)),
            interval_minutes=auto_save_data.get(
                "interval_minutes",
                defaults.auto_save.interval_minutes,
            ),
        )

        windows_data = data.get("time_windows") or {}
        windows = TimeWindows(
            morning=_window(windows_data.get("morning", defaults.time_windows.morning)),
            day=_window(windows_data.get("day", defaults.time_windows.day)),
            evening=_window(windows_data.get("evening", defaults.time_windows.evening)),
        )

        return cls(
            seed=data.get("seed", defaults.seed),
            pet_name=data.get("pet_name", defaults.pet_name),
            tick_seconds=data.get("tick_seconds", defaults.tick_seconds),
            minutes_per_tick=data.get("minutes_per_tick", defaults.minutes_per_tick),
            time_speed=data.get("time_speed", defaults.time_speed),
            start_hour=data.get("start_hour", defaults.start_hour),
            season_length_days=data.get(
                "season_length_days",
                defaults.season_length_days,
            ),
            weather_change_chance=data.get(
                "weather_change_chance",
                defaults.weather_change_chance,
            ),
            onset_dwell_ticks=data.get("onset_dwell_ticks", defaults.onset_dwell_ticks),
            recovery_dwell_ticks=data.get(
                "recovery_dwell_ticks",
                defaults.recovery_dwell_ticks,
            ),
            condition_damage_per_hour=data.get(
                "condition_damage_per_hour",
                defaults.condition_damage_per_hour,
            ),
            activity_ticks=data.get("activity_ticks", defaults.activity_ticks),
            passive_xp_per_hour=data.get(
                "passive_xp_per_hour",
                defaults.passive_xp_per_hour,
            ),
            decay_per_hour=decay,
            auto_save=auto_save,
            time_windows=windows,
            play_sounds=bool(data.get("play_sounds", defaults.play_sounds)),
            play_music=bool(data.get("play_music", defaults.play_music)),
        )


def _window(value: Any) -> Any:
    # YAML gives lists; TimeWindows rejects anything that is not a pair.
    return tuple(value) if isinstance(value, (list, tuple)) else value
