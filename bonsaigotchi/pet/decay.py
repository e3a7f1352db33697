"""Decay — per-tick need drain, modulated by the environment.

Rates are expressed per in-game hour and scaled by the minutes a tick
covers, so changing the time-progression speed changes how fast the
tree's needs drain in real time but not per in-game day.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bonsaigotchi.world.environment import Season, TimeOfDay, Weather

if TYPE_CHECKING:
    from bonsaigotchi.pet.stats import Stats
    from bonsaigotchi.world.environment import Environment

# Signed change per in-game hour; hunger rises, everything else drains.
DEFAULT_DECAY_PER_HOUR: dict[str, float] = {
    "water": -2.0,
    "hydration": -1.5,
    "energy": -1.0,
    "hunger": 1.5,
    "cleanliness": -0.5,
    "pruning_quality": -0.2,
}

# Multipliers on water/hydration loss.  Rain and snow barely dry the pot.
_WEATHER_DRYING: dict[Weather, float] = {
    Weather.SUNNY: 1.4,
    Weather.CLOUDY: 0.9,
    Weather.RAIN: 0.2,
    Weather.HUMID: 0.7,
    Weather.WIND: 1.2,
    Weather.STORM: 0.4,
    Weather.SNOW: 0.5,
}

_SEASON_DRYING: dict[Season, float] = {
    Season.SPRING: 1.0,
    Season.SUMMER: 1.3,
    Season.AUTUMN: 0.9,
    Season.WINTER: 0.7,
}

_WEATHER_SOILING: dict[Weather, float] = {
    Weather.WIND: 1.5,
    Weather.STORM: 2.0,
}

_AUTUMN_LEAF_FALL = 1.5
_NIGHT_ENERGY_FACTOR = 0.5  # the tree rests at night

_DRYING_STATS = frozenset({"water", "hydration"})


def decay_multiplier(stat: str, environment: Environment) -> float:
    """Return the environmental multiplier for one stat's drain."""
    if stat in _DRYING_STATS:
        return _WEATHER_DRYING[environment.weather] * _SEASON_DRYING[environment.season]
    if stat == "cleanliness":
        factor = _WEATHER_SOILING.get(environment.weather, 1.0)
        if environment.season is Season.AUTUMN:
            factor *= _AUTUMN_LEAF_FALL
        return factor
    if stat == "energy" and environment.time_of_day is TimeOfDay.NIGHT:
        return _NIGHT_ENERGY_FACTOR
    return 1.0


def apply_decay(
    stats: Stats,
    environment: Environment,
    minutes: int,
    rates_per_hour: dict[str, float],
) -> None:
    """Drain needs for ``minutes`` of in-game time.

    Args:
        stats: Stat block to mutate (values stay clamped).
        environment: Current conditions, after this tick's clock advance.
        minutes: In-game minutes the tick covered.
        rates_per_hour: Signed change per in-game hour for each stat.
    """
    hours = minutes / 60.0
    for stat, rate in rates_per_hour.items():
        stats.adjust(stat, rate * hours * decay_multiplier(stat, environment))


def apply_condition_damage(
    stats: Stats,
    minutes: int,
    damage_per_hour: float,
) -> None:
    """Drain health while a condition is active."""
    stats.adjust("health", -damage_per_hour * minutes / 60.0)
