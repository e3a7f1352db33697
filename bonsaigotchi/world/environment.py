"""Environment — in-game clock, seasons, weather and time-of-day.

Advanced first in each simulation tick so that stat decay and player
actions react to the current conditions.  The season is a pure function
of the day counter; the weather is re-rolled at most once per in-game
hour from the set that is valid for the current season.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from bonsaigotchi.errors import ConfigurationError
from bonsaigotchi.simulation.events import (
    Event,
    SeasonChanged,
    TimeOfDayChanged,
    WeatherChanged,
)

if TYPE_CHECKING:
    from numpy.random import Generator

# -- Constants ---------------------------------------------------------------

_MINUTES_PER_HOUR = 60
_HOURS_PER_DAY = 24
_SEASON_EDGE_DAYS = 3  # weather is twice as restless this close to a season change


class Season(Enum):
    """The four seasons, in cyclic order."""

    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"

    @property
    def next(self) -> Season:
        order = list(Season)
        return order[(order.index(self) + 1) % len(order)]


class Weather(Enum):
    """Current weather."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAIN = "rain"
    HUMID = "humid"
    WIND = "wind"
    STORM = "storm"
    SNOW = "snow"


class TimeOfDay(Enum):
    """Coarse period of the in-game day."""

    MORNING = "morning"
    DAY = "day"
    EVENING = "evening"
    NIGHT = "night"


# Weighted weather per season; only these values are valid in that season.
SEASON_WEATHER: dict[Season, tuple[tuple[Weather, float], ...]] = {
    Season.SPRING: (
        (Weather.RAIN, 0.40),
        (Weather.SUNNY, 0.30),
        (Weather.CLOUDY, 0.15),
        (Weather.HUMID, 0.10),
        (Weather.WIND, 0.05),
    ),
    Season.SUMMER: (
        (Weather.SUNNY, 0.60),
        (Weather.HUMID, 0.20),
        (Weather.CLOUDY, 0.10),
        (Weather.RAIN, 0.05),
        (Weather.STORM, 0.05),
    ),
    Season.AUTUMN: (
        (Weather.WIND, 0.30),
        (Weather.CLOUDY, 0.30),
        (Weather.RAIN, 0.20),
        (Weather.SUNNY, 0.15),
        (Weather.STORM, 0.05),
    ),
    Season.WINTER: (
        (Weather.SNOW, 0.30),
        (Weather.CLOUDY, 0.30),
        (Weather.WIND, 0.20),
        (Weather.SUNNY, 0.10),
        (Weather.RAIN, 0.10),
    ),
}

_BONUS_FACTORS: dict[TimeOfDay, float] = {
    TimeOfDay.MORNING: 1.2,
    TimeOfDay.DAY: 1.0,
    TimeOfDay.EVENING: 1.1,
    TimeOfDay.NIGHT: 0.8,
}


def valid_weather(season: Season) -> frozenset[Weather]:
    """Return the weather values allowed in ``season``."""
    return frozenset(weather for weather, _ in SEASON_WEATHER[season])


def roll_weather(season: Season, rng: Generator) -> Weather:
    """Draw a weighted random weather value for ``season``."""
    roll = float(rng.random())
    cumulative = 0.0
    options = SEASON_WEATHER[season]
    for weather, weight in options:
        cumulative += weight
        if roll < cumulative:
            return weather
    return options[-1][0]


@dataclass(frozen=True)
class TimeWindows:
    """Hour ranges ``[start, end)`` of the named day periods.

    Any hour outside morning, day and evening is night.

    Attributes:
        morning: Morning hours (watering bonus window).
        day: Daytime hours.
        evening: Evening hours (pruning bonus window).
    """

    morning: tuple[int, int] = (5, 10)
    day: tuple[int, int] = (10, 18)
    evening: tuple[int, int] = (18, 22)

    def __post_init__(self) -> None:
        """Reject windows that are not ``(start, end)`` hours in 0-24."""
        for name in ("morning", "day", "evening"):
            window = getattr(self, name)
            if (
                not isinstance(window, tuple)
                or len(window) != 2
                or not all(
                    isinstance(hour, int) and not isinstance(hour, bool)
                    for hour in window
                )
                or not 0 <= window[0] <= window[1] <= _HOURS_PER_DAY
            ):
                raise ConfigurationError(
                    f"{name} window must be (start, end) with "
                    f"0 <= start <= end <= 24, got {window!r}",
                )


def time_of_day_for_hour(hour: int, windows: TimeWindows | None = None) -> TimeOfDay:
    """Classify an hour (0-23) into a day period."""
    windows = windows or TimeWindows()
    for period, (start, end) in (
        (TimeOfDay.MORNING, windows.morning),
        (TimeOfDay.DAY, windows.day),
        (TimeOfDay.EVENING, windows.evening),
    ):
        if start <= hour < end:
            return period
    return TimeOfDay.NIGHT


def time_of_day_bonus_factor(hour: int, windows: TimeWindows | None = None) -> float:
    """Action effectiveness multiplier for an hour.

    1.2 in the morning, 1.1 in the evening, 0.8 at night, 1.0 otherwise.
    """
    return _BONUS_FACTORS[time_of_day_for_hour(hour, windows)]


@dataclass
class Environment:
    """Global environmental state for one game session.

    Attributes:
        day: In-game day counter, starting at 1.
        hour: Hour of the day (0-23).
        minute: Minute of the hour (0-59).
        weather: Current weather; always valid for the current season.
        season_length_days: Days per season.
        weather_change_chance: Probability per in-game hour that the
            weather is re-rolled.
        windows: Hour ranges of the day periods.
    """

    day: int = 1
    hour: int = 6
    minute: int = 0
    weather: Weather | None = None
    season_length_days: int = 30
    weather_change_chance: float = 0.05
    windows: TimeWindows = field(default_factory=TimeWindows)

    def __post_init__(self) -> None:
        """Validate the clock; default the weather to the season's likeliest.

        Raises:
            ConfigurationError: If the clock is out of range or ``weather``
                cannot occur in the current season.
        """
        if self.season_length_days < 1:
            raise ConfigurationError(
                f"season_length_days must be >= 1, got {self.season_length_days!r}",
            )
        if (
            self.day < 1
            or not 0 <= self.hour < _HOURS_PER_DAY
            or not 0 <= self.minute < _MINUTES_PER_HOUR
        ):
            raise ConfigurationError(
                f"clock out of range: day {self.day!r}, "
                f"hour {self.hour!r}, minute {self.minute!r}",
            )
        if self.weather is None:
            self.weather = SEASON_WEATHER[self.season][0][0]
        elif self.weather not in valid_weather(self.season):
            raise ConfigurationError(
                f"weather {self.weather.value!r} is not possible in {self.season.value}",
            )

    @classmethod
    def at_season(
        cls,
        season: Season,
        *,
        season_length_days: int = 30,
        hour: int = 6,
        weather: Weather | None = None,
        weather_change_chance: float = 0.05,
        windows: TimeWindows | None = None,
    ) -> Environment:
        """Build an environment positioned on the first day of ``season``."""
        return cls(
            day=list(Season).index(season) * season_length_days + 1,
            hour=hour,
            weather=weather,
            season_length_days=season_length_days,
            weather_change_chance=weather_change_chance,
            windows=windows or TimeWindows(),
        )

    @property
    def season(self) -> Season:
        """Season derived from the day counter."""
        index = ((self.day - 1) // self.season_length_days) % len(Season)
        return list(Season)[index]

    @property
    def time_of_day(self) -> TimeOfDay:
        return time_of_day_for_hour(self.hour, self.windows)

    @property
    def bonus_factor(self) -> float:
        """Time-of-day multiplier for the useful part of player actions."""
        return time_of_day_bonus_factor(self.hour, self.windows)

    @property
    def is_daytime(self) -> bool:
        """Return True between the start of morning and the end of evening."""
        return self.time_of_day is not TimeOfDay.NIGHT

    def advance(self, minutes: int, rng: Generator) -> list[Event]:
        """Advance the clock and roll the weather on hour boundaries.

        Args:
            minutes: In-game minutes to add (non-positive is a no-op).
            rng: Seeded random generator.

        Returns:
            Events for every season, weather and day-period change, in
            the order they happened.
        """
        if minutes <= 0:
            return []

        events: list[Event] = []
        period_before = self.time_of_day

        total = self.minute + minutes
        self.minute = total % _MINUTES_PER_HOUR
        for _ in range(total // _MINUTES_PER_HOUR):
            self.hour += 1
            if self.hour == _HOURS_PER_DAY:
                self.hour = 0
                events.extend(self._next_day(rng))
            events.extend(self._hourly_weather(rng))

        period_after = self.time_of_day
        if period_after is not period_before:
            events.append(
                TimeOfDayChanged(
                    old=period_before,
                    new=period_after,
                    day=self.day,
                    hour=self.hour,
                ),
            )
        return events

    def _next_day(self, rng: Generator) -> list[Event]:
        """Roll the day counter; re-roll weather the new season forbids."""
        events: list[Event] = []
        season_before = self.season
        self.day += 1
        season_after = self.season
        if season_after is season_before:
            return events

        events.append(SeasonChanged(old=season_before, new=season_after, day=self.day))
        if self.weather not in valid_weather(season_after):
            old_weather = self.weather
            self.weather = roll_weather(season_after, rng)
            events.append(WeatherChanged(old=old_weather, new=self.weather))
        return events

    def _hourly_weather(self, rng: Generator) -> list[Event]:
        day_of_season = (self.day - 1) % self.season_length_days
        near_edge = (
            day_of_season < _SEASON_EDGE_DAYS
            or day_of_season >= self.season_length_days - _SEASON_EDGE_DAYS
        )
        chance = self.weather_change_chance * (2.0 if near_edge else 1.0)
        if float(rng.random()) >= chance:
            return []

        new_weather = roll_weather(self.season, rng)
        if new_weather is self.weather:
            return []
        old_weather = self.weather
        self.weather = new_weather
        return [WeatherChanged(old=old_weather, new=new_weather)]
