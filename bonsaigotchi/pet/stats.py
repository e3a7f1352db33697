"""Stats — bounded numeric needs of the bonsai.

Every stat lives on a 0-100 scale.  Assignments clamp silently instead of
raising, so decay and action code can add or subtract freely without
range checks of its own.  ``hunger`` is the one inverted stat: higher
values mean the tree is hungrier.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any

from bonsaigotchi.errors import ConfigurationError

STAT_MIN = 0.0
STAT_MAX = 100.0


def clamp_stat(value: float) -> float:
    """Clamp a value into the stat range; NaN maps to the lower bound."""
    value = float(value)
    if math.isnan(value):
        return STAT_MIN
    return max(STAT_MIN, min(STAT_MAX, value))


@dataclass
class Stats:
    """The pet's stat block.

    Attributes:
        water: Moisture in the pot's soil.
        hunger: Nutrient hunger (inverted: 100 is starving).
        energy: Vitality available for activities.
        cleanliness: Tidiness of the pot and surroundings.
        hydration: Water held in the tree's own tissue.
        pruning_quality: How well-shaped the canopy is.
        health: Overall health; drained by active conditions.
    """

    water: float = 50.0
    hunger: float = 30.0
    energy: float = 100.0
    cleanliness: float = 100.0
    hydration: float = 60.0
    pruning_quality: float = 50.0
    health: float = 100.0

    def __setattr__(self, name: str, value: Any) -> None:
        if name in STAT_NAMES:
            value = clamp_stat(value)
        super().__setattr__(name, value)

    def get(self, name: str) -> float:
        """Return a stat by name.

        Raises:
            ConfigurationError: If ``name`` is not a stat.
        """
        self._check_name(name)
        return float(getattr(self, name))

    def set(self, name: str, value: float) -> None:
        """Assign a stat by name (clamped).

        Raises:
            ConfigurationError: If ``name`` is not a stat.
        """
        self._check_name(name)
        setattr(self, name, value)

    def adjust(self, name: str, delta: float) -> float:
        """Add ``delta`` to a stat and return the change actually applied.

        The realised change can be smaller than ``delta`` when the stat
        hits a bound.

        Raises:
            ConfigurationError: If ``name`` is not a stat.
        """
        before = self.get(name)
        setattr(self, name, before + delta)
        return self.get(name) - before

    def as_dict(self) -> dict[str, float]:
        """Return all stats keyed by name."""
        return {name: float(getattr(self, name)) for name in STAT_NAMES}

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in STAT_NAMES:
            raise ConfigurationError(f"unknown stat {name!r}")


STAT_NAMES: tuple[str, ...] = tuple(f.name for f in fields(Stats))
