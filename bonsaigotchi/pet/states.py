"""Derived-state enums for the bonsai.

``MoodState`` and ``GrowthStage`` are ordered (IntEnum) so callers can
compare them directly: ``MoodState.HAPPY > MoodState.SAD``.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class MoodState(IntEnum):
    """Seven-level mood bucket derived from the wellbeing score."""

    MISERABLE = 0
    SAD = 1
    UNHAPPY = 2
    NEUTRAL = 3
    CONTENT = 4
    HAPPY = 5
    ECSTATIC = 6


class GrowthStage(IntEnum):
    """Life stage of the tree; a function of level only."""

    SEEDLING = 0
    SAPLING = 1
    YOUNG_BONSAI = 2
    MATURE_BONSAI = 3
    ELDER_BONSAI = 4
    ANCIENT_BONSAI = 5
    LEGENDARY_BONSAI = 6


class HealthCondition(Enum):
    """Committed health condition of the health monitor."""

    HEALTHY = "healthy"
    DROUGHT = "drought"
    OVERWATERED = "overwatered"
    NUTRIENT_DEFICIENCY = "nutrient_deficiency"
    PEST_INFESTATION = "pest_infestation"
    OVERTRAINING = "overtraining"


class BonsaiState(Enum):
    """What the tree is visibly doing right now (animation state)."""

    IDLE = "idle"
    GROWING = "growing"
    BLOOMING = "blooming"
    SLEEPING = "sleeping"
    EATING = "eating"
    PLAYING = "playing"
    EXERCISING = "exercising"
    MEDITATING = "meditating"
    THIRSTY = "thirsty"
    WILTING = "wilting"
    UNHEALTHY = "unhealthy"
