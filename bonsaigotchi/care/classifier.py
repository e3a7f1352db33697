"""Classifier — pure mapping from pet state to derived state.

Nothing here mutates its inputs or keeps state between calls, so
``derive(pet)`` called twice on an unchanged pet returns equal results.
The health condition is read from the pet's health monitor, which owns
the dwell-time counters; classification only reports it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bonsaigotchi.pet.states import (
    BonsaiState,
    GrowthStage,
    HealthCondition,
    MoodState,
)

if TYPE_CHECKING:
    from bonsaigotchi.pet.bonsai import Bonsai
    from bonsaigotchi.pet.stats import Stats

# -- Constants ---------------------------------------------------------------

WELLBEING_WEIGHTS: dict[str, float] = {
    "water": 0.35,
    "hunger": 0.35,  # inverted
    "energy": 0.20,
    "cleanliness": 0.10,
}

# Lower bound of each mood bucket, best first.
_MOOD_THRESHOLDS: tuple[tuple[float, MoodState], ...] = (
    (90.0, MoodState.ECSTATIC),
    (75.0, MoodState.HAPPY),
    (60.0, MoodState.CONTENT),
    (45.0, MoodState.NEUTRAL),
    (35.0, MoodState.UNHAPPY),
    (25.0, MoodState.SAD),
)

# Highest level of each growth stage.
_STAGE_CEILINGS: tuple[tuple[int, GrowthStage], ...] = (
    (5, GrowthStage.SEEDLING),
    (15, GrowthStage.SAPLING),
    (30, GrowthStage.YOUNG_BONSAI),
    (50, GrowthStage.MATURE_BONSAI),
    (75, GrowthStage.ELDER_BONSAI),
    (100, GrowthStage.ANCIENT_BONSAI),
)

_UNHEALTHY_BELOW = 30.0
_WILTING_BELOW = 20.0
_THIRSTY_BELOW = 30.0


@dataclass(frozen=True)
class DerivedState:
    """Everything the front end shows that is computed, not stored."""

    mood: MoodState
    health: HealthCondition
    growth_stage: GrowthStage
    current_state: BonsaiState


def wellbeing_score(stats: Stats) -> float:
    """Weighted composite of the core needs, in [0, 100]."""
    return (
        WELLBEING_WEIGHTS["water"] * stats.water
        + WELLBEING_WEIGHTS["hunger"] * (100.0 - stats.hunger)
        + WELLBEING_WEIGHTS["energy"] * stats.energy
        + WELLBEING_WEIGHTS["cleanliness"] * stats.cleanliness
    )


def classify_mood(stats: Stats) -> MoodState:
    """Bucket the wellbeing score into a mood (monotonic step function)."""
    score = wellbeing_score(stats)
    for lower_bound, mood in _MOOD_THRESHOLDS:
        if score >= lower_bound:
            return mood
    return MoodState.MISERABLE


def growth_stage_for_level(level: int) -> GrowthStage:
    for ceiling, stage in _STAGE_CEILINGS:
        if level <= ceiling:
            return stage
    return GrowthStage.LEGENDARY_BONSAI


def classify_current_state(stats: Stats, activity: BonsaiState) -> BonsaiState:
    """Pick the visible state: distress first, then the recent activity."""
    if stats.health < _UNHEALTHY_BELOW:
        return BonsaiState.UNHEALTHY
    if stats.energy < _WILTING_BELOW:
        return BonsaiState.WILTING
    if stats.water < _THIRSTY_BELOW:
        return BonsaiState.THIRSTY
    return activity


def derive(pet: Bonsai) -> DerivedState:
    """Compute the full derived state of ``pet``."""
    return DerivedState(
        mood=classify_mood(pet.stats),
        health=pet.health.condition,
        growth_stage=growth_stage_for_level(pet.level),
        current_state=classify_current_state(pet.stats, pet.activity),
    )
