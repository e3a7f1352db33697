"""Bonsai — the pet entity.

A Bonsai owns its stats, experience and level, care streak, transient
activity, health monitor, inventory and wallet.  It holds no derived
state: mood, growth stage and the visible state are recomputed by
``bonsaigotchi.care.classifier`` whenever they are needed.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from bonsaigotchi.pet.health import HealthMonitor
from bonsaigotchi.pet.inventory import Inventory, Wallet
from bonsaigotchi.pet.states import BonsaiState, MoodState
from bonsaigotchi.pet.stats import Stats

# -- Constants ---------------------------------------------------------------

LEVEL_UP_REWARD = 5  # bills per level gained
_MAX_STREAK_BONUS = 0.5
_STREAK_BONUS_PER_DAY = 0.05

_MOOD_XP_MULTIPLIER: dict[MoodState, float] = {
    MoodState.ECSTATIC: 1.3,
    MoodState.HAPPY: 1.2,
    MoodState.CONTENT: 1.1,
    MoodState.NEUTRAL: 1.0,
    MoodState.UNHAPPY: 0.9,
    MoodState.SAD: 0.8,
    MoodState.MISERABLE: 0.7,
}


def xp_for_next_level(level: int) -> int:
    """Experience needed to go from ``level`` to ``level + 1``."""
    return max(100, int(100 * level**1.5))


@dataclass
class Bonsai:
    """A single bonsai pet.

    Attributes:
        name: Display name.
        id: Stable identity (uuid4 string).
        stats: Bounded need stats.
        level: Current level (>= 1, never decreases).
        experience: Accumulator toward the next level.
        good_care_streak: Consecutive in-game days of good care.
        activity: Transient state set by the most recent action.
        activity_ticks: Ticks left before ``activity`` falls back to idle.
        age_minutes: In-game minutes lived.
        health: Condition state machine.
        inventory: Owned food items.
        wallet: Currency balance.
    """

    name: str = "Bonsai"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    stats: Stats = field(default_factory=Stats)
    level: int = 1
    experience: float = 0.0
    good_care_streak: int = 0
    activity: BonsaiState = BonsaiState.IDLE
    activity_ticks: int = 0
    age_minutes: int = 0
    health: HealthMonitor = field(default_factory=HealthMonitor)
    inventory: Inventory = field(default_factory=Inventory)
    wallet: Wallet = field(default_factory=Wallet)

    @property
    def age_days(self) -> int:
        """Whole in-game days lived."""
        return self.age_minutes // (24 * 60)

    @property
    def xp_to_next_level(self) -> float:
        return max(0.0, xp_for_next_level(self.level) - self.experience)

    @property
    def has_good_care(self) -> bool:
        """Return True when every need is comfortably met."""
        s = self.stats
        return (
            s.health > 70
            and s.water > 70
            and s.energy > 70
            and s.cleanliness > 70
            and s.hunger < 30
        )

    def add_experience(
        self,
        base: float,
        mood: MoodState,
        minimum: float = 1.0,
    ) -> float:
        """Grant experience scaled by mood and the care streak.

        Args:
            base: Unscaled experience.  Non-positive grants are ignored.
            mood: Current mood; happier trees learn faster.
            minimum: Floor for a positive grant.  Passive trickles pass 0.

        Returns:
            Experience actually added.
        """
        if base <= 0:
            return 0.0
        streak_bonus = min(
            _MAX_STREAK_BONUS,
            self.good_care_streak * _STREAK_BONUS_PER_DAY,
        )
        gained = max(minimum, base * _MOOD_XP_MULTIPLIER[mood] * (1.0 + streak_bonus))
        self.experience += gained
        return gained

    def commit_level_ups(self) -> int:
        """Convert accumulated experience into levels.

        Each level consumes its threshold from the accumulator and pays
        ``LEVEL_UP_REWARD`` bills.

        Returns:
            Number of levels gained.
        """
        gained = 0
        while self.experience >= xp_for_next_level(self.level):
            self.experience -= xp_for_next_level(self.level)
            self.level += 1
            self.wallet.earn(LEVEL_UP_REWARD)
            gained += 1
        return gained

    def set_activity(self, activity: BonsaiState, ticks: int) -> None:
        """Show ``activity`` for the next ``ticks`` ticks."""
        self.activity = activity
        self.activity_ticks = max(0, ticks)

    def tick_activity(self) -> None:
        """Count the transient activity down, falling back to idle."""
        if self.activity_ticks > 0:
            self.activity_ticks -= 1
        if self.activity_ticks == 0:
            self.activity = BonsaiState.IDLE
