"""Health monitor — condition state machine with dwell-time hysteresis.

A condition is only committed after its onset predicate has held for
``onset_dwell`` consecutive ticks, and only cleared after the matching
recovery predicate has held for ``recovery_dwell`` consecutive ticks.
Recovery thresholds are stricter than onset thresholds, so a stat
hovering around a single limit cannot make the condition flicker.

State machine:

- states: every ``HealthCondition``; initial ``HEALTHY``; no terminal state
- HEALTHY -> X: rule X's onset predicate held for ``onset_dwell`` ticks
  (rules are checked in priority order), or a forced onset event
- X -> HEALTHY: X's recovery predicate held for ``recovery_dwell`` ticks,
  or a forced cure event
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from bonsaigotchi.pet.states import HealthCondition
from bonsaigotchi.pet.stats import Stats

StatPredicate = Callable[[Stats], bool]


@dataclass(frozen=True)
class ConditionRule:
    """Onset and recovery predicates for one condition.

    Attributes:
        condition: The condition this rule commits.
        onset: True on ticks that count toward onset.
        recovered: True on ticks that count toward recovery.
    """

    condition: HealthCondition
    onset: StatPredicate
    recovered: StatPredicate


# Priority order: the first rule to reach its dwell wins.
CONDITION_RULES: tuple[ConditionRule, ...] = (
    ConditionRule(
        HealthCondition.DROUGHT,
        onset=lambda s: s.water < 20 or s.hydration < 15,
        recovered=lambda s: s.water >= 40 and s.hydration >= 30,
    ),
    ConditionRule(
        HealthCondition.OVERWATERED,
        onset=lambda s: s.water > 95,
        recovered=lambda s: s.water <= 80,
    ),
    ConditionRule(
        HealthCondition.NUTRIENT_DEFICIENCY,
        onset=lambda s: s.hunger > 85,
        recovered=lambda s: s.hunger <= 50,
    ),
    ConditionRule(
        HealthCondition.PEST_INFESTATION,
        onset=lambda s: s.cleanliness < 20,
        recovered=lambda s: s.cleanliness >= 50,
    ),
    ConditionRule(
        HealthCondition.OVERTRAINING,
        onset=lambda s: s.energy < 10,
        recovered=lambda s: s.energy >= 40,
    ),
)

_RULES_BY_CONDITION = {rule.condition: rule for rule in CONDITION_RULES}


@dataclass
class HealthMonitor:
    """Tracks the committed health condition and its dwell counters.

    Attributes:
        condition: Currently committed condition.
        onset_ticks: Consecutive qualifying ticks per candidate condition
            (only advanced while healthy).
        recovery_ticks: Consecutive recovered ticks while ill.
    """

    condition: HealthCondition = HealthCondition.HEALTHY
    onset_ticks: dict[HealthCondition, int] = field(default_factory=dict)
    recovery_ticks: int = 0

    @property
    def is_healthy(self) -> bool:
        """Return True when no condition is committed."""
        return self.condition is HealthCondition.HEALTHY

    def update(
        self,
        stats: Stats,
        onset_dwell: int,
        recovery_dwell: int,
    ) -> HealthCondition:
        """Advance the state machine by one tick.

        Args:
            stats: Current stats (read only).
            onset_dwell: Ticks an onset predicate must hold to commit.
            recovery_dwell: Ticks of recovery needed to return to healthy.

        Returns:
            The condition after this tick.
        """
        if self.is_healthy:
            for rule in CONDITION_RULES:
                if rule.onset(stats):
                    self.onset_ticks[rule.condition] = (
                        self.onset_ticks.get(rule.condition, 0) + 1
                    )
                else:
                    self.onset_ticks.pop(rule.condition, None)

            for rule in CONDITION_RULES:
                if self.onset_ticks.get(rule.condition, 0) >= onset_dwell:
                    self._commit(rule.condition)
                    break
            return self.condition

        rule = _RULES_BY_CONDITION[self.condition]
        if rule.recovered(stats):
            self.recovery_ticks += 1
        else:
            self.recovery_ticks = 0
        if self.recovery_ticks >= recovery_dwell:
            self._commit(HealthCondition.HEALTHY)
        return self.condition

    def force_onset(self, condition: HealthCondition) -> bool:
        """Commit ``condition`` immediately (random onset events).

        Only takes effect while healthy.

        Returns:
            True if the condition was committed.
        """
        if not self.is_healthy or condition is HealthCondition.HEALTHY:
            return False
        self._commit(condition)
        return True

    def cure(self) -> bool:
        """Return to healthy immediately.

        Returns:
            True if a condition was cleared.
        """
        if self.is_healthy:
            return False
        self._commit(HealthCondition.HEALTHY)
        return True

    def _commit(self, condition: HealthCondition) -> None:
        self.condition = condition
        self.onset_ticks.clear()
        self.recovery_ticks = 0
