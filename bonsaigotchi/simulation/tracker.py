"""StateTracker — diff the pet against its last observed state.

Shared by the tick scheduler and the action processor so that both
paths emit exactly the same change notifications.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from bonsaigotchi.care.classifier import DerivedState, derive
from bonsaigotchi.simulation.events import (
    Event,
    GrowthStageChanged,
    HealthChanged,
    LevelUp,
    MoodChanged,
    StatChanged,
)

if TYPE_CHECKING:
    from bonsaigotchi.pet.bonsai import Bonsai
    from bonsaigotchi.simulation.events import EventBus

log = structlog.get_logger(__name__)


class StateTracker:
    """Remembers the last published state of one pet.

    Attributes:
        pet: The tracked pet.
        bus: Where change events are published.
        derived: Derived state as of the last ``refresh``.
    """

    def __init__(self, pet: Bonsai, bus: EventBus) -> None:
        self.pet = pet
        self.bus = bus
        self._stats = pet.stats.as_dict()
        self._level = pet.level
        self.derived: DerivedState = derive(pet)

    def refresh(self) -> list[Event]:
        """Re-derive state, publish one event per changed field.

        Returns:
            The events published, in publication order.
        """
        events: list[Event] = []

        stats = self.pet.stats.as_dict()
        for name, value in stats.items():
            previous = self._stats[name]
            if value != previous:
                events.append(StatChanged(stat=name, old=previous, new=value))

        if self.pet.level != self._level:
            events.append(LevelUp(old=self._level, new=self.pet.level))
            log.info("level up", pet=self.pet.name, level=self.pet.level)

        derived = derive(self.pet)
        before = self.derived
        if derived.mood is not before.mood:
            events.append(MoodChanged(old=before.mood, new=derived.mood))
        if derived.health is not before.health:
            events.append(HealthChanged(old=before.health, new=derived.health))
            log.info(
                "health condition changed",
                pet=self.pet.name,
                old=before.health.value,
                new=derived.health.value,
            )
        if derived.growth_stage is not before.growth_stage:
            events.append(
                GrowthStageChanged(old=before.growth_stage, new=derived.growth_stage),
            )

        self._stats = stats
        self._level = self.pet.level
        self.derived = derived
        self.bus.publish_all(events)
        return events
