"""Events — typed change notifications and the bus that delivers them.

The core never talks to a front end directly.  It publishes immutable
event objects on an ``EventBus``; hosts either subscribe callbacks or
poll ``drain()`` from their own loop.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bonsaigotchi.pet.states import (
        GrowthStage,
        HealthCondition,
        MoodState,
    )
    from bonsaigotchi.world.environment import Season, TimeOfDay, Weather


@dataclass(frozen=True)
class Event:
    """Base class for all notifications."""


@dataclass(frozen=True)
class StatChanged(Event):
    stat: str
    old: float
    new: float


@dataclass(frozen=True)
class MoodChanged(Event):
    old: MoodState
    new: MoodState


@dataclass(frozen=True)
class HealthChanged(Event):
    old: HealthCondition
    new: HealthCondition


@dataclass(frozen=True)
class GrowthStageChanged(Event):
    old: GrowthStage
    new: GrowthStage


@dataclass(frozen=True)
class LevelUp(Event):
    old: int
    new: int


@dataclass(frozen=True)
class SeasonChanged(Event):
    old: Season
    new: Season
    day: int


@dataclass(frozen=True)
class WeatherChanged(Event):
    old: Weather | None
    new: Weather


@dataclass(frozen=True)
class TimeOfDayChanged(Event):
    old: TimeOfDay
    new: TimeOfDay
    day: int
    hour: int


class Severity(Enum):
    """How prominently a front end should show a notification."""

    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Notification(Event):
    """Free-form message for the player (bonus applied, out of stock, ...).

    Attributes:
        title: Short heading.
        message: One-sentence description.
        severity: Display prominence.
    """

    title: str
    message: str
    severity: Severity = Severity.INFO


Listener = Callable[[Event], Any]


class EventBus:
    """Synchronous observer list plus a bounded queue for polling hosts.

    Listeners run in subscription order on the publishing thread.  Every
    published event is also appended to ``pending`` until drained; the
    oldest events are dropped once ``max_pending`` is reached.
    """

    def __init__(self, max_pending: int = 1000) -> None:
        self._listeners: list[tuple[type[Event], Listener]] = []
        self.pending: deque[Event] = deque(maxlen=max_pending)

    def subscribe(
        self,
        listener: Listener,
        event_type: type[Event] = Event,
    ) -> Callable[[], None]:
        """Register ``listener`` for ``event_type`` and its subclasses.

        Returns:
            A function that removes the subscription.
        """
        entry = (event_type, listener)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def publish(self, event: Event) -> None:
        self.pending.append(event)
        for event_type, listener in list(self._listeners):
            if isinstance(event, event_type):
                listener(event)

    def publish_all(self, events: list[Event]) -> None:
        for event in events:
            self.publish(event)

    def drain(self) -> list[Event]:
        """Return and clear every queued event, oldest first."""
        events = list(self.pending)
        self.pending.clear()
        return events
