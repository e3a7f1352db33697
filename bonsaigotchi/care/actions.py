"""Actions — player care actions and the processor that applies them.

Each action is data: a primary effect (the useful change the player is
after), side effects, experience, and the activity the tree shows
afterwards.  The processor scales only the primary effect by the
environment's time-of-day bonus factor:

    realised = base * bonus_factor

so an evening prune is 10% more effective and a midnight watering 20%
less effective, while side effects such as the energy cost of training
are never scaled.  Every call applies exactly one set of deltas; there is
no cooldown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from bonsaigotchi.errors import ConfigurationError
from bonsaigotchi.pet import inventory
from bonsaigotchi.pet.states import BonsaiState, HealthCondition
from bonsaigotchi.simulation.events import Notification, Severity

if TYPE_CHECKING:
    from numpy.random import Generator

    from bonsaigotchi.pet.bonsai import Bonsai
    from bonsaigotchi.simulation.config import SimulationConfig
    from bonsaigotchi.simulation.tracker import StateTracker
    from bonsaigotchi.world.environment import Environment

log = structlog.get_logger(__name__)

BASIC_FERTILIZER = "basic_fertilizer"


@dataclass(frozen=True)
class HealthRisk:
    """Chance that an action forces a condition onset.

    Attributes:
        condition: Condition committed when the roll succeeds.
        chance: Probability per action (0.0-1.0).
        energy_below: If set, only roll when energy ends up below this.
    """

    condition: HealthCondition
    chance: float
    energy_below: float | None = None


@dataclass(frozen=True)
class ActionSpec:
    """Static definition of one player action.

    Attributes:
        name: Lookup key (``"water"``, ``"feed:burger"``...).
        label: Human label used in notifications.
        primary: Useful stat deltas, scaled by the bonus factor.
        side: Unscaled stat deltas.
        experience: Base experience granted.
        activity: Transient state shown afterwards.
        min_energy: Energy must exceed this for the action to run.
        item: Inventory item consumed, if any.
        risk: Optional forced-onset roll.
        cure_chance: Probability of curing an active condition.
    """

    name: str
    label: str
    primary: dict[str, float]
    side: dict[str, float] = field(default_factory=dict)
    experience: float = 0.0
    activity: BonsaiState = BonsaiState.IDLE
    min_energy: float | None = None
    item: str | None = None
    risk: HealthRisk | None = None
    cure_chance: float = 0.0


def _feed(
    variant: str,
    hunger: float,
    health: float,
    energy: float,
    experience: float,
    *,
    item: str | None,
    risk: float = 0.0,
    cure_chance: float = 0.0,
) -> ActionSpec:
    return ActionSpec(
        name=f"feed:{variant}",
        label="Feeding",
        primary={"hunger": hunger},
        side={"health": health, "energy": energy},
        experience=experience,
        activity=BonsaiState.EATING,
        item=item,
        risk=HealthRisk(HealthCondition.NUTRIENT_DEFICIENCY, risk) if risk else None,
        cure_chance=cure_chance,
    )


_ACTION_LIST: tuple[ActionSpec, ...] = (
    ActionSpec(
        name="water",
        label="Watering",
        primary={"water": 30.0, "hydration": 15.0},
        side={"energy": 10.0, "hunger": 2.0},
        experience=5,
        activity=BonsaiState.GROWING,
    ),
    ActionSpec(
        name="prune",
        label="Pruning",
        primary={"pruning_quality": 15.0},
        side={"energy": -10.0, "health": 5.0},
        experience=10,
        activity=BonsaiState.BLOOMING,
    ),
    ActionSpec(
        name="rest",
        label="Resting",
        primary={"energy": 40.0},
        side={"hunger": -5.0},
        experience=5,
        activity=BonsaiState.SLEEPING,
    ),
    ActionSpec(
        name="fertilize",
        label="Fertilizing",
        primary={"health": 30.0},
        side={"hunger": -10.0},
        experience=15,
        activity=BonsaiState.GROWING,
    ),
    ActionSpec(
        name="clean",
        label="Cleaning",
        primary={"cleanliness": 40.0},
        side={"health": 3.0, "energy": -5.0},
        experience=8,
    ),
    ActionSpec(
        name="exercise",
        label="Exercise",
        primary={"health": 10.0},
        side={"energy": -20.0, "hunger": 15.0},
        experience=10,
        activity=BonsaiState.EXERCISING,
        min_energy=30.0,
    ),
    ActionSpec(
        name="train",
        label="Training",
        primary={"health": 20.0},
        side={"energy": -40.0, "hunger": 30.0},
        experience=25,
        activity=BonsaiState.EXERCISING,
        min_energy=50.0,
        risk=HealthRisk(HealthCondition.OVERTRAINING, 0.3, energy_below=30.0),
    ),
    ActionSpec(
        name="play",
        label="Playing",
        primary={"health": 5.0},
        side={"energy": -25.0, "hunger": 20.0},
        experience=15,
        activity=BonsaiState.PLAYING,
        min_energy=30.0,
    ),
    ActionSpec(
        name="meditate",
        label="Meditation",
        primary={"energy": 20.0},
        side={"health": 8.0},
        experience=8,
        activity=BonsaiState.MEDITATING,
    ),
    _feed(BASIC_FERTILIZER, -20.0, 5.0, 5.0, 5, item=None),
    _feed(inventory.BURGER, -30.0, -5.0, 15.0, 3, item=inventory.BURGER, risk=0.05),
    _feed(
        inventory.ICE_CREAM, -15.0, -10.0, 20.0, 4,
        item=inventory.ICE_CREAM, risk=0.15,
    ),
    _feed(
        inventory.VEGETABLES, -25.0, 15.0, 10.0, 8,
        item=inventory.VEGETABLES, cure_chance=0.10,
    ),
    _feed(
        inventory.PREMIUM_NUTRIENTS, -40.0, 20.0, 15.0, 15,
        item=inventory.PREMIUM_NUTRIENTS, cure_chance=0.05,
    ),
    _feed(
        inventory.SPECIAL_TREAT, -10.0, -5.0, 30.0, 20,
        item=inventory.SPECIAL_TREAT, risk=0.10,
    ),
)

ACTIONS: dict[str, ActionSpec] = {spec.name: spec for spec in _ACTION_LIST}


def lookup_action(name: str) -> ActionSpec:
    """Resolve an action name; bare ``"feed"`` means basic fertilizer.

    Names are case-insensitive; a feed variant follows a colon
    (``"feed:vegetables"``).

    Raises:
        ConfigurationError: If no action matches.
    """
    key = name.strip().lower()
    if key == "feed":
        key = f"feed:{BASIC_FERTILIZER}"
    try:
        return ACTIONS[key]
    except KeyError:
        log.error("unknown action", action=name)
        raise ConfigurationError(f"unknown action {name!r}") from None


class ActionProcessor:
    """Applies player actions to one pet.

    Attributes:
        pet: The pet being cared for.
        environment: Source of the time-of-day bonus factor.
        tracker: Re-derives state and publishes changes after each action.
        config: Simulation configuration.
        rng: Seeded random generator for health events.
    """

    def __init__(
        self,
        pet: Bonsai,
        environment: Environment,
        tracker: StateTracker,
        config: SimulationConfig,
        rng: Generator,
    ) -> None:
        self.pet = pet
        self.environment = environment
        self.tracker = tracker
        self.config = config
        self.rng = rng

    def perform(self, name: str) -> None:
        """Apply the named action once.

        Raises:
            ConfigurationError: If the action name is unknown.
        """
        spec = lookup_action(name)
        pet = self.pet

        if spec.min_energy is not None and pet.stats.energy <= spec.min_energy:
            self._reject(spec, f"{spec.label} needs more than {spec.min_energy:.0f} energy.")
            return
        if spec.item is not None and not pet.inventory.use(spec.item):
            self._reject(spec, f"No {spec.item.replace('_', ' ')} left in the inventory.")
            return

        mood_before = self.tracker.derived.mood
        factor = self.environment.bonus_factor
        for stat, delta in spec.primary.items():
            pet.stats.adjust(stat, delta * factor)
        for stat, delta in spec.side.items():
            pet.stats.adjust(stat, delta)

        pet.add_experience(spec.experience, mood_before)
        pet.set_activity(spec.activity, self.config.activity_ticks)
        self._roll_health_events(spec)

        self.tracker.refresh()
        self._notify_bonus(spec, factor)

    def buy(self, item_id: str, quantity: int = 1) -> bool:
        """Buy food items with Bonsai Bills.

        A purchase the wallet cannot cover is rejected with a warning
        notification and changes nothing.

        Returns:
            True if the items were bought.

        Raises:
            ConfigurationError: If the item is not sold or ``quantity``
                is not positive.
        """
        price = inventory.SHOP_PRICES.get(item_id)
        if price is None or quantity < 1:
            log.error("invalid purchase", item=item_id, quantity=quantity)
            raise ConfigurationError(f"cannot buy {quantity!r} of {item_id!r}")

        cost = price * quantity
        label = item_id.replace("_", " ")
        pet = self.pet
        if not pet.wallet.spend(cost):
            log.warning("purchase rejected", item=item_id, cost=cost, bills=pet.wallet.bills)
            self.tracker.bus.publish(
                Notification(
                    title="Purchase unavailable",
                    message=f"{quantity} {label} costs {cost} bills, "
                    f"you have {pet.wallet.bills}.",
                    severity=Severity.WARNING,
                ),
            )
            return False

        pet.inventory.add(item_id, quantity)
        log.info("item bought", item=item_id, quantity=quantity, cost=cost)
        self.tracker.bus.publish(
            Notification(
                title="Purchase",
                message=f"Bought {quantity} {label} for {cost} bills.",
            ),
        )
        return True

    # -- Named shortcuts --

    def water(self) -> None:
        self.perform("water")

    def feed(self, variant: str = BASIC_FERTILIZER) -> None:
        self.perform(f"feed:{variant}")

    def prune(self) -> None:
        self.perform("prune")

    def rest(self) -> None:
        self.perform("rest")

    def fertilize(self) -> None:
        self.perform("fertilize")

    def clean(self) -> None:
        self.perform("clean")

    def exercise(self) -> None:
        self.perform("exercise")

    def train(self) -> None:
        self.perform("train")

    def play(self) -> None:
        self.perform("play")

    def meditate(self) -> None:
        self.perform("meditate")

    # -- Private helpers --

    def _roll_health_events(self, spec: ActionSpec) -> None:
        health = self.pet.health
        if spec.cure_chance and not health.is_healthy:
            if float(self.rng.random()) < spec.cure_chance:
                health.cure()

        risk = spec.risk
        if risk is None:
            return
        if risk.energy_below is not None and self.pet.stats.energy >= risk.energy_below:
            return
        if float(self.rng.random()) < risk.chance:
            health.force_onset(risk.condition)

    def _notify_bonus(self, spec: ActionSpec, factor: float) -> None:
        if factor > 1.0:
            self.tracker.bus.publish(
                Notification(
                    title=f"{spec.label} Bonus",
                    message=f"{spec.label} at this time of day is especially effective!",
                ),
            )
        elif factor < 1.0:
            self.tracker.bus.publish(
                Notification(
                    title=f"{spec.label} Penalty",
                    message=f"{spec.label} at night is less effective.",
                    severity=Severity.WARNING,
                ),
            )

    def _reject(self, spec: ActionSpec, message: str) -> None:
        log.warning("action rejected", action=spec.name, reason=message)
        self.tracker.bus.publish(
            Notification(
                title=f"{spec.label} unavailable",
                message=message,
                severity=Severity.WARNING,
            ),
        )
